"""Sharing grant model."""

from typing import Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from finshare.models._base import TimestampedBase


class SharingGrant(TimestampedBase):
    """Owner -> recipient sharing grant.

    ``permission_level`` is free text; it is classified into read-only or
    writable when the grant is read. ``scope`` holds a JSON array of source ids
    restricting the grant. Older rows may contain textual tokens or values that
    are not valid JSON at all.
    """

    __tablename__ = "sharing_grant"

    owner_user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permission_level: Mapped[str] = mapped_column(String(32), nullable=False, default="read")
    scope: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("owner_user_id", "recipient_user_id", name="uq_sharing_grant_pair"),
    )
