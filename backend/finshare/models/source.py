"""Source and target models."""

from sqlalchemy import ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from finshare.models._base import TimestampedBase


class Source(TimestampedBase):
    """Named money source (account, wallet, employer...) owned by one user."""

    __tablename__ = "source"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        # Names are unique per owner, compared trimmed and case-insensitively
        Index("uq_source_user_name", "user_id", func.lower(func.trim(name)), unique=True),
    )


class Target(TimestampedBase):
    """Named counterpart (shop, payee, income category...) owned by one user."""

    __tablename__ = "target"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index("uq_target_user_name", "user_id", func.lower(func.trim(name)), unique=True),
    )
