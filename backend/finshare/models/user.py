"""User model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from finshare.models._base import TimestampedBase


class User(TimestampedBase):
    """An account. Opaque identity as far as sharing is concerned."""

    __tablename__ = "user"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
