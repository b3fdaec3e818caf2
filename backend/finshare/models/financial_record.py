"""Financial record and recurring rule models."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from finshare.models._base import TimestampedBase


class FinancialRecord(TimestampedBase):
    """A single income or expense entry.

    The display name of the target is not stored here; repositories join it
    from ``target.name`` and expose it as ``target_name``.
    """

    __tablename__ = "financial_record"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    source_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("source.id", ondelete="SET NULL"), nullable=True
    )
    target_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("target.id", ondelete="SET NULL"), nullable=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    __table_args__ = (Index("idx_financial_record_user_date", "user_id", "date", "id"),)


class RecurringRule(TimestampedBase):
    """Template that materializes financial records on a schedule.

    Rules persist source and target *names*, not ids.
    """

    __tablename__ = "recurring_rule"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    source_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    target_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    recurrence_type: Mapped[str] = mapped_column(String(16), nullable=False)
    recurrence_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
