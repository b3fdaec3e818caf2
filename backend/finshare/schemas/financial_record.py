"""Financial record schemas."""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecordKind(str, Enum):
    """Direction of money flow."""

    INCOME = "income"
    EXPENSE = "expense"


class FinancialRecord(BaseModel):
    """A financial record as read from storage.

    ``source_id`` and ``target_id`` accept ints or numeric strings because some
    stores hand identifiers back as text.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    owner_id: int = Field(validation_alias="user_id")
    kind: RecordKind
    source_id: Optional[Union[int, str]] = None
    target_id: Optional[Union[int, str]] = None
    target_name: Optional[str] = None
    amount: Decimal
    date: dt.date
    description: Optional[str] = None

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value):
        """Accept mixed-case kinds such as ``Income`` or `` expense ``."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


class FinancialRecordView(FinancialRecord):
    """A record that survived visibility filtering for a requester."""

    editable: bool


class RecurringRule(BaseModel):
    """Recurring rule as read from storage (names, not ids)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    owner_id: int = Field(validation_alias="user_id")
    kind: RecordKind
    source_name: Optional[str] = None
    target_name: Optional[str] = None
    amount: Decimal
    recurrence_type: str
    recurrence_interval: int = 1
    start_date: dt.date
    end_date: Optional[dt.date] = None

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value):
        """Accept mixed-case kinds."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


class FinancialRecordLinkageUpdate(BaseModel):
    """Proposed change to the fields that decide scope membership.

    Only fields explicitly set are applied; an explicit None clears the link.
    """

    source_id: Optional[Union[int, str]] = None
    target_id: Optional[Union[int, str]] = None
    target_name: Optional[str] = None
