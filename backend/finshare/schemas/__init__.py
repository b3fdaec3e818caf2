"""Pydantic schemas."""

from .financial_record import (
    FinancialRecord,
    FinancialRecordLinkageUpdate,
    FinancialRecordView,
    RecordKind,
    RecurringRule,
)
from .sharing_grant import SharingGrant, SharingGrantCreate, SharingGrantUpdate

__all__ = [
    "FinancialRecord",
    "FinancialRecordLinkageUpdate",
    "FinancialRecordView",
    "RecordKind",
    "RecurringRule",
    "SharingGrant",
    "SharingGrantCreate",
    "SharingGrantUpdate",
]
