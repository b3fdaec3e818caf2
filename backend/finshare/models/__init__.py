"""Models for the application."""

from .financial_record import FinancialRecord, RecurringRule
from .sharing_grant import SharingGrant
from .source import Source, Target
from .user import User

__all__ = [
    "FinancialRecord",
    "RecurringRule",
    "SharingGrant",
    "Source",
    "Target",
    "User",
]
