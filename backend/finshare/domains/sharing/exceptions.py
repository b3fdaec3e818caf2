"""Sharing domain exceptions."""

from typing import Optional, Sequence

from finshare.core.exceptions import (
    FinshareException,
    InvalidInputError,
    NotFoundException,
    PermissionException,
)


class ScopeParseError(FinshareException):
    """Raised when a stored grant scope is not a JSON array.

    Internal: the permission meta loader absorbs it according to the
    configured fail-open policy.
    """

    pass


class RecordNotVisibleError(NotFoundException):
    """Raised when a record does not exist or is not shared with the requester.

    The message is identical in both cases so callers cannot probe for
    another user's private records.
    """

    def __init__(self, message: Optional[str] = "Record not found"):
        """Initialize with the generic not-found message."""
        super().__init__(message)


class RecurringRuleNotVisibleError(NotFoundException):
    """Raised when a recurring rule does not exist or is not shared with the requester."""

    def __init__(self, message: Optional[str] = "Recurring rule not found"):
        """Initialize with the generic not-found message."""
        super().__init__(message)


class WriteForbiddenError(PermissionException):
    """Raised when a visible record may not be mutated by the requester."""

    READ_ONLY = "read_only"
    OUT_OF_SCOPE = "out_of_scope"

    def __init__(self, reason: str, message: Optional[str] = None):
        """Initialize with the denial reason (``read_only`` or ``out_of_scope``)."""
        if message is None:
            if reason == self.OUT_OF_SCOPE:
                message = "The requested change falls outside the shared sources"
            else:
                message = "This record is shared with you as read-only"
        self.reason = reason
        super().__init__(message)


class InvalidGrantScopeError(InvalidInputError):
    """Raised when an owner supplies a scope that cannot be persisted."""

    def __init__(self, message: str, invalid_ids: Sequence[int] = ()):
        """Initialize with a message and the offending source ids, if any."""
        self.invalid_ids = list(invalid_ids)
        super().__init__(message)


class SelfShareError(InvalidInputError):
    """Raised when an owner tries to create a grant for themself."""

    def __init__(self, message: Optional[str] = "You cannot share data with yourself"):
        """Initialize with the default message."""
        super().__init__(message)
