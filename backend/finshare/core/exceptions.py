"""Shared exceptions module."""

from typing import Optional


class FinshareException(Exception):
    """Base exception for Finshare services."""

    pass


class PermissionException(FinshareException):
    """Exception raised when a user does not have the necessary permissions to perform an action."""

    def __init__(
        self,
        message: Optional[str] = "User does not have the right to perform this action",
    ):
        """Create a new PermissionException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class NotFoundException(FinshareException):
    """Exception raised when an object is not found."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class InvalidInputError(FinshareException):
    """Exception raised when caller supplied data is rejected before persistence."""

    def __init__(self, message: Optional[str] = "Invalid input"):
        """Create a new InvalidInputError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
