"""Custom exceptions for the hookshot application."""


class HookshotException(Exception):
    """Base exception for all hookshot errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        """Initialize exception with message and optional details.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationException(HookshotException):
    """Data validation failed."""

    pass


class InvalidSubscriptionException(ValidationException):
    """Webhook registration rejected (empty or over-long fields)."""

    pass


class PayloadException(HookshotException):
    """Notification payload cannot be built from the given event."""

    pass


class StorageException(HookshotException):
    """Exceptions related to storage operations."""

    pass


class DatabaseException(StorageException):
    """Database operation failed."""

    pass


class ConfigurationException(HookshotException):
    """Configuration error."""

    pass


class APIException(HookshotException):
    """API-related exceptions."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            message: Error message
            status_code: HTTP status code
            details: Additional error details
        """
        super().__init__(message, details)
        self.status_code = status_code


class NotFoundException(APIException):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found", details: dict | None = None) -> None:
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404, details=details)


class BadRequestException(APIException):
    """Bad request."""

    def __init__(self, message: str = "Bad request", details: dict | None = None) -> None:
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400, details=details)
