"""Domain exceptions for the BYKI admin application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class BykiException(Exception):
    """Base exception for all BYKI admin application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BykiException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(BykiException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(BykiException):
    """Raised when the signed-in account lacks an admin role."""

    def __init__(
        self,
        message: str = "Unauthorized: Admin access required",
        role: str | None = None,
    ) -> None:
        """Initialize with message and the role that was rejected.

        Args:
            message: Human-readable message shown on the sign-in screen.
            role: Role resolved for the account, if any.
        """
        details = {"role": role} if role else {}
        super().__init__(message, "AUTHORIZATION_ERROR", details)


class ResourceNotFoundException(BykiException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'order', 'booking').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreNotConfiguredException(BykiException):
    """Raised when an operation needs Firestore but no credentials were configured."""

    def __init__(self) -> None:
        super().__init__(
            message="Firestore not configured (set FIREBASE_SERVICE_ACCOUNT_KEY or PATH)",
            error_code="SERVICE_UNAVAILABLE",
        )


class StorageNotConfiguredException(BykiException):
    """Raised when an image operation runs without FIREBASE_STORAGE_BUCKET."""

    def __init__(self) -> None:
        super().__init__(
            message="File storage not configured (set FIREBASE_STORAGE_BUCKET)",
            error_code="SERVICE_UNAVAILABLE",
        )


class AppStateClosedException(BykiException):
    """Raised when a state transition is applied after shutdown."""

    def __init__(self) -> None:
        super().__init__("Application state store is closed", "APP_STATE_CLOSED")
