"""Domain exceptions for the access-control service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AccessControlException(Exception):
    """Base exception for all access-control errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

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
        """Return the JSON error envelope used by every handler."""
        return {
            "ok": False,
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AccessControlException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidReferenceException(AccessControlException):
    """Raised when submitted ids reference rows outside the target tenant."""

    def __init__(self, resource_type: str, invalid_ids: list[str], tenant_id: str) -> None:
        """Initialize with the offending ids.

        Args:
            resource_type: Type of referenced resource (e.g. 'area').
            invalid_ids: Ids that do not belong to the tenant.
            tenant_id: Tenant the ids were validated against.
        """
        super().__init__(
            f"Some {resource_type} ids do not belong to hotel {tenant_id}",
            "INVALID_REFERENCE",
            {
                "resource_type": resource_type,
                "invalid_ids": invalid_ids,
                "tenant_id": tenant_id,
            },
        )


class AuthenticationException(AccessControlException):
    """Raised when authentication fails (missing, malformed or rejected credential)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(AccessControlException):
    """Raised when an authenticated caller is denied by the authorization policy."""

    def __init__(
        self,
        reason: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional policy reason, action, and message.

        Args:
            reason: Policy reason code (e.g. 'cross-tenant', 'self-delete').
            action: Privileged action that was attempted (e.g. 'delete-identity').
            message: Human-readable message; built from reason when omitted.
        """
        if reason and message == "Permission denied":
            message = f"Permission denied: {reason}"
        details: dict[str, Any] = {}
        if reason:
            details["reason"] = reason
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)
        self.reason = reason


class ResourceNotFoundException(AccessControlException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'profile', 'identity').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DependencyException(AccessControlException):
    """Raised when the identity provider or the data store fails."""

    def __init__(self, dependency: str, message: str, **details_extra: Any) -> None:
        """Initialize with failing dependency and a caller-safe message.

        Args:
            dependency: 'identity_provider' or 'store'.
            message: Human-readable description (no provider stack traces).
            **details_extra: Optional keys merged into details (e.g. operation).
        """
        super().__init__(
            message,
            "DEPENDENCY_ERROR",
            {"dependency": dependency, **details_extra},
        )


class ConfigurationException(AccessControlException):
    """Raised when a required server-side setting is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(
            f"Server misconfigured: {setting} is not set",
            "CONFIGURATION_ERROR",
            {"setting": setting},
        )
