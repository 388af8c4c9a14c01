"""Tests for domain exceptions (error_code, message, details, envelope)."""

from app.domain.exceptions import (
    AccessControlException,
    AuthenticationException,
    AuthorizationException,
    ConfigurationException,
    DependencyException,
    InvalidReferenceException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.exceptions import IdentityProviderError, StoreError


def test_base_exception_default_error_code() -> None:
    """Base exception uses class name as error_code when not provided."""
    exc = AccessControlException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "AccessControlException"
    assert exc.details == {}


def test_to_dict_envelope() -> None:
    """to_dict returns the JSON error envelope with ok false."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.to_dict() == {
        "ok": False,
        "error": "VALIDATION_ERROR",
        "message": "Invalid format",
        "details": {"field": "email"},
    }


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {}


def test_authentication_exception() -> None:
    """AuthenticationException sets AUTHENTICATION_ERROR and default message."""
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_with_reason() -> None:
    """Reason is folded into the message and details."""
    exc = AuthorizationException(reason="self-delete", action="delete-identity")
    assert exc.message == "Permission denied: self-delete"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"reason": "self-delete", "action": "delete-identity"}
    assert exc.reason == "self-delete"


def test_authorization_exception_custom_message() -> None:
    exc = AuthorizationException(message="Nope")
    assert exc.message == "Nope"
    assert exc.details == {}
    assert exc.reason is None


def test_invalid_reference_exception() -> None:
    exc = InvalidReferenceException("area", ["b1"], "h1")
    assert exc.error_code == "INVALID_REFERENCE"
    assert exc.details == {
        "resource_type": "area",
        "invalid_ids": ["b1"],
        "tenant_id": "h1",
    }


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("profile", "u-1")
    assert exc.message == "profile not found: u-1"
    assert exc.error_code == "RESOURCE_NOT_FOUND"


def test_dependency_exception_details() -> None:
    exc = DependencyException("store", "down", operation="insert_grants")
    assert exc.error_code == "DEPENDENCY_ERROR"
    assert exc.details == {"dependency": "store", "operation": "insert_grants"}


def test_configuration_exception() -> None:
    exc = ConfigurationException("SUPABASE_SERVICE_ROLE_KEY")
    assert exc.error_code == "CONFIGURATION_ERROR"
    assert "SUPABASE_SERVICE_ROLE_KEY" in exc.message


def test_infrastructure_errors_are_dependency_errors() -> None:
    """StoreError and IdentityProviderError are caught as DependencyException."""
    store = StoreError("boom", status_code=500, resource="areas")
    idp = IdentityProviderError("bad", status_code=422, operation="create_user")
    assert isinstance(store, DependencyException)
    assert isinstance(idp, DependencyException)
    assert store.details["dependency"] == "store"
    assert store.details["resource"] == "areas"
    assert idp.details["operation"] == "create_user"
    assert idp.status_code == 422
