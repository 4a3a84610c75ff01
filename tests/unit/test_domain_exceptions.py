"""Tests for domain exceptions (error_code, message, details)."""

import pytest

from byki_admin.domain.exceptions import (
    AppStateClosedException,
    AuthenticationException,
    AuthorizationException,
    BykiException,
    ResourceNotFoundException,
    StorageNotConfiguredException,
    StoreNotConfiguredException,
    ValidationException,
)


def test_byki_exception_default_error_code() -> None:
    """Base BykiException uses class name as error_code when not provided."""
    exc = BykiException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "BykiException"
    assert exc.details == {}


def test_byki_exception_custom_error_code_and_details() -> None:
    exc = BykiException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("File too large", field="file")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "file"}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.details == {}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_records_role() -> None:
    """The rejected role is kept in details for the sign-in screen."""
    exc = AuthorizationException(role="user")
    assert exc.message == "Unauthorized: Admin access required"
    assert exc.error_code == "AUTHORIZATION_ERROR"
    assert exc.details == {"role": "user"}


def test_authorization_exception_without_role() -> None:
    assert AuthorizationException().details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("order", "o-123")
    assert exc.message == "order not found: o-123"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "order", "resource_id": "o-123"}


@pytest.mark.parametrize(
    ("exc", "error_code"),
    [
        (StoreNotConfiguredException(), "SERVICE_UNAVAILABLE"),
        (StorageNotConfiguredException(), "SERVICE_UNAVAILABLE"),
        (AppStateClosedException(), "APP_STATE_CLOSED"),
    ],
)
def test_unavailable_exceptions(exc: BykiException, error_code: str) -> None:
    assert exc.error_code == error_code
    assert isinstance(exc, BykiException)
