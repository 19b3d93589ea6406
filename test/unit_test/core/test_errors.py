"""Unit tests for the domain error hierarchy."""

import pytest

from book_network.core.errors import (
    AccountDisabledError,
    AccountLockedError,
    AuthenticationError,
    BadCredentialsError,
    BookNetworkError,
    ConflictError,
    EmailAlreadyExistsError,
    EmailDeliveryError,
    EntityNotFoundError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingDefaultRoleError,
    OperationNotPermittedError,
    ReservationConflictError,
)


class TestStatusCodes:
    @pytest.mark.parametrize(
        "error, status_code",
        [
            (EntityNotFoundError("book", 1), 404),
            (InvalidTokenError(), 404),
            (OperationNotPermittedError("nope"), 403),
            (EmailAlreadyExistsError("a@b.io"), 409),
            (ReservationConflictError(), 409),
            (ExpiredTokenError(), 400),
            (BadCredentialsError(), 401),
            (AccountDisabledError(), 401),
            (AccountLockedError(), 401),
            (EmailDeliveryError("a@b.io", "HTTP 500"), 502),
        ],
    )
    def test_status_code(self, error: BookNetworkError, status_code: int):
        assert error.status_code == status_code
        assert isinstance(error, BookNetworkError)


class TestMessages:
    def test_entity_not_found_with_id(self):
        error = EntityNotFoundError("book", 42)
        assert error.message == "No book found with the ID : 42"
        assert error.identifier == 42

    def test_entity_not_found_custom_message(self):
        error = EntityNotFoundError("user", message="User not found")
        assert str(error) == "User not found"

    def test_email_already_exists(self):
        error = EmailAlreadyExistsError("taken@example.com")
        assert error.email == "taken@example.com"
        assert "already exists" in error.message

    def test_reservation_conflict_is_conflict(self):
        assert isinstance(ReservationConflictError(), ConflictError)
        assert ReservationConflictError().message == "You already reserved this book"

    def test_account_errors_are_authentication_errors(self):
        for error in (BadCredentialsError(), AccountDisabledError(), AccountLockedError()):
            assert isinstance(error, AuthenticationError)

    def test_email_delivery_error_keeps_recipient(self):
        error = EmailDeliveryError("to@example.com", "HTTP 401")
        assert error.recipient == "to@example.com"
        assert error.reason == "HTTP 401"
        assert "to@example.com" in error.message

    def test_missing_default_role_is_not_client_facing(self):
        error = MissingDefaultRoleError()
        assert not isinstance(error, BookNetworkError)
        assert str(error) == "User Role Not Found"
