"""Error Hierarchy — envelopes and status codes of typed errors."""

from order_api.core.errors import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    InvalidCredentialsError,
    NotFoundError,
    UniqueConstraintError,
    error_envelope,
)


def test_envelope_omits_details_when_absent():
    assert error_envelope("X", "msg") == {
        "success": False, "error": {"code": "X", "message": "msg"},
    }


def test_conflict_carries_field_detail():
    exc = ConflictError("EMAIL_TAKEN", "Email is already taken by another customer", "email")
    assert exc.http_status == 409
    assert exc.to_response()["error"]["details"] == {"field": "email"}


def test_status_codes():
    assert NotFoundError("CUSTOMER_NOT_FOUND", "Customer not found").http_status == 404
    assert AuthenticationError("TOKEN_EXPIRED", "Token has expired").http_status == 401
    assert InvalidCredentialsError().code == "INVALID_CREDENTIALS"
    assert UniqueConstraintError("email").http_status == 409


def test_database_error_message_is_generic():
    exc = DatabaseError("creating customer")
    assert exc.message == "Database error while creating customer"
    assert exc.http_status == 500
