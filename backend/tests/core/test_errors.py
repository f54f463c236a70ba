"""Tests for the error hierarchy — status codes and response envelope."""

from payouts.core.errors import (
    AuthenticationRequiredError,
    DatabaseError,
    ErrorContext,
    InsufficientBalanceError,
    InvalidStatusTransitionError,
    PendingRequestExistsError,
    ResourceNotFoundError,
)


def test_authentication_error_is_401():
    err = AuthenticationRequiredError("Restaurant")
    assert err.http_status == 401
    assert err.message == "Restaurant authentication required"


def test_business_rule_errors_are_400():
    assert PendingRequestExistsError().http_status == 400
    assert InvalidStatusTransitionError("Approved").http_status == 400
    assert InsufficientBalanceError(12.5).http_status == 400


def test_insufficient_balance_message_shows_two_decimals():
    err = InsufficientBalanceError(1234.5)
    assert err.message == "Insufficient balance. Available balance: Rs 1234.50"


def test_status_transition_message_names_current_status():
    assert InvalidStatusTransitionError("Rejected").message == (
        "Withdrawal request is already Rejected"
    )


def test_not_found_is_404_and_database_error_is_500():
    assert ResourceNotFoundError("Withdrawal request", "abc").http_status == 404
    assert DatabaseError("boom", "commit").http_status == 500


def test_to_response_envelope_carries_context():
    ctx = ErrorContext(restaurant_id="r-1", withdrawal_request_id="w-1")
    body = PendingRequestExistsError(ctx).to_response()
    assert body["error"]["code"] == "PENDING_REQUEST_EXISTS"
    assert body["error"]["category"] == "business_rule"
    assert body["error"]["context"]["restaurant_id"] == "r-1"
    assert body["error"]["context"]["withdrawal_request_id"] == "w-1"
    assert "timestamp" in body["error"]
