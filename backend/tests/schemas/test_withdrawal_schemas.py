"""Withdrawal schema validation — amount bounds and rejection reason cleanup."""

import pytest
from pydantic import ValidationError

from payouts.schemas.withdrawal import Pagination, WithdrawalCreate, WithdrawalReject


def test_amount_accepts_positive_number():
    assert WithdrawalCreate(amount=150.5).amount == 150.5


def test_amount_coerces_numeric_string():
    assert WithdrawalCreate(amount="99.90").amount == pytest.approx(99.9)


@pytest.mark.parametrize("amount", [0, -10, "abc", float("nan"), float("inf")])
def test_amount_rejects_non_positive_or_non_finite(amount):
    with pytest.raises(ValidationError):
        WithdrawalCreate(amount=amount)


@pytest.mark.parametrize("amount", [True, False])
def test_amount_refuses_booleans(amount):
    with pytest.raises(ValidationError):
        WithdrawalCreate(amount=amount)


def test_amount_is_required():
    with pytest.raises(ValidationError):
        WithdrawalCreate()


def test_rejection_reason_is_optional():
    assert WithdrawalReject().rejection_reason is None


def test_rejection_reason_is_stripped():
    body = WithdrawalReject(rejection_reason="  bank details mismatch  ")
    assert body.rejection_reason == "bank details mismatch"


def test_blank_rejection_reason_becomes_none():
    assert WithdrawalReject(rejection_reason="   ").rejection_reason is None


def test_rejection_reason_max_length_enforced():
    with pytest.raises(ValidationError):
        WithdrawalReject(rejection_reason="x" * 1001)


def test_pagination_pages_rounds_up():
    assert Pagination.build(page=1, limit=20, total=41).pages == 3
    assert Pagination.build(page=1, limit=20, total=0).pages == 0
