"""Tests for the withdrawal cycle — pure balance availability, no IO."""

from datetime import datetime, timedelta, timezone

import pytest

from payouts.core.withdrawal_cycle import (
    AvailableBalance,
    compute_available_balance,
    compute_cycle_payout,
    cycle_window,
    order_net_payout,
)

UTC = timezone.utc
MONDAY = datetime(2026, 10, 19, tzinfo=UTC)


# --- cycle_window -------------------------------------------------------------

def test_window_midweek_starts_monday_midnight():
    start, end = cycle_window(datetime(2026, 10, 21, 15, 30, tzinfo=UTC))
    assert start == MONDAY
    assert end == datetime(2026, 10, 25, 23, 59, 59, 999999, tzinfo=UTC)


def test_window_on_sunday_belongs_to_preceding_monday():
    start, _ = cycle_window(datetime(2026, 10, 25, 22, 0, tzinfo=UTC))
    assert start == MONDAY


def test_window_at_monday_midnight_is_its_own_start():
    start, end = cycle_window(MONDAY)
    assert start == MONDAY
    assert end - start < timedelta(days=7)


def test_window_keeps_timezone_of_now():
    ist = timezone(timedelta(hours=5, minutes=30))
    start, end = cycle_window(datetime(2026, 10, 22, 9, 0, tzinfo=ist))
    assert start.tzinfo is ist
    assert end.tzinfo is ist


# --- order_net_payout ---------------------------------------------------------

def test_net_payout_applies_ten_percent_commission_after_discount():
    assert order_net_payout(200.0, 20.0) == pytest.approx(162.0)


def test_net_payout_custom_commission():
    assert order_net_payout(100.0, 0.0, commission_percent=25) == pytest.approx(75.0)


def test_net_payout_never_negative():
    assert order_net_payout(50.0, 80.0) == 0.0


def test_net_payout_treats_missing_pricing_as_zero():
    assert order_net_payout(None, None) == 0.0


def test_cycle_payout_sums_orders():
    orders = [(100.0, 0.0), (200.0, 20.0), (10.0, 50.0)]
    assert compute_cycle_payout(orders) == pytest.approx(90.0 + 162.0)


def test_cycle_payout_empty_is_zero():
    assert compute_cycle_payout([]) == 0.0


# --- AvailableBalance ---------------------------------------------------------

def test_effective_is_cycle_figure_when_larger_than_wallet():
    balance = compute_available_balance(
        100.0, MONDAY, [(1000.0, 0.0)], [300.0, None],
    )
    assert balance.cycle_payout == pytest.approx(900.0)
    assert balance.reserved == pytest.approx(300.0)
    assert balance.cycle_available == pytest.approx(600.0)
    assert balance.effective_available == pytest.approx(600.0)


def test_effective_is_wallet_when_larger_than_cycle():
    balance = compute_available_balance(800.0, MONDAY, [(1000.0, 0.0)], [500.0])
    assert balance.effective_available == pytest.approx(800.0)


def test_cycle_available_floors_at_zero_when_over_reserved():
    balance = compute_available_balance(0.0, MONDAY, [(100.0, 0.0)], [500.0])
    assert balance.cycle_available == 0.0
    assert balance.effective_available == 0.0


def test_missing_wallet_balance_counts_as_zero():
    balance = compute_available_balance(None, MONDAY, [], [])
    assert balance.wallet_balance == 0.0
    assert not balance.allows(0.01)


def test_allows_is_inclusive_of_exact_balance():
    balance = AvailableBalance(
        wallet_balance=250.0, cycle_start=MONDAY, cycle_end=MONDAY,
        cycle_payout=0.0, reserved=0.0,
    )
    assert balance.allows(250.0)
    assert not balance.allows(250.01)


def test_to_dict_rounds_money_and_serializes_window():
    balance = compute_available_balance(
        10.005, datetime(2026, 10, 20, tzinfo=UTC), [(33.333, 0.0)], [],
    )
    data = balance.to_dict()
    assert data["cycle_start"] == MONDAY.isoformat()
    assert data["cycle_payout"] == 30.0
    assert data["effective_available"] == 30.0
