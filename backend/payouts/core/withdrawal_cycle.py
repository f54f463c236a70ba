"""Withdrawal Cycle — pure computation of the effective available balance.

A restaurant may withdraw the greater of two figures:
    (a) the stored wallet balance, and
    (b) the current cycle's payout: net revenue of orders delivered in the
        Monday–Sunday window containing `now`, minus amounts already reserved
        by Pending/Approved withdrawal requests.

Invariants:
    - Cycle window is [Monday 00:00:00.000000, Sunday 23:59:59.999999] in the tz of `now`
    - Per-order net payout is never negative
    - cycle_available and effective_available are never negative
    - No IO: callers fetch orders and reserved amounts and pass them in

Design Decisions:
    - Commission is a flat percentage fallback (10% unless configured), the
      same default the finance page applies when no per-restaurant rate exists
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, time, timedelta

DEFAULT_COMMISSION_PERCENT = 10.0


@dataclass(frozen=True)
class AvailableBalance:
    """Breakdown of the balance check performed on withdrawal creation."""
    wallet_balance: float
    cycle_start: datetime
    cycle_end: datetime
    cycle_payout: float
    reserved: float

    @property
    def cycle_available(self) -> float:
        return max(0.0, self.cycle_payout - self.reserved)

    @property
    def effective_available(self) -> float:
        return max(self.wallet_balance, self.cycle_available)

    def allows(self, amount: float) -> bool:
        return amount <= self.effective_available

    def to_dict(self) -> dict:
        return {
            "wallet_balance": round(self.wallet_balance, 2),
            "cycle_start": self.cycle_start.isoformat(),
            "cycle_end": self.cycle_end.isoformat(),
            "cycle_payout": round(self.cycle_payout, 2),
            "reserved": round(self.reserved, 2),
            "cycle_available": round(self.cycle_available, 2),
            "effective_available": round(self.effective_available, 2),
        }


def cycle_window(now: datetime) -> tuple[datetime, datetime]:
    """Return the Monday–Sunday window containing `now` (inclusive bounds)."""
    monday = now.date() - timedelta(days=now.weekday())
    start = datetime.combine(monday, time.min, tzinfo=now.tzinfo)
    end = datetime.combine(monday + timedelta(days=6), time.max, tzinfo=now.tzinfo)
    return start, end


def order_net_payout(
    subtotal: float | None,
    discount: float | None,
    commission_percent: float = DEFAULT_COMMISSION_PERCENT,
) -> float:
    """Food price after discount, less the platform commission. Never negative."""
    food_price = (subtotal or 0.0) - (discount or 0.0)
    commission = food_price * commission_percent / 100
    return max(0.0, food_price - commission)


def compute_cycle_payout(
    orders: Iterable[tuple[float | None, float | None]],
    commission_percent: float = DEFAULT_COMMISSION_PERCENT,
) -> float:
    """Sum net payout over (subtotal, discount) pairs of delivered orders."""
    return sum(
        (order_net_payout(subtotal, discount, commission_percent)
         for subtotal, discount in orders),
        0.0,
    )


def compute_available_balance(
    wallet_balance: float | None,
    now: datetime,
    delivered_orders: Iterable[tuple[float | None, float | None]],
    reserved_amounts: Iterable[float | None],
    commission_percent: float = DEFAULT_COMMISSION_PERCENT,
) -> AvailableBalance:
    """Assemble the full balance breakdown for the cycle containing `now`."""
    start, end = cycle_window(now)
    return AvailableBalance(
        wallet_balance=wallet_balance or 0.0,
        cycle_start=start,
        cycle_end=end,
        cycle_payout=compute_cycle_payout(delivered_orders, commission_percent),
        reserved=sum((a or 0.0 for a in reserved_amounts), 0.0),
    )
