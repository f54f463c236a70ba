"""Wallet Ledger — pure balance arithmetic and transaction lookup for withdrawals.

Invariants:
    - total_balance >= 0 after every mutation (clamped, never rejected)
    - total_withdrawn >= 0 after every mutation (clamped on release)
    - Balance is reserved once, at request creation; approval never deducts again
    - Functions mutate the objects they are given and perform no IO

Design Decisions:
    - Works on structural Protocols so ORM rows and plain test doubles both fit
"""

from collections.abc import Iterable
from typing import Protocol, TypeVar
from uuid import UUID

from payouts.core.domain_types import TransactionStatus, TransactionType


class WalletLike(Protocol):
    total_balance: float
    total_withdrawn: float


class TransactionLike(Protocol):
    id: UUID
    type: str
    status: str
    description: str | None


TxT = TypeVar("TxT", bound=TransactionLike)


def reserve_withdrawal(wallet: WalletLike, amount: float) -> None:
    """Deduct a requested amount from the wallet at request creation."""
    wallet.total_balance = max(0.0, (wallet.total_balance or 0.0) - amount)
    wallet.total_withdrawn = (wallet.total_withdrawn or 0.0) + amount


def release_withdrawal(wallet: WalletLike, amount: float) -> None:
    """Refund a rejected request's amount back into the wallet."""
    wallet.total_balance = (wallet.total_balance or 0.0) + amount
    wallet.total_withdrawn = max(0.0, (wallet.total_withdrawn or 0.0) - amount)


def find_withdrawal_transaction(
    transactions: Iterable[TxT],
    transaction_id: UUID | None,
    request_id: UUID,
) -> TxT | None:
    """Locate the wallet transaction created for a withdrawal request.

    Prefers the linked transaction_id; falls back to the first Pending
    withdrawal whose description mentions the request id (rows written
    before the link existed).
    """
    transactions = list(transactions)
    if transaction_id is not None:
        for tx in transactions:
            if tx.id == transaction_id:
                return tx
    needle = str(request_id)
    for tx in transactions:
        if (
            tx.type == TransactionType.WITHDRAWAL.value
            and tx.status == TransactionStatus.PENDING.value
            and needle in (tx.description or "")
        ):
            return tx
    return None


def short_reference(request_id: UUID | str) -> str:
    """Human-facing reference used in emails: last 6 chars, upper-cased."""
    return str(request_id).replace("-", "")[-6:].upper()


def created_description(request_id: UUID) -> str:
    return f"Withdrawal request created - Request ID: {request_id}"


def approved_description(request_id: UUID) -> str:
    return f"Withdrawal request approved - Request ID: {request_id}"


def refund_description(request_id: UUID) -> str:
    return f"Withdrawal request rejected - Refund for Request ID: {request_id}"
