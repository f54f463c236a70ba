"""Domain Types — the status/type enums stored in the ledger.

Invariants:
    - Status values are stored verbatim in the DB (capitalised, as shown to users)
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum


class WithdrawalStatus(str, Enum):
    """Withdrawal request lifecycle. Only Pending is mutable."""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    PROCESSED = "Processed"


class TransactionType(str, Enum):
    WITHDRAWAL = "withdrawal"
    REFUND = "refund"


class TransactionStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class OrderStatus(str, Enum):
    """Subset of order states the payout cycle cares about."""
    PLACED = "placed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Requests whose amount is already committed against the cycle payout
RESERVING_STATUSES = (WithdrawalStatus.PENDING, WithdrawalStatus.APPROVED)
