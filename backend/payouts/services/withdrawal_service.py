"""Withdrawal Service — create/approve/reject lifecycle over the wallet ledger.

Invariants:
    - Only one Pending request per restaurant
    - Amount is reserved (deducted from total_balance) at creation; approval
      only completes the transaction, rejection refunds exactly the amount
    - Each mutation is a single read-modify-write committed once
    - Business-rule violations raise PayoutsError subclasses before any write

Design Decisions:
    - No row locking or version column: two concurrent requests on one wallet
      can race and the last commit wins
    - Pure arithmetic lives in core/withdrawal_cycle.py and core/wallet_ledger.py;
      this module only reads, calls them, and writes
"""

import logging
import math
import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from payouts.core.domain_types import (
    OrderStatus, RESERVING_STATUSES, TransactionStatus, TransactionType,
    WithdrawalStatus,
)
from payouts.core.errors import (
    ErrorContext, InsufficientBalanceError, InvalidAmountError,
    InvalidStatusTransitionError, PendingRequestExistsError,
    ResourceNotFoundError,
)
from payouts.core.wallet_ledger import (
    approved_description, created_description, find_withdrawal_transaction,
    refund_description, release_withdrawal, reserve_withdrawal,
)
from payouts.core.withdrawal_cycle import (
    AvailableBalance, DEFAULT_COMMISSION_PERCENT, compute_available_balance,
    cycle_window,
)
from payouts.models.admin import Admin
from payouts.models.order import Order
from payouts.models.restaurant import Restaurant
from payouts.models.wallet import RestaurantWallet, WalletTransaction
from payouts.models.withdrawal_request import WithdrawalRequest

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WithdrawalService:
    """Withdrawal lifecycle bound to one request-scoped DB session."""

    def __init__(
        self,
        db: AsyncSession,
        commission_percent: float = DEFAULT_COMMISSION_PERCENT,
    ):
        self.db = db
        self.commission_percent = commission_percent

    # ─── Wallet ──────────────────────────────────────────────────

    async def get_or_create_wallet(self, restaurant_id: UUID) -> RestaurantWallet:
        """Return the restaurant's wallet, adding an empty one if missing (not committed)."""
        result = await self.db.execute(
            select(RestaurantWallet).where(
                RestaurantWallet.restaurant_id == restaurant_id,
            ),
        )
        wallet = result.scalar_one_or_none()
        if wallet is None:
            wallet = RestaurantWallet(
                restaurant_id=restaurant_id,
                total_balance=0.0,
                total_withdrawn=0.0,
                transactions=[],
            )
            self.db.add(wallet)
            await self.db.flush()
            logger.info(
                "Wallet created", extra={"restaurant_id": str(restaurant_id)},
            )
        return wallet

    async def compute_available_balance(
        self,
        restaurant_id: UUID,
        wallet: RestaurantWallet | None = None,
        now: datetime | None = None,
    ) -> AvailableBalance:
        """Effective balance: max(wallet balance, cycle payout - reserved)."""
        now = now or _utcnow()
        if wallet is None:
            wallet = await self.get_or_create_wallet(restaurant_id)
        start, end = cycle_window(now)

        orders = await self.db.execute(
            select(Order.subtotal, Order.discount).where(
                Order.restaurant_id == restaurant_id,
                Order.status == OrderStatus.DELIVERED.value,
                or_(
                    and_(Order.delivered_at >= start, Order.delivered_at <= end),
                    and_(Order.created_at >= start, Order.created_at <= end),
                ),
            ),
        )
        reserved = await self.db.execute(
            select(WithdrawalRequest.amount).where(
                WithdrawalRequest.restaurant_id == restaurant_id,
                WithdrawalRequest.status.in_([s.value for s in RESERVING_STATUSES]),
            ),
        )
        return compute_available_balance(
            wallet.total_balance,
            now,
            [(row.subtotal, row.discount) for row in orders],
            reserved.scalars().all(),
            self.commission_percent,
        )

    # ─── Lifecycle ───────────────────────────────────────────────

    async def create_request(
        self,
        restaurant: Restaurant,
        amount: float | None,
        now: datetime | None = None,
    ) -> WithdrawalRequest:
        """Open a Pending request and reserve its amount from the wallet."""
        now = now or _utcnow()
        ctx = ErrorContext(restaurant_id=str(restaurant.id))
        if amount is None or not math.isfinite(amount) or amount <= 0:
            raise InvalidAmountError(ctx)

        if await self._has_pending_request(restaurant.id):
            raise PendingRequestExistsError(ctx)

        wallet = await self.get_or_create_wallet(restaurant.id)
        balance = await self.compute_available_balance(
            restaurant.id, wallet=wallet, now=now,
        )
        if not balance.allows(amount):
            raise InsufficientBalanceError(balance.effective_available, ctx)

        request = WithdrawalRequest(
            id=uuid.uuid4(),
            restaurant_id=restaurant.id,
            amount=amount,
            status=WithdrawalStatus.PENDING.value,
            restaurant_name=restaurant.name or "Unknown",
            restaurant_code=restaurant.restaurant_code or str(restaurant.id),
            requested_at=now,
            created_at=now,
        )
        self.db.add(request)

        tx = self._append_transaction(
            wallet, amount, TransactionType.WITHDRAWAL,
            TransactionStatus.PENDING, created_description(request.id), now,
        )
        reserve_withdrawal(wallet, amount)
        request.transaction_id = tx.id

        await self.db.commit()
        logger.info(
            f"Withdrawal request created for {amount:.2f}, balance reserved",
            extra={
                "restaurant_id": str(restaurant.id),
                "withdrawal_request_id": str(request.id),
                "transaction_id": str(tx.id),
                "amount": amount,
            },
        )
        return request

    async def approve(
        self, request_id: UUID, admin: Admin, now: datetime | None = None,
    ) -> WithdrawalRequest:
        """Pending -> Approved. Completes the reserved transaction; no balance change."""
        now = now or _utcnow()
        request = await self._get_pending_request(request_id, admin)
        wallet = await self.get_or_create_wallet(request.restaurant_id)

        request.status = WithdrawalStatus.APPROVED.value
        request.processed_at = now
        request.processed_by = admin.id

        tx = find_withdrawal_transaction(
            wallet.transactions, request.transaction_id, request.id,
        )
        if tx is not None:
            tx.status = TransactionStatus.COMPLETED.value
            tx.processed_at = now
        else:
            tx = self._append_transaction(
                wallet, request.amount, TransactionType.WITHDRAWAL,
                TransactionStatus.COMPLETED, approved_description(request.id),
                now, processed_at=now,
            )
            request.transaction_id = tx.id
            logger.warning(
                "Reserved transaction not found on approval, recorded a new one",
                extra={"withdrawal_request_id": str(request.id)},
            )

        await self.db.commit()
        logger.info(
            "Withdrawal request approved",
            extra={
                "withdrawal_request_id": str(request.id),
                "admin_id": str(admin.id),
                "amount": request.amount,
            },
        )
        return request

    async def reject(
        self,
        request_id: UUID,
        admin: Admin,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> WithdrawalRequest:
        """Pending -> Rejected. Cancels the reserved transaction and refunds the amount."""
        now = now or _utcnow()
        request = await self._get_pending_request(request_id, admin)
        wallet = await self.get_or_create_wallet(request.restaurant_id)

        request.status = WithdrawalStatus.REJECTED.value
        request.processed_at = now
        request.processed_by = admin.id
        if reason:
            request.rejection_reason = reason

        tx = find_withdrawal_transaction(
            wallet.transactions, request.transaction_id, request.id,
        )
        if tx is not None:
            tx.status = TransactionStatus.CANCELLED.value
            tx.processed_at = now
        else:
            self._append_transaction(
                wallet, request.amount, TransactionType.REFUND,
                TransactionStatus.COMPLETED, refund_description(request.id),
                now, processed_at=now,
            )
        release_withdrawal(wallet, request.amount)

        await self.db.commit()
        logger.info(
            "Withdrawal request rejected, balance refunded",
            extra={
                "withdrawal_request_id": str(request.id),
                "admin_id": str(admin.id),
                "amount": request.amount,
            },
        )
        return request

    # ─── Listing ─────────────────────────────────────────────────

    async def list_requests(
        self,
        page: int = 1,
        limit: int = 20,
        status: WithdrawalStatus | None = None,
        restaurant_id: UUID | None = None,
        search: str | None = None,
    ) -> tuple[list[WithdrawalRequest], int]:
        """Newest-first page of requests plus the total matching count."""
        filters = []
        if restaurant_id is not None:
            filters.append(WithdrawalRequest.restaurant_id == restaurant_id)
        if status is not None:
            filters.append(WithdrawalRequest.status == status.value)
        if search and search.strip():
            term = search.strip().lower()
            filters.append(or_(
                func.lower(WithdrawalRequest.restaurant_name).contains(
                    term, autoescape=True,
                ),
                func.lower(WithdrawalRequest.restaurant_code).contains(
                    term, autoescape=True,
                ),
            ))

        total = await self.db.scalar(
            select(func.count()).select_from(WithdrawalRequest).where(*filters),
        )
        result = await self.db.execute(
            select(WithdrawalRequest)
            .where(*filters)
            .order_by(WithdrawalRequest.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit),
        )
        return list(result.scalars().all()), total or 0

    # ─── Helpers ─────────────────────────────────────────────────

    async def _has_pending_request(self, restaurant_id: UUID) -> bool:
        result = await self.db.execute(
            select(WithdrawalRequest.id).where(
                WithdrawalRequest.restaurant_id == restaurant_id,
                WithdrawalRequest.status == WithdrawalStatus.PENDING.value,
            ).limit(1),
        )
        return result.first() is not None

    async def _get_pending_request(
        self, request_id: UUID, admin: Admin,
    ) -> WithdrawalRequest:
        ctx = ErrorContext(
            admin_id=str(admin.id), withdrawal_request_id=str(request_id),
        )
        result = await self.db.execute(
            select(WithdrawalRequest).where(WithdrawalRequest.id == request_id),
        )
        request = result.scalar_one_or_none()
        if request is None:
            raise ResourceNotFoundError("Withdrawal request", str(request_id), ctx)
        if request.status != WithdrawalStatus.PENDING.value:
            raise InvalidStatusTransitionError(request.status, ctx)
        return request

    @staticmethod
    def _append_transaction(
        wallet: RestaurantWallet,
        amount: float,
        tx_type: TransactionType,
        tx_status: TransactionStatus,
        description: str,
        now: datetime,
        processed_at: datetime | None = None,
    ) -> WalletTransaction:
        tx = WalletTransaction(
            id=uuid.uuid4(),
            sequence=len(wallet.transactions),
            amount=amount,
            type=tx_type.value,
            status=tx_status.value,
            description=description,
            created_at=now,
            processed_at=processed_at,
        )
        wallet.transactions.append(tx)
        return tx
