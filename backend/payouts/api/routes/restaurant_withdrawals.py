"""Restaurant Withdrawals — restaurant-scoped withdrawal requests and wallet views.

Invariants:
    - Every route requires an authenticated restaurant (401 otherwise)
    - A restaurant only ever sees its own requests and wallet
    - The admin alert email is scheduled after the request is committed
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from payouts.api.dependencies import get_current_restaurant, get_withdrawal_service
from payouts.core.domain_types import WithdrawalStatus
from payouts.models.restaurant import Restaurant
from payouts.models.withdrawal_request import WithdrawalRequest
from payouts.schemas.withdrawal import Pagination, WithdrawalCreate
from payouts.services.withdrawal_notifications import WithdrawalNotifier, get_notifier
from payouts.services.withdrawal_service import WithdrawalService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/restaurant", tags=["restaurant-withdrawals"])


def _iso(dt):
    return dt.isoformat() if dt else None


def _serialize_request(req: WithdrawalRequest) -> dict:
    return {
        "id": str(req.id),
        "amount": req.amount,
        "status": req.status,
        "requested_at": _iso(req.requested_at),
        "processed_at": _iso(req.processed_at),
        "rejection_reason": req.rejection_reason,
        "created_at": _iso(req.created_at),
        "updated_at": _iso(req.updated_at),
    }


@router.post("/withdrawal/request", status_code=status.HTTP_201_CREATED)
async def create_withdrawal_request(
    body: WithdrawalCreate,
    background_tasks: BackgroundTasks,
    restaurant: Restaurant = Depends(get_current_restaurant),
    service: WithdrawalService = Depends(get_withdrawal_service),
    notifier: WithdrawalNotifier = Depends(get_notifier),
):
    """Request a cash-out; the amount is deducted from the wallet immediately."""
    request = await service.create_request(restaurant, body.amount)
    logger.info(
        f"Restaurant {restaurant.id} requested withdrawal {request.id}",
        extra={"restaurant_id": str(restaurant.id), "withdrawal_request_id": str(request.id)},
    )
    background_tasks.add_task(
        notifier.notify_request_created,
        request.restaurant_name, request.amount, request.id,
    )
    return {
        "message": "Withdrawal request created successfully",
        "withdrawal_request": {
            "id": str(request.id),
            "amount": request.amount,
            "status": request.status,
            "requested_at": _iso(request.requested_at),
            "created_at": _iso(request.created_at),
        },
    }


@router.get("/withdrawal/requests")
async def list_withdrawal_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: WithdrawalStatus | None = Query(None, alias="status"),
    restaurant: Restaurant = Depends(get_current_restaurant),
    service: WithdrawalService = Depends(get_withdrawal_service),
):
    """List this restaurant's requests, newest first."""
    requests, total = await service.list_requests(
        page=page, limit=limit, status=status_filter,
        restaurant_id=restaurant.id,
    )
    return {
        "requests": [_serialize_request(r) for r in requests],
        "pagination": Pagination.build(page, limit, total).model_dump(),
    }


@router.get("/withdrawal/balance")
async def get_available_balance(
    restaurant: Restaurant = Depends(get_current_restaurant),
    service: WithdrawalService = Depends(get_withdrawal_service),
):
    """Breakdown of what can be withdrawn right now."""
    balance = await service.compute_available_balance(restaurant.id)
    await service.db.commit()
    return balance.to_dict()


@router.get("/wallet")
async def get_wallet(
    limit: int = Query(20, ge=1, le=100),
    restaurant: Restaurant = Depends(get_current_restaurant),
    service: WithdrawalService = Depends(get_withdrawal_service),
):
    """Wallet totals and the most recent transactions (newest first)."""
    wallet = await service.get_or_create_wallet(restaurant.id)
    await service.db.commit()
    recent = list(reversed(wallet.transactions))[:limit]
    return {
        "restaurant_id": str(restaurant.id),
        "total_balance": round(wallet.total_balance, 2),
        "total_withdrawn": round(wallet.total_withdrawn, 2),
        "transactions": [
            {
                "id": str(tx.id),
                "amount": tx.amount,
                "type": tx.type,
                "status": tx.status,
                "description": tx.description,
                "created_at": _iso(tx.created_at),
                "processed_at": _iso(tx.processed_at),
            }
            for tx in recent
        ],
    }
