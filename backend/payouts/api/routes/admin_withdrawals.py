"""Admin Withdrawals — review queue, approve and reject.

Invariants:
    - Every route requires an authenticated admin (401 otherwise)
    - Only Pending requests can be approved or rejected (400 otherwise)
    - Restaurant status emails are scheduled after the change is committed
"""

import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from payouts.api.dependencies import get_current_admin, get_withdrawal_service
from payouts.core.domain_types import WithdrawalStatus
from payouts.models.admin import Admin
from payouts.models.withdrawal_request import WithdrawalRequest
from payouts.schemas.withdrawal import Pagination, WithdrawalReject
from payouts.services.withdrawal_notifications import WithdrawalNotifier, get_notifier
from payouts.services.withdrawal_service import WithdrawalService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/admin/withdrawal", tags=["admin-withdrawals"])


def _iso(dt):
    return dt.isoformat() if dt else None


def _serialize_request(req: WithdrawalRequest) -> dict:
    restaurant = req.restaurant
    admin = req.processed_by_admin
    return {
        "id": str(req.id),
        "restaurant_id": str(req.restaurant_id),
        "restaurant_name": req.restaurant_name or (
            restaurant.name if restaurant else "Unknown"
        ),
        "restaurant_code": req.restaurant_code or (
            restaurant.restaurant_code if restaurant else None
        ) or "N/A",
        "restaurant_address": (
            restaurant.address if restaurant and restaurant.address else "N/A"
        ),
        "amount": req.amount,
        "status": req.status,
        "requested_at": _iso(req.requested_at),
        "processed_at": _iso(req.processed_at),
        "processed_by": (
            {"name": admin.name, "email": admin.email} if admin else None
        ),
        "rejection_reason": req.rejection_reason,
        "created_at": _iso(req.created_at),
        "updated_at": _iso(req.updated_at),
    }


@router.get("/requests")
async def list_all_withdrawal_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: WithdrawalStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, max_length=200),
    restaurant_id: UUID | None = Query(None),
    admin: Admin = Depends(get_current_admin),
    service: WithdrawalService = Depends(get_withdrawal_service),
):
    """List requests across restaurants; search matches restaurant name or code."""
    requests, total = await service.list_requests(
        page=page, limit=limit, status=status_filter,
        restaurant_id=restaurant_id, search=search,
    )
    return {
        "requests": [_serialize_request(r) for r in requests],
        "pagination": Pagination.build(page, limit, total).model_dump(),
    }


@router.post("/{request_id}/approve")
async def approve_withdrawal_request(
    request_id: UUID,
    background_tasks: BackgroundTasks,
    admin: Admin = Depends(get_current_admin),
    service: WithdrawalService = Depends(get_withdrawal_service),
    notifier: WithdrawalNotifier = Depends(get_notifier),
):
    request = await service.approve(request_id, admin)
    logger.info(
        f"Admin {admin.id} approved withdrawal {request.id}",
        extra={"admin_id": str(admin.id), "withdrawal_request_id": str(request.id)},
    )
    background_tasks.add_task(
        notifier.notify_status_changed,
        request.restaurant.notification_email,
        WithdrawalStatus.APPROVED, request.amount, request.id,
    )
    return {
        "message": "Withdrawal request approved successfully",
        "withdrawal_request": {
            "id": str(request.id),
            "amount": request.amount,
            "status": request.status,
            "processed_at": _iso(request.processed_at),
        },
    }


@router.post("/{request_id}/reject")
async def reject_withdrawal_request(
    request_id: UUID,
    background_tasks: BackgroundTasks,
    body: WithdrawalReject | None = None,
    admin: Admin = Depends(get_current_admin),
    service: WithdrawalService = Depends(get_withdrawal_service),
    notifier: WithdrawalNotifier = Depends(get_notifier),
):
    reason = body.rejection_reason if body else None
    request = await service.reject(request_id, admin, reason)
    logger.info(
        f"Admin {admin.id} rejected withdrawal {request.id}",
        extra={"admin_id": str(admin.id), "withdrawal_request_id": str(request.id)},
    )
    background_tasks.add_task(
        notifier.notify_status_changed,
        request.restaurant.notification_email,
        WithdrawalStatus.REJECTED, request.amount, request.id,
        request.rejection_reason,
    )
    return {
        "message": "Withdrawal request rejected successfully",
        "withdrawal_request": {
            "id": str(request.id),
            "amount": request.amount,
            "status": request.status,
            "processed_at": _iso(request.processed_at),
            "rejection_reason": request.rejection_reason,
        },
    }
