"""Request Dependencies — caller identity and service wiring for routes.

Invariants:
    - Identity comes from gateway-set headers (X-Restaurant-Id / X-Admin-Id)
    - Missing, malformed or unknown identity raises AuthenticationRequiredError (401)
    - Services share the request's DB session
"""

from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from payouts.config import get_settings
from payouts.core.errors import AuthenticationRequiredError
from payouts.infrastructure.database import get_db
from payouts.models.admin import Admin
from payouts.models.restaurant import Restaurant
from payouts.services.withdrawal_service import WithdrawalService


def _parse_principal(raw: str | None) -> UUID | None:
    if not raw:
        return None
    try:
        return UUID(raw.strip())
    except ValueError:
        return None


async def get_current_restaurant(
    x_restaurant_id: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Restaurant:
    restaurant_id = _parse_principal(x_restaurant_id)
    if restaurant_id is None:
        raise AuthenticationRequiredError("Restaurant")
    restaurant = await db.scalar(
        select(Restaurant).where(Restaurant.id == restaurant_id),
    )
    if restaurant is None:
        raise AuthenticationRequiredError("Restaurant")
    return restaurant


async def get_current_admin(
    x_admin_id: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Admin:
    admin_id = _parse_principal(x_admin_id)
    if admin_id is None:
        raise AuthenticationRequiredError("Admin")
    admin = await db.scalar(select(Admin).where(Admin.id == admin_id))
    if admin is None:
        raise AuthenticationRequiredError("Admin")
    return admin


def get_withdrawal_service(
    db: AsyncSession = Depends(get_db),
) -> WithdrawalService:
    return WithdrawalService(
        db, commission_percent=get_settings().default_commission_percent,
    )
