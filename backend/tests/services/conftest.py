"""Service test fixtures — async DB, FastAPI test client and a recording notifier.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - get_notifier dependency overridden with RecordingNotifier (no SMTP)
    - Seed helpers commit through their own session so routes see the rows
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from payouts.db.base import Base
import payouts.models  # noqa: F401
from payouts.infrastructure.database import get_db, DatabaseSessionManager
import payouts.infrastructure.database as db_module
from payouts.main import app
from payouts.models.admin import Admin
from payouts.models.order import Order
from payouts.models.restaurant import Restaurant
from payouts.models.wallet import RestaurantWallet
from payouts.services.withdrawal_notifications import get_notifier
from tests.services.fake_notifier import RecordingNotifier


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(test_engine, test_session_factory, notifier):
    """FastAPI test client with DB and notifier dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed helpers ────────────────────────────────────────────────

@pytest.fixture
def seed(test_session_factory):
    """Insert rows through a short-lived session and return them."""
    async def _seed(*rows):
        async with test_session_factory() as session:
            session.add_all(rows)
            await session.commit()
        return rows[0] if len(rows) == 1 else rows
    return _seed


@pytest.fixture
def fetch(test_session_factory):
    """Read fresh state for assertions (bypasses any stale identity map)."""
    async def _fetch(model, **filters):
        async with test_session_factory() as session:
            result = await session.execute(select(model).filter_by(**filters))
            return result.scalars().all()
    return _fetch


@pytest.fixture
async def restaurant(seed):
    return await seed(Restaurant(
        name="Spice Garden",
        restaurant_code="REST000123",
        email="kitchen@spicegarden.example",
        owner_email="owner@spicegarden.example",
        address="12 Curry Lane",
    ))


@pytest.fixture
async def other_restaurant(seed):
    return await seed(Restaurant(
        name="Noodle Bar",
        restaurant_code="REST000777",
        email="noodles@restaurant.appzeto.com",
    ))


@pytest.fixture
async def admin(seed):
    return await seed(Admin(name="Asha Admin", email="asha@payouts.example"))


@pytest.fixture
def funded_wallet(seed):
    async def _fund(restaurant, balance: float):
        return await seed(RestaurantWallet(
            restaurant_id=restaurant.id,
            total_balance=balance,
            total_withdrawn=0.0,
        ))
    return _fund


@pytest.fixture
def delivered_order(seed):
    async def _order(restaurant, subtotal: float, discount: float = 0.0, when=None):
        when = when or datetime.now(timezone.utc)
        return await seed(Order(
            restaurant_id=restaurant.id,
            status="delivered",
            subtotal=subtotal,
            discount=discount,
            delivered_at=when,
            created_at=when,
        ))
    return _order
