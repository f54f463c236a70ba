"""Wallet ORM — per-restaurant running balance and ordered transaction history.

Invariants:
    - Exactly one wallet per restaurant (unique restaurant_id), created on first access
    - total_balance >= 0 (enforced by core/wallet_ledger.py clamping)
    - transactions ordered by sequence (append order within the wallet)
    - status transitions: Pending -> Completed | Cancelled
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from payouts.db.base import Base


class RestaurantWallet(Base):
    __tablename__ = "restaurant_wallets"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    restaurant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    total_balance: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    total_withdrawn: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    restaurant: Mapped["Restaurant"] = relationship(
        "Restaurant", back_populates="wallet",
    )
    transactions: Mapped[list["WalletTransaction"]] = relationship(
        "WalletTransaction", back_populates="wallet",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="WalletTransaction.sequence",
    )


class WalletTransaction(Base):
    """A single ledger movement inside a wallet."""
    __tablename__ = "wallet_transactions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    wallet_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("restaurant_wallets.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    # Append position within the wallet
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Pending",
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    wallet: Mapped["RestaurantWallet"] = relationship(
        "RestaurantWallet", back_populates="transactions",
    )
