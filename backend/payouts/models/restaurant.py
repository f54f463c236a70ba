"""Restaurant ORM — the merchant that owns a wallet and requests withdrawals.

Invariants:
    - restaurant_code is the external, human-facing identifier (unique)
    - Notification address is owner_email, falling back to email
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from payouts.db.base import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    restaurant_code: Mapped[str | None] = mapped_column(
        String(50), nullable=True, unique=True,
    )
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    owner_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    wallet: Mapped["RestaurantWallet | None"] = relationship(
        "RestaurantWallet", back_populates="restaurant", uselist=False,
    )

    @property
    def notification_email(self) -> str | None:
        return self.owner_email or self.email
