from __future__ import annotations
import enum
import uuid
from datetime import datetime
from sqlalchemy import ForeignKey, String, Integer, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db.base import Base


class Plan(str, enum.Enum):
    FREE = "free"
    PREMIUM = "premium"
    PRO = "pro"
    BUSINESS = "business"


class Subscription(Base):
    """Per-user plan and the swipe quota left in the current period."""
    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(default=uuid.uuid4, primary_key=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    plan: Mapped[str] = mapped_column(String(20), nullable=False, default=Plan.FREE.value)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")

    swipes_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    super_likes_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user: Mapped["User"] = relationship(back_populates="subscription")

    @property
    def is_metered(self) -> bool:
        # Paid plans swipe without a general limit
        return self.plan == Plan.FREE.value
