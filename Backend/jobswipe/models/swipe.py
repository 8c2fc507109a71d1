# In backend/jobswipe/models/swipe.py

import enum
import uuid
from datetime import datetime
from sqlalchemy import ForeignKey, String, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from jobswipe.db.base import Base


class SwipeDirection(str, enum.Enum):
    PASS = "pass"
    INTERESTED = "interested"
    SUPER_INTERESTED = "super_interested"

    @classmethod
    def parse(cls, value) -> "SwipeDirection":
        """Accepts the enum values and the deck's left/right/up gestures."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            value = GESTURES.get(value.lower(), value.lower())
        return cls(value)

    @property
    def is_positive(self) -> bool:
        return self in (SwipeDirection.INTERESTED, SwipeDirection.SUPER_INTERESTED)


GESTURES = {
    "left": SwipeDirection.PASS.value,
    "right": SwipeDirection.INTERESTED.value,
    "up": SwipeDirection.SUPER_INTERESTED.value,
}

POSITIVE_DIRECTIONS = [SwipeDirection.INTERESTED.value, SwipeDirection.SUPER_INTERESTED.value]


class Swipe(Base):
    """
    One decision in either direction of interest.

    A candidate swiping a job is stored with the job's poster as receiver; a
    recruiter swiping a candidate is stored with the candidate as receiver.
    """
    __tablename__ = "swipes"
    __table_args__ = (
        UniqueConstraint("sender_id", "receiver_id", "job_id", name="uq_swipe_sender_receiver_job"),
    )

    id: Mapped[uuid.UUID] = mapped_column(default=uuid.uuid4, primary_key=True)

    sender_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    receiver_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    job_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), index=True)

    direction: Mapped[str] = mapped_column(String(20), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
