# backend/jobswipe/models/match.py

from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db.base import Base, utcnow


def ordered_pair(first: uuid.UUID, second: uuid.UUID) -> tuple[uuid.UUID, uuid.UUID]:
    """Canonical storage order for the two participants of a match."""
    return (first, second) if str(first) <= str(second) else (second, first)


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        # Participants are stored via ordered_pair(), so this is order-independent
        UniqueConstraint("user_a_id", "user_b_id", "job_id", name="uq_match_pair_job"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_a_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    user_b_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    job_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    last_message_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user_a: Mapped["User"] = relationship(foreign_keys=[user_a_id])
    user_b: Mapped["User"] = relationship(foreign_keys=[user_b_id])
    job: Mapped["Job"] = relationship()

    def has_participant(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.user_a_id, self.user_b_id)

    def other_participant_id(self, user_id: uuid.UUID) -> uuid.UUID:
        return self.user_b_id if user_id == self.user_a_id else self.user_a_id

    def other_participant(self, user_id: uuid.UUID) -> "User":
        return self.user_b if user_id == self.user_a_id else self.user_a
