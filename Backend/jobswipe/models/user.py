# backend/jobswipe/models/user.py

from __future__ import annotations
from sqlalchemy import String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from ..db.base import Base
import enum
import uuid
from datetime import datetime
from typing import List


class Role(str, enum.Enum):
    JOBSEEKER = "jobseeker"
    RECRUITER = "recruiter"


class User(Base):
    __tablename__ = "users"

    # --- Base Columns ---
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.JOBSEEKER.value)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # --- Public profile summary shown to matches ---
    headline: Mapped[str | None] = mapped_column(String(200), nullable=True)
    # Lower-cased skill names, used for the feed's overlap score
    skills: Mapped[list] = mapped_column(JSON, default=list)

    # --- Recruiters belong to at most one company ---
    company_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("companies.id"), nullable=True)
    company: Mapped["Company"] = relationship(back_populates="members", foreign_keys=[company_id])

    subscription: Mapped["Subscription"] = relationship(back_populates="user", uselist=False)
    jobs: Mapped[List["Job"]] = relationship(back_populates="poster")

    @property
    def role_enum(self) -> Role:
        return Role(self.role)

    def public_summary(self) -> dict:
        """The profile fields a counterpart is allowed to see."""
        return {
            "id": str(self.id),
            "name": self.name,
            "avatar_url": self.avatar_url,
            "role": self.role,
            "headline": self.headline,
        }
