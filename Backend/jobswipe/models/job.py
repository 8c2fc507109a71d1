# backend/jobswipe/models/job.py

from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import String, DateTime, Text, ForeignKey, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from ..db.base import Base

class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    location_type: Mapped[str] = mapped_column(String(20), default="onsite")
    employment_type: Mapped[str] = mapped_column(String(20), default="full-time")
    experience_level: Mapped[str] = mapped_column(String(20), default="mid")
    min_salary: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_salary: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    skills: Mapped[list] = mapped_column(JSON, default=list)

    # Only 'active' jobs are shown in the feed
    status: Mapped[str] = mapped_column(String(20), default="active", index=True)
    view_count: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # The recruiter who posted it, and their company
    poster_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    company_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)

    poster: Mapped["User"] = relationship(back_populates="jobs")
    company: Mapped["Company"] = relationship(back_populates="jobs")
