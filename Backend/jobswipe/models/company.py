from __future__ import annotations
from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from ..db.base import Base
from datetime import datetime
from typing import List
import uuid

class Company(Base):
    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    industry: Mapped[str | None] = mapped_column(String(120), nullable=True)
    size: Mapped[str | None] = mapped_column(String(40), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    # Recruiter who created the profile (users.company_id is the FK side)
    owner_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

    # A Company has many recruiters.
    members: Mapped[List["User"]] = relationship(back_populates="company", foreign_keys="User.company_id")
    jobs: Mapped[List["Job"]] = relationship(back_populates="company")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
