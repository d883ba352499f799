from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Boolean, ForeignKey, DateTime, func
from app.db.base import Base
from app.models.org_specialty import organization_specialties

class Organization(Base):
    __tablename__ = "organizations"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    owner_user_id: Mapped[str] = mapped_column(String(8), index=True, nullable=False)
    org_id: Mapped[str] = mapped_column(String(8), unique=True, index=True, nullable=False)

    name: Mapped[str] = mapped_column(String(160), nullable=False)
    org_image_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    zipcode: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    is_open: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    donations_needed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    donations_acquired: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    specialties = relationship(
        "Specialty",
        secondary=organization_specialties,
        back_populates="organizations",
        lazy="selectin",
    )
