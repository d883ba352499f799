from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(160), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    # identificador público (8 chars); nulo só em contas legadas até o próximo login
    user_id: Mapped[Optional[str]] = mapped_column(String(8), unique=True, index=True, nullable=True)
    # org_id público da organização vinculada
    org_id: Mapped[Optional[str]] = mapped_column(String(8), index=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    refresh_tokens = relationship(
        "RefreshToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    profile = relationship(
        "Profile", back_populates="owner", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )
