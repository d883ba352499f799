from sqlalchemy import Table, Column, ForeignKey, UniqueConstraint
from app.db.base import Base

organization_specialties = Table(
    "organization_specialties",
    Base.metadata,
    Column("organization_id", ForeignKey("organizations.id", ondelete="CASCADE"), primary_key=True),
    Column("specialty_id", ForeignKey("specialties.id", ondelete="CASCADE"), primary_key=True),
    UniqueConstraint("organization_id", "specialty_id", name="uq_organization_specialty"),
)
