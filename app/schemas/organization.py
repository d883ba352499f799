from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from app.schemas.specialty import Specialty

class OrganizationBase(BaseModel):
    name: str = Field(min_length=1, max_length=160)
    org_image_url: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=80)
    state: Optional[str] = Field(default=None, max_length=40)
    zipcode: Optional[str] = Field(default=None, max_length=20)
    is_open: bool = False
    donations_needed: int = Field(default=0, ge=0)
    donations_acquired: int = Field(default=0, ge=0)

class OrganizationCreate(OrganizationBase):
    specialties: List[int] = Field(default_factory=list)  # ids da taxonomia

class OrganizationUpdate(BaseModel):   # edição parcial
    name: str | None = Field(default=None, min_length=1, max_length=160)
    org_image_url: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    is_open: bool | None = None
    donations_needed: int | None = Field(default=None, ge=0)
    donations_acquired: int | None = Field(default=None, ge=0)
    specialties: List[int] | None = None

    @field_validator("name", "is_open", "donations_needed", "donations_acquired")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

class Organization(OrganizationBase):
    org_id: str
    owner_user_id: str
    org_image_url: str
    specialties: List[Specialty] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
