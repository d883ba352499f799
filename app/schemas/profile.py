from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

class ProfileBase(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=80)
    last_name: Optional[str] = Field(default=None, max_length=80)
    title: Optional[str] = Field(default=None, max_length=120)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    is_available: bool = False
    profile_image_url: Optional[str] = Field(default=None, max_length=255)
    org_id: Optional[str] = None  # org_id público

class ProfileCreate(ProfileBase):
    pass

class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=80)
    last_name: Optional[str] = Field(default=None, max_length=80)
    title: Optional[str] = Field(default=None, max_length=120)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    is_available: Optional[bool] = None
    profile_image_url: Optional[str] = Field(default=None, max_length=255)
    org_id: Optional[str] = None

    @field_validator("is_available")
    @classmethod
    def _not_null(cls, v):
        # coluna NOT NULL: omitir o campo, nunca mandar null
        if v is None:
            raise ValueError("must not be null")
        return v

class ProfileOrg(BaseModel):
    org_id: str
    name: str

class Profile(BaseModel):
    user_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_available: bool = False
    profile_image_url: str
    org: Optional[ProfileOrg] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
