# app/schemas/user.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

class UserBase(BaseModel):
    email: EmailStr

class RegisterIn(UserBase):
    password: str = Field(min_length=8, max_length=128)

class LoginIn(BaseModel):
    # sem EmailStr: e-mail mal formado cai no 404 do login, como antes
    email: str = Field(min_length=1, max_length=160)
    password: str = Field(min_length=1, max_length=128)

class UserOut(BaseModel):
    """Campos públicos da conta; o id interno nunca sai na resposta."""
    user_id: str
    email: str
    org_id: Optional[str] = None

    model_config = {"from_attributes": True}

class IdentityOut(BaseModel):
    user_id: str
    org_id: Optional[str] = None
