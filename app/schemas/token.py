# app/schemas/token.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from app.schemas.user import UserOut

class RefreshIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")

class TokenOut(BaseModel):
    token: str

class AuthOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    token: str
    refresh_token: str = Field(alias="refreshToken")
    user: UserOut
