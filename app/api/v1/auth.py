# app/api/v1/auth.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Body, Cookie, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import ACCESS_COOKIE, REFRESH_COOKIE, get_current_identity, get_current_user, get_db
from app.core.config import settings
from app.core.tokens import AccessClaims
from app.models.user import User
from app.schemas.token import AuthOut, RefreshIn, TokenOut
from app.schemas.user import IdentityOut, LoginIn, RegisterIn, UserOut
from app.services import session as session_service
from app.services.session import IssuedSession

router = APIRouter()

DAY = 24 * 60 * 60

# ---------- helpers ----------
def _cookie_flags() -> dict:
    return {
        "httponly": True,
        "secure": settings.COOKIE_SECURE,
        "samesite": settings.COOKIE_SAMESITE,
        "path": "/",
    }

def _set_auth_cookies(response: Response, issued: IssuedSession) -> None:
    flags = _cookie_flags()
    response.set_cookie(ACCESS_COOKIE, issued.access_token,
                        max_age=settings.ACCESS_TOKEN_EXPIRE_DAYS * DAY, **flags)
    response.set_cookie(REFRESH_COOKIE, issued.refresh_token,
                        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * DAY, **flags)

def _clear_auth_cookies(response: Response) -> None:
    flags = _cookie_flags()
    response.delete_cookie(ACCESS_COOKIE, **flags)
    response.delete_cookie(REFRESH_COOKIE, **flags)

def _auth_response(message: str, issued: IssuedSession) -> dict:
    return AuthOut(
        message=message,
        token=issued.access_token,
        refresh_token=issued.refresh_token,
        user=UserOut.model_validate(issued.user),
    ).model_dump(by_alias=True)

def _pick_refresh_token(body: Optional[RefreshIn], cookie_value: Optional[str]) -> Optional[str]:
    # corpo tem precedência sobre o cookie
    if body is not None and body.refresh_token:
        return body.refresh_token
    return cookie_value

# ---------- endpoints ----------
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterIn, response: Response, db: Session = Depends(get_db)):
    issued = session_service.register(db, body.email, body.password)
    _set_auth_cookies(response, issued)
    return _auth_response("User Created Successfully", issued)

@router.post("/login")
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    issued = session_service.login(db, body.email, body.password)
    _set_auth_cookies(response, issued)
    return {**_auth_response("Login Successful", issued), "email": issued.user.email}

@router.post("/refresh", response_model=TokenOut)
def refresh(
    response: Response,
    body: Optional[RefreshIn] = Body(default=None),
    refresh_cookie: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    db: Session = Depends(get_db),
):
    issued = session_service.refresh(db, _pick_refresh_token(body, refresh_cookie))
    _set_auth_cookies(response, issued)
    return TokenOut(token=issued.access_token)

@router.post("/logout")
def logout(
    response: Response,
    body: Optional[RefreshIn] = Body(default=None),
    refresh_cookie: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    db: Session = Depends(get_db),
):
    session_service.logout(db, _pick_refresh_token(body, refresh_cookie))
    _clear_auth_cookies(response)
    return {"revoked": True}

@router.post("/logout-all")
def logout_all(
    response: Response,
    identity: AccessClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    revoked = session_service.logout_everywhere(db, identity.user_pk)
    _clear_auth_cookies(response)
    return {"revoked": revoked}

@router.get("/me", response_model=IdentityOut)
def me(user: User = Depends(get_current_user)):
    return IdentityOut(user_id=user.user_id, org_id=user.org_id)
