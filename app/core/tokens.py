# app/core/tokens.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from jose import jwt, JWTError
from app.core.config import settings
from app.core.errors import TokenInvalid

ACCESS_TYPE = "access"

def _now() -> datetime:
    return datetime.now(timezone.utc)

@dataclass(frozen=True)
class AccessClaims:
    """Claims completos: identidade interna + identificador público."""
    user_pk: int
    public_id: str
    issued_at: Optional[datetime]
    expires_at: datetime

@dataclass(frozen=True)
class IncompleteClaims:
    """Token assinado antes do claim public_id existir; exige novo login."""
    user_pk: Optional[int]
    public_id: Optional[str]
    expires_at: datetime

Claims = Union[AccessClaims, IncompleteClaims]

def create_access_token(*, user: Any, expires_delta: Optional[timedelta] = None) -> str:
    """Access token (dias), assinado com SECRET_KEY. `user` precisa de .id e .user_id."""
    now = _now()
    expire = now + (expires_delta if expires_delta is not None else timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    payload: Dict[str, Any] = {
        "type": ACCESS_TYPE,
        "sub": str(user.id),
        "public_id": user.user_id,
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access(token: str) -> Claims:
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True},
        )
    except JWTError:
        raise TokenInvalid()
    if not isinstance(payload, dict):
        raise TokenInvalid()
    # tokens sem "type" são do formato anterior; refresh nunca é JWT
    if payload.get("type", ACCESS_TYPE) != ACCESS_TYPE:
        raise TokenInvalid()

    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    user_pk = _parse_pk(payload.get("sub"))
    public_id = payload.get("public_id") or None
    if user_pk is None or not isinstance(public_id, str):
        return IncompleteClaims(user_pk=user_pk, public_id=public_id if isinstance(public_id, str) else None,
                                expires_at=expires_at)

    iat = payload.get("iat")
    issued_at = datetime.fromtimestamp(iat, tz=timezone.utc) if isinstance(iat, (int, float)) else None
    return AccessClaims(user_pk=user_pk, public_id=public_id, issued_at=issued_at, expires_at=expires_at)

def _parse_pk(sub: Any) -> Optional[int]:
    if sub is None or sub == "":
        return None
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise TokenInvalid()
