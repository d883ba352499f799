from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.core.errors import TokenInvalid, Unauthorized
from app.core.tokens import AccessClaims, IncompleteClaims, decode_access
from app.db.session import get_db
from app.models.user import User

ACCESS_COOKIE = "TOKEN"
REFRESH_COOKIE = "REFRESH_TOKEN"

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization; sem ele, tenta o cookie TOKEN
# ----------------------------------------------------------------------
def get_access_token(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[str]:
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
            return parts[1]
    return request.cookies.get(ACCESS_COOKIE) or None

# ----------------------------------------------------------------------
# Identidade do token: authorized ou 401 (missing / invalid / incomplete)
# ----------------------------------------------------------------------
def get_current_identity(
    request: Request,
    token: Optional[str] = Depends(get_access_token),
) -> AccessClaims:
    if not token:
        raise Unauthorized("missing token")
    try:
        claims = decode_access(token)
    except TokenInvalid:
        raise Unauthorized("invalid or expired token")
    if isinstance(claims, IncompleteClaims):
        # token do formato antigo (sem public_id): força novo login
        raise Unauthorized("incomplete claims - reauthenticate")
    request.state.identity = claims
    return claims

def get_current_user(
    identity: AccessClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    user = db.get(User, identity.user_pk)
    if user is None or user.user_id != identity.public_id:
        raise Unauthorized("invalid or expired token")
    return user
