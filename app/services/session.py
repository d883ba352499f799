# app/services/session.py
"""Fluxos de sessão: register, login, refresh e logout.

Cada fluxo só emite tokens depois que a escrita correspondente foi
confirmada no banco.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import BadCredentials, EmailTaken, InternalFailure, NotFound, TokenInvalid
from app.core.security_password import hash_password, verify_and_maybe_upgrade
from app.core.tokens import create_access_token
from app.crud.refresh_token import refresh_token_crud
from app.crud.user import user_crud
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class IssuedSession:
    user: User
    access_token: str
    refresh_token: str


def _hash(password: str) -> str:
    try:
        return hash_password(password)
    except (ValueError, TypeError) as exc:
        raise InternalFailure(f"password hashing failed: {exc}")


def _issue(db: Session, user: User) -> IssuedSession:
    access = create_access_token(user=user)
    try:
        refresh = refresh_token_crud.issue(db, user.id)
    except SQLAlchemyError as exc:
        db.rollback()
        raise InternalFailure(f"refresh token insert failed: {exc.__class__.__name__}")
    return IssuedSession(user=user, access_token=access, refresh_token=refresh)


def register(db: Session, email: str, password: str) -> IssuedSession:
    if user_crud.get_by_email(db, email):
        raise EmailTaken()
    hashed = _hash(password)
    try:
        user = user_crud.create_with_public_id(db, email=email, hashed_password=hashed)
    except IntegrityError:
        # corrida com outro cadastro do mesmo e-mail
        raise EmailTaken()
    logger.info("account created user_id=%s", user.user_id)
    return _issue(db, user)


def login(db: Session, email: str, password: str) -> IssuedSession:
    user = user_crud.get_by_email(db, email)
    if user is None:
        raise NotFound("Email not found")

    ok, new_hash = verify_and_maybe_upgrade(password, user.hashed_password)
    if not ok:
        raise BadCredentials()
    if new_hash:
        user_crud.set_password_hash(db, user, new_hash)

    user = user_crud.ensure_public_id(db, user)
    return _issue(db, user)


def refresh(db: Session, token: Optional[str]) -> IssuedSession:
    """Troca um refresh token vivo por um access token novo, rotacionando o refresh."""
    record = refresh_token_crud.verify(db, token)
    if record is None:
        raise TokenInvalid("Invalid refresh token")

    user = db.get(User, record.user_id)
    if user is None:
        # conta apagada: o token órfão não serve mais para nada
        refresh_token_crud.revoke(db, token)
        raise TokenInvalid("User not found")

    # back-fill antes de consumir o token: se falhar, o refresh antigo continua valendo
    user = user_crud.ensure_public_id(db, user)
    new_refresh = refresh_token_crud.rotate(db, token)
    return IssuedSession(user=user, access_token=create_access_token(user=user), refresh_token=new_refresh)


def logout(db: Session, token: Optional[str]) -> bool:
    return refresh_token_crud.revoke(db, token)


def logout_everywhere(db: Session, user_pk: int) -> int:
    revoked = refresh_token_crud.revoke_all(db, user_pk)
    logger.info("revoked %d refresh tokens for user %s", revoked, user_pk)
    return revoked
