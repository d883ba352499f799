# app/core/security_password.py
from __future__ import annotations
from typing import Tuple
from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
    bcrypt__min_rounds=settings.BCRYPT_ROUNDS,
)

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def verify_password(plain: str, stored_hash: str) -> bool:
    if not stored_hash:
        return False
    try:
        return pwd_context.verify(plain, stored_hash)
    except ValueError:
        # hash corrompido/desconhecido conta como senha errada
        return False

def verify_and_maybe_upgrade(plain: str, stored_hash: str) -> Tuple[bool, str | None]:
    """Verifica a senha e, se o hash usa parâmetros antigos (rounds), devolve um novo."""
    if not verify_password(plain, stored_hash):
        return False, None
    if pwd_context.needs_update(stored_hash):
        return True, pwd_context.hash(plain)
    return True, None
