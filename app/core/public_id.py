# app/core/public_id.py
"""Identificadores públicos curtos (8 chars, A-Z a-z 0-9) para users e organizations.

A checagem de existência é só otimização; quem decide é a constraint UNIQUE
da coluna no commit. Violação nessa coluna conta como uma tentativa a mais.
"""
from __future__ import annotations

import logging
import secrets
from typing import Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AllocationExhausted, Conflict

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType")

def generate_public_id(length: int = settings.PUBLIC_ID_LENGTH) -> str:
    alphabet = settings.PUBLIC_ID_ALPHABET
    return "".join(secrets.choice(alphabet) for _ in range(length))

def is_public_id(value: Optional[str]) -> bool:
    return (
        isinstance(value, str)
        and len(value) == settings.PUBLIC_ID_LENGTH
        and all(ch in settings.PUBLIC_ID_ALPHABET for ch in value)
    )

def public_id_exists(db: Session, model: type, field: str, candidate: str) -> bool:
    column = getattr(model, field)
    return db.execute(select(column).where(column == candidate).limit(1)).first() is not None

def _reserve(db: Session, obj: ModelType, field: str, candidate: str) -> None:
    """Persiste `obj` com o candidato; IntegrityError no próprio campo vira Conflict."""
    setattr(obj, field, candidate)
    db.add(obj)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # outra request gravou o mesmo id entre o check e o commit
        if public_id_exists(db, type(obj), field, candidate):
            raise Conflict()
        raise

def allocate_public_id(
    db: Session,
    obj: ModelType,
    field: str,
    *,
    max_attempts: Optional[int] = None,
) -> ModelType:
    """Atribui um id público livre em `obj.<field>` e persiste o registro.

    Serve tanto para registros novos quanto para contas legadas sem id
    (back-fill). Levanta AllocationExhausted ao estourar o orçamento de
    tentativas; outras violações de unicidade (ex.: e-mail) sobem intactas.
    """
    model = type(obj)
    attempts = max_attempts or settings.PUBLIC_ID_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        candidate = generate_public_id()
        if public_id_exists(db, model, field, candidate):
            logger.info("public id collision on %s.%s (attempt %d)", model.__name__, field, attempt)
            continue
        try:
            _reserve(db, obj, field, candidate)
        except Conflict:
            logger.info("public id race on %s.%s (attempt %d)", model.__name__, field, attempt)
            continue
        db.refresh(obj)
        return obj
    raise AllocationExhausted(f"could not allocate {model.__name__}.{field} after {attempts} attempts")
