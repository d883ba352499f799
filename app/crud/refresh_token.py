# app/crud/refresh_token.py
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import TokenInvalid
from app.models.refresh_token import RefreshToken

logger = logging.getLogger(__name__)

TOKEN_BYTES = 40

def _now() -> datetime:
    return datetime.now(timezone.utc)

def _as_utc(dt: datetime) -> datetime:
    # SQLite devolve datetime sem tzinfo; gravamos sempre em UTC
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class CRUDRefreshToken:
    """Refresh tokens opacos, de uso único, persistidos com expiração."""

    def __init__(self, ttl_days: Optional[int] = None):
        self._ttl_days = ttl_days

    @property
    def ttl(self) -> timedelta:
        return timedelta(days=self._ttl_days or settings.REFRESH_TOKEN_EXPIRE_DAYS)

    def _new_row(self, user_id: int) -> RefreshToken:
        now = _now()
        return RefreshToken(
            user_id=user_id,
            token=secrets.token_hex(TOKEN_BYTES),
            expires_at=now + self.ttl,
            created_at=now,
        )

    def issue(self, db: Session, user_id: int) -> str:
        row = self._new_row(user_id)
        value = row.token
        db.add(row)
        db.commit()
        return value

    def get(self, db: Session, token: str) -> Optional[RefreshToken]:
        return db.execute(select(RefreshToken).where(RefreshToken.token == token)).scalar_one_or_none()

    def verify(self, db: Session, token: Optional[str]) -> Optional[RefreshToken]:
        """Registro vivo do token, ou None. Expirados são apagados na hora."""
        if not token:
            return None
        row = self.get(db, token)
        if row is None:
            return None
        if _as_utc(row.expires_at) <= _now():
            self.revoke(db, token)
            return None
        return row

    def rotate(self, db: Session, token: Optional[str]) -> str:
        """Consome `token` e emite o substituto na mesma transação.

        Só quem efetivamente apaga a linha antiga segue para emitir; uma
        rotação concorrente do mesmo token recebe TokenInvalid.
        """
        row = self.verify(db, token)
        if row is None:
            raise TokenInvalid("Invalid refresh token")
        user_id = row.user_id
        try:
            result = db.execute(
                delete(RefreshToken)
                .where(RefreshToken.token == token)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                db.rollback()
                raise TokenInvalid("Invalid refresh token")
            new_row = self._new_row(user_id)
            value = new_row.token
            db.add(new_row)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("refresh token rotation failed for user %s", user_id)
            raise TokenInvalid("Invalid refresh token")
        db.expunge(row)
        return value

    def revoke(self, db: Session, token: Optional[str]) -> bool:
        """Idempotente: revogar token inexistente não é erro."""
        if not token:
            return False
        result = db.execute(
            delete(RefreshToken)
            .where(RefreshToken.token == token)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount > 0

    def revoke_all(self, db: Session, user_id: int) -> int:
        result = db.execute(
            delete(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount or 0

    def purge_expired(self, db: Session) -> int:
        result = db.execute(
            delete(RefreshToken)
            .where(RefreshToken.expires_at <= _now())
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount or 0

    def list_for_user(self, db: Session, user_id: int) -> list[RefreshToken]:
        return list(db.scalars(select(RefreshToken).where(RefreshToken.user_id == user_id)).all())


refresh_token_crud = CRUDRefreshToken()
