# app/db/init_db.py
import logging
from sqlalchemy.orm import Session

from app.crud.refresh_token import refresh_token_crud
from app.crud.specialty import ensure_default_specialties

logger = logging.getLogger(__name__)

def init_db(db: Session) -> None:
    created = ensure_default_specialties(db)
    if created:
        logger.info("seeded %d specialties", created)

    # higiene: refresh tokens vencidos que ninguém mais apresentou
    purged = refresh_token_crud.purge_expired(db)
    if purged:
        logger.info("purged %d expired refresh tokens", purged)
