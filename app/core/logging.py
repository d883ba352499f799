# app/core/logging.py
import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(level: str | None = None) -> None:
    """Configura o logger raiz uma única vez (stdout, formato fixo)."""
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if any(getattr(h, "_directory_handler", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._directory_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # SQL só quando pedido explicitamente
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
