from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

def _normalize(url: str) -> str:
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url and url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url

def _sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite só aplica ON DELETE CASCADE com foreign_keys ligado
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def make_engine(url: str):
    url = _normalize(url)
    connect_args = {}
    if url.startswith("sqlite"):
        # rotas sync rodam no threadpool do FastAPI
        connect_args["check_same_thread"] = False
    eng = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
    if url.startswith("sqlite"):
        event.listen(eng, "connect", _sqlite_foreign_keys)
    return eng

SQLALCHEMY_DATABASE_URL = _normalize(settings.DATABASE_URL)

engine = make_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
