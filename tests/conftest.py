import os
import sys
import tempfile
from pathlib import Path

# Ambiente de teste antes de qualquer import do app (settings é lido no import)
_test_tmp_dir = tempfile.mkdtemp(prefix="directory_test_")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_test_tmp_dir, 'bootstrap.db')}")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only-do-not-use-in-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import app.models  # noqa: E402,F401
from app.crud.specialty import ensure_default_specialties  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db, make_engine  # noqa: E402
from app.main import api  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    ensure_default_specialties(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db, session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = _get_db
    yield TestClient(api)
    api.dependency_overrides.clear()


@pytest.fixture
def password():
    return "Secret123"


@pytest.fixture
def registered(client, password):
    """Conta criada via /register; devolve o corpo da resposta."""
    resp = client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": password})
    assert resp.status_code == 201, resp.text
    client.cookies.clear()
    return resp.json()
