"""Access token checks on protected routes."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from app.core.config import settings
from app.crud.user import user_crud

ME = "/api/v1/auth/me"


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def _sign(payload, secret=None):
    return jwt.encode(payload, secret or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _exp(delta=timedelta(days=1)):
    return int((datetime.now(timezone.utc) + delta).timestamp())


def test_bearer_token_is_accepted(client, registered):
    resp = client.get(ME, headers=bearer(registered["token"]))

    assert resp.status_code == 200
    assert resp.json() == {"user_id": registered["user"]["user_id"], "org_id": None}


def test_cookie_is_used_without_header(client, registered):
    resp = client.get(ME, headers={"Cookie": f"TOKEN={registered['token']}"})

    assert resp.status_code == 200
    assert resp.json()["user_id"] == registered["user"]["user_id"]


def test_header_wins_over_cookie(client, registered):
    resp = client.get(ME, headers={**bearer(registered["token"]), "Cookie": "TOKEN=garbage"})

    assert resp.status_code == 200


def test_missing_token(client, registered):
    resp = client.get(ME)

    assert resp.status_code == 401
    assert resp.json() == {"code": "UNAUTHORIZED", "message": "missing token"}


def test_non_bearer_scheme_counts_as_missing(client, registered):
    resp = client.get(ME, headers={"Authorization": f"Token {registered['token']}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "missing token"


def test_expired_token(client, registered, db):
    user = user_crud.get_by_public_id(db, registered["user"]["user_id"])
    token = _sign({
        "type": "access",
        "sub": str(user.id),
        "public_id": user.user_id,
        "exp": _exp(timedelta(seconds=-30)),
    })

    resp = client.get(ME, headers=bearer(token))

    assert resp.status_code == 401
    assert resp.json()["message"] == "invalid or expired token"


def test_bad_signature(client, registered, db):
    user = user_crud.get_by_public_id(db, registered["user"]["user_id"])
    token = _sign({"sub": str(user.id), "public_id": user.user_id, "exp": _exp()}, secret="not-ours")

    resp = client.get(ME, headers=bearer(token))

    assert resp.status_code == 401
    assert resp.json()["message"] == "invalid or expired token"


def test_garbage_token(client):
    resp = client.get(ME, headers=bearer("definitely.not.ajwt"))

    assert resp.status_code == 401
    assert resp.json()["message"] == "invalid or expired token"


def test_incomplete_claims_force_reauthentication(client, registered, db):
    user = user_crud.get_by_public_id(db, registered["user"]["user_id"])
    token = _sign({"sub": str(user.id), "exp": _exp()})

    resp = client.get(ME, headers=bearer(token))

    assert resp.status_code == 401
    assert resp.json()["message"] == "incomplete claims - reauthenticate"


def test_token_for_deleted_account(client, registered, db):
    user = user_crud.get_by_public_id(db, registered["user"]["user_id"])
    user_crud.remove(db, user)

    resp = client.get(ME, headers=bearer(registered["token"]))

    assert resp.status_code == 401


def test_mismatched_public_id(client, registered, db):
    user = user_crud.get_by_public_id(db, registered["user"]["user_id"])
    token = _sign({"type": "access", "sub": str(user.id), "public_id": "Zzzzzzzz", "exp": _exp()})

    resp = client.get(ME, headers=bearer(token))

    assert resp.status_code == 401
