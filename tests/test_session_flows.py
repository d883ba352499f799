"""Register, login, refresh and logout over HTTP."""

from sqlalchemy.exc import OperationalError

from app.core.errors import AllocationExhausted
from app.core.public_id import is_public_id
from app.crud.refresh_token import refresh_token_crud
from app.crud.user import user_crud
from app.core.security_password import hash_password
from app.models.user import User
from app.services import session as session_service

AUTH = "/api/v1/auth"


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def _login(client, email="a@x.com", password="Secret123"):
    return client.post(f"{AUTH}/login", json={"email": email, "password": password})


class TestRegister:
    def test_creates_account_and_session(self, client, password):
        resp = client.post(f"{AUTH}/register", json={"email": "new@x.com", "password": password})

        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "User Created Successfully"
        assert is_public_id(body["user"]["user_id"])
        assert body["user"]["email"] == "new@x.com"
        assert body["user"]["org_id"] is None
        assert len(body["refreshToken"]) == 80
        assert body["token"]
        assert "id" not in body["user"]
        assert "hashed_password" not in body["user"]

    def test_sets_http_only_cookies(self, client, password):
        resp = client.post(f"{AUTH}/register", json={"email": "c@x.com", "password": password})

        cookies = resp.headers.get_list("set-cookie")
        assert any(c.startswith("TOKEN=") and "HttpOnly" in c for c in cookies)
        assert any(c.startswith("REFRESH_TOKEN=") and "HttpOnly" in c for c in cookies)

    def test_password_is_stored_hashed(self, client, db, password):
        client.post(f"{AUTH}/register", json={"email": "h@x.com", "password": password})

        user = user_crud.get_by_email(db, "h@x.com")
        assert user.hashed_password != password
        assert user.hashed_password.startswith("$2b$")

    def test_duplicate_email(self, client, registered, password):
        resp = client.post(f"{AUTH}/register", json={"email": "a@x.com", "password": password})

        assert resp.status_code == 409
        assert resp.json()["code"] == "EMAIL_TAKEN"

    def test_duplicate_email_ignores_case(self, client, registered, password):
        resp = client.post(f"{AUTH}/register", json={"email": "A@X.com", "password": password})

        assert resp.status_code == 409

    def test_rejects_invalid_input(self, client):
        assert client.post(f"{AUTH}/register", json={"email": "nope", "password": "Secret123"}).status_code == 422
        assert client.post(f"{AUTH}/register", json={"email": "s@x.com", "password": "short"}).status_code == 422


class TestLogin:
    def test_returns_same_identity_with_new_tokens(self, client, registered, password):
        resp = _login(client, password=password)

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Login Successful"
        assert body["email"] == "a@x.com"
        assert body["user"]["user_id"] == registered["user"]["user_id"]
        assert body["token"] != registered["token"]
        assert body["refreshToken"] != registered["refreshToken"]

    def test_wrong_password(self, client, registered):
        resp = _login(client, password="WrongPass1")

        assert resp.status_code == 400
        assert resp.json()["message"] == "Password does not match"

    def test_unknown_email(self, client, registered):
        resp = _login(client, email="ghost@x.com")

        assert resp.status_code == 404
        assert resp.json()["message"] == "Email not found"

    def test_legacy_account_gets_public_id(self, client, db, password):
        legacy = User(email="old@x.com", hashed_password=hash_password(password))
        db.add(legacy)
        db.commit()

        resp = _login(client, email="old@x.com", password=password)

        assert resp.status_code == 200
        public = resp.json()["user"]["user_id"]
        assert is_public_id(public)
        db.expire_all()
        assert user_crud.get_by_email(db, "old@x.com").user_id == public


class TestRefresh:
    def test_body_token(self, client, registered):
        resp = client.post(f"{AUTH}/refresh", json={"refreshToken": registered["refreshToken"]})

        assert resp.status_code == 200
        token = resp.json()["token"]
        me = client.get(f"{AUTH}/me", headers=bearer(token))
        assert me.json()["user_id"] == registered["user"]["user_id"]

    def test_cookie_token(self, client, registered):
        resp = client.post(f"{AUTH}/refresh", headers={"Cookie": f"REFRESH_TOKEN={registered['refreshToken']}"})

        assert resp.status_code == 200
        assert resp.json()["token"]

    def test_rotates_refresh_cookie(self, client, registered):
        resp = client.post(f"{AUTH}/refresh", json={"refreshToken": registered["refreshToken"]})

        rotated = resp.cookies.get("REFRESH_TOKEN")
        assert rotated
        assert rotated != registered["refreshToken"]

    def test_old_token_is_single_use(self, client, registered):
        first = client.post(f"{AUTH}/refresh", json={"refreshToken": registered["refreshToken"]})
        client.cookies.clear()
        replay = client.post(f"{AUTH}/refresh", json={"refreshToken": registered["refreshToken"]})

        assert first.status_code == 200
        assert replay.status_code == 401
        assert replay.json()["message"] == "Invalid refresh token"

    def test_missing_token(self, client):
        resp = client.post(f"{AUTH}/refresh")

        assert resp.status_code == 401

    def test_unknown_token(self, client):
        resp = client.post(f"{AUTH}/refresh", json={"refreshToken": "0" * 80})

        assert resp.status_code == 401


class TestLogout:
    def test_revokes_refresh_token(self, client, registered, db):
        resp = client.post(f"{AUTH}/logout", json={"refreshToken": registered["refreshToken"]})

        assert resp.status_code == 200
        assert resp.json() == {"revoked": True}
        assert refresh_token_crud.get(db, registered["refreshToken"]) is None
        client.cookies.clear()
        again = client.post(f"{AUTH}/refresh", json={"refreshToken": registered["refreshToken"]})
        assert again.status_code == 401

    def test_unknown_token_is_a_no_op(self, client):
        resp = client.post(f"{AUTH}/logout", json={"refreshToken": "nope"})

        assert resp.status_code == 200

    def test_clears_cookies(self, client, registered):
        resp = client.post(f"{AUTH}/logout", json={"refreshToken": registered["refreshToken"]})

        cookies = resp.headers.get_list("set-cookie")
        assert any(c.startswith("TOKEN=") for c in cookies)
        assert any(c.startswith("REFRESH_TOKEN=") for c in cookies)

    def test_logout_everywhere(self, client, registered, password):
        second = _login(client, password=password).json()
        client.cookies.clear()

        resp = client.post(f"{AUTH}/logout-all", headers=bearer(second["token"]))

        assert resp.status_code == 200
        assert resp.json() == {"revoked": 2}
        client.cookies.clear()
        for token in (registered["refreshToken"], second["refreshToken"]):
            assert client.post(f"{AUTH}/refresh", json={"refreshToken": token}).status_code == 401

    def test_logout_everywhere_requires_access_token(self, client):
        assert client.post(f"{AUTH}/logout-all").status_code == 401


def test_full_session_lifecycle(client, password):
    reg = client.post(f"{AUTH}/register", json={"email": "life@x.com", "password": password})
    assert reg.status_code == 201
    public = reg.json()["user"]["user_id"]
    client.cookies.clear()

    login = _login(client, email="life@x.com", password=password).json()
    assert login["user"]["user_id"] == public
    client.cookies.clear()

    refreshed = client.post(f"{AUTH}/refresh", json={"refreshToken": login["refreshToken"]})
    assert refreshed.status_code == 200
    new_refresh = refreshed.cookies.get("REFRESH_TOKEN")
    client.cookies.clear()

    me = client.get(f"{AUTH}/me", headers=bearer(refreshed.json()["token"]))
    assert me.json()["user_id"] == public

    out = client.post(f"{AUTH}/logout", json={"refreshToken": new_refresh})
    assert out.status_code == 200
    client.cookies.clear()

    assert client.post(f"{AUTH}/refresh", json={"refreshToken": new_refresh}).status_code == 401
    assert client.post(f"{AUTH}/refresh", json={"refreshToken": login["refreshToken"]}).status_code == 401


class TestFailures:
    def test_hash_failure_is_internal_error(self, client, db, monkeypatch):
        def broken(plain):
            raise ValueError("backend unavailable")

        monkeypatch.setattr(session_service, "hash_password", broken)

        resp = client.post(f"{AUTH}/register", json={"email": "boom@x.com", "password": "Secret123"})

        assert resp.status_code == 500
        assert resp.json() == {"code": "INTERNAL_ERROR", "message": "Internal error."}
        assert user_crud.get_by_email(db, "boom@x.com") is None

    def test_refresh_insert_failure_is_internal_error(self, client, registered, password, monkeypatch):
        def broken(db, user_id):
            raise OperationalError("INSERT INTO refresh_tokens", {}, Exception("disk full"))

        monkeypatch.setattr(refresh_token_crud, "issue", broken)

        resp = _login(client, password=password)

        assert resp.status_code == 500
        assert resp.json() == {"code": "INTERNAL_ERROR", "message": "Internal error."}
        assert "disk full" not in resp.text

    def test_failed_backfill_keeps_refresh_token(self, client, db, password, monkeypatch):
        legacy = User(email="old@x.com", hashed_password=hash_password(password))
        db.add(legacy)
        db.commit()
        token = refresh_token_crud.issue(db, legacy.id)

        def exhausted(session, user):
            raise AllocationExhausted("no ids left")

        monkeypatch.setattr(user_crud, "ensure_public_id", exhausted)

        resp = client.post(f"{AUTH}/refresh", json={"refreshToken": token})

        assert resp.status_code == 500
        assert resp.json()["message"] == "Internal error."
        db.expire_all()
        assert refresh_token_crud.verify(db, token) is not None
