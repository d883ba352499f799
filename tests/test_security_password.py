"""Unit tests for password hashing and verification."""

from passlib.context import CryptContext

from app.core.security_password import hash_password, verify_and_maybe_upgrade, verify_password


def test_hash_is_not_plaintext():
    digest = hash_password("Secret123")

    assert digest != "Secret123"
    assert digest.startswith("$2b$")


def test_same_password_produces_different_hashes():
    assert hash_password("Secret123") != hash_password("Secret123")


def test_verify_accepts_correct_password():
    digest = hash_password("Secret123")

    assert verify_password("Secret123", digest)


def test_verify_rejects_wrong_password():
    digest = hash_password("Secret123")

    assert not verify_password("secret123", digest)


def test_verify_rejects_garbage_hash():
    assert not verify_password("Secret123", "not-a-hash")
    assert not verify_password("Secret123", "")


def test_current_hash_needs_no_upgrade():
    ok, new_hash = verify_and_maybe_upgrade("Secret123", hash_password("Secret123"))

    assert ok is True
    assert new_hash is None


def test_wrong_password_never_returns_upgrade():
    ok, new_hash = verify_and_maybe_upgrade("nope", hash_password("Secret123"))

    assert ok is False
    assert new_hash is None


def test_weaker_hash_is_upgraded(monkeypatch):
    from app.core import security_password

    strong = CryptContext(schemes=["bcrypt"], bcrypt__rounds=5, bcrypt__min_rounds=5)
    monkeypatch.setattr(security_password, "pwd_context", strong)
    weak_digest = CryptContext(schemes=["bcrypt"], bcrypt__rounds=4).hash("Secret123")

    ok, new_hash = verify_and_maybe_upgrade("Secret123", weak_digest)

    assert ok is True
    assert new_hash is not None
    assert strong.verify("Secret123", new_hash)
    assert "$05$" in new_hash
