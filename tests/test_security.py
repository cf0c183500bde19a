"""Tests for password hashing and session tokens."""

import pytest
from jose import jwt

from expense_tracker import config
from expense_tracker.exceptions import AuthError
from expense_tracker.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret1")
        assert hashed != "secret1"
        assert hashed.startswith("$2")

    def test_verify_accepts_right_password_only(self):
        hashed = hash_password("secret1")
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_same_password_gets_different_salts(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_garbage_hash_does_not_verify(self):
        assert not verify_password("secret1", "not-a-hash")


class TestTokens:

    def test_token_decodes_to_user_id(self):
        assert decode_access_token(create_access_token(42)) == 42

    def test_missing_token_rejected(self):
        with pytest.raises(AuthError):
            decode_access_token("")

    def test_malformed_token_rejected(self):
        with pytest.raises(AuthError):
            decode_access_token("not.a.token")

    def test_token_signed_with_other_secret_rejected(self):
        token = jwt.encode({"sub": "1"}, "some-other-secret", algorithm="HS256")
        with pytest.raises(AuthError):
            decode_access_token(token)

    def test_expired_token_rejected(self, monkeypatch):
        monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_MINUTES", -1)
        token = create_access_token(1)
        with pytest.raises(AuthError) as exc:
            decode_access_token(token)
        assert exc.value.message == "Invalid or expired token."

    def test_token_without_subject_rejected(self):
        token = jwt.encode({"foo": "bar"}, config.SECRET_KEY, algorithm=config.ALGORITHM)
        with pytest.raises(AuthError):
            decode_access_token(token)
