"""Unit tests for password hashing and signed tokens."""

from datetime import timedelta

import jwt
import pytest

from classifieds.core.errors import NotAuthenticatedError
from classifieds.core.security import (
    create_signed_token,
    decode_signed_token,
    hash_password,
    normalise_email,
    verify_password,
)

SECRET = "unit-test-secret-with-enough-length-for-hs256"


def _token(token_type="access", expires_delta=timedelta(minutes=5), secret=SECRET) -> str:
    return create_signed_token(
        user_id="user-1",
        email="vendeur@example.fr",
        token_type=token_type,
        secret=secret,
        algorithm="HS256",
        expires_delta=expires_delta,
    )


class TestPasswordHashing:
    def test_hash_round_trip(self):
        hashed = hash_password("secret123")
        assert hashed.startswith("scrypt$")
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_hash_is_salted(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_empty_password_is_rejected(self):
        with pytest.raises(ValueError):
            hash_password("")

    @pytest.mark.parametrize("stored", ["", "not-a-hash", "scrypt$x$8$1$abc$def"])
    def test_malformed_hash_never_verifies(self, stored):
        assert verify_password("secret123", stored) is False


class TestNormaliseEmail:
    def test_strips_and_lowercases(self):
        assert normalise_email("  Vendeur@Example.FR ") == "vendeur@example.fr"

    def test_blank_email_is_rejected(self):
        with pytest.raises(ValueError):
            normalise_email("   ")


class TestSignedTokens:
    def test_decode_returns_identity(self):
        payload = decode_signed_token(token=_token(), secret=SECRET, algorithms=["HS256"])
        assert payload.user_id == "user-1"
        assert payload.email == "vendeur@example.fr"
        assert payload.token_type == "access"
        assert payload.expires_at > payload.issued_at

    def test_expired_token(self):
        token = _token(expires_delta=timedelta(seconds=-10))
        with pytest.raises(NotAuthenticatedError) as exc_info:
            decode_signed_token(token=token, secret=SECRET, algorithms=["HS256"])
        assert exc_info.value.message == "Session invalide ou expirée"

    def test_wrong_secret(self):
        token = _token(secret="another-secret-with-enough-length-for-hs256")
        with pytest.raises(NotAuthenticatedError):
            decode_signed_token(token=token, secret=SECRET, algorithms=["HS256"])

    def test_wrong_token_type(self):
        token = _token(token_type="email_verify")
        with pytest.raises(NotAuthenticatedError) as exc_info:
            decode_signed_token(token=token, secret=SECRET, algorithms=["HS256"])
        assert exc_info.value.message == "Type de jeton non supporté"

        payload = decode_signed_token(token=token, secret=SECRET, algorithms=["HS256"], expected_type="email_verify")
        assert payload.token_type == "email_verify"

    def test_tokens_are_unique(self):
        first, second = _token(), _token()
        assert first != second
        assert jwt.decode(first, SECRET, algorithms=["HS256"])["jti"] != jwt.decode(second, SECRET, algorithms=["HS256"])["jti"]

    def test_garbage_token(self):
        with pytest.raises(NotAuthenticatedError):
            decode_signed_token(token="garbage", secret=SECRET, algorithms=["HS256"])
