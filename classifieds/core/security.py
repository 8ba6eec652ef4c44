"""Security helpers for authentication: password hashing and signed tokens."""

from __future__ import annotations

import base64
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Literal, Sequence

import jwt

from .errors import NotAuthenticatedError

TokenType = Literal["access", "email_verify"]


@dataclass(slots=True)
class TokenPayload:
    """Decoded contents of an issued token."""

    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime
    token_type: TokenType


_SALT_BYTES = 16
_KEY_LEN = 32
_SCRYPT_N = 2**14
_SCRYPT_R = 8
_SCRYPT_P = 1


def _encode(value: bytes) -> str:
    return base64.urlsafe_b64encode(value).decode("ascii").rstrip("=")


def _decode(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


def normalise_email(value: str) -> str:
    """Return a canonical representation for email comparisons."""

    candidate = value.strip()
    if not candidate:
        msg = "Email must not be empty"
        raise ValueError(msg)
    return candidate.lower()


def hash_password(password: str) -> str:
    """Hash ``password`` using scrypt with a random salt."""

    if not password:
        msg = "Password must not be empty"
        raise ValueError(msg)

    salt = secrets.token_bytes(_SALT_BYTES)
    key = hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=_KEY_LEN,
    )
    return f"scrypt${_SCRYPT_N}${_SCRYPT_R}${_SCRYPT_P}${_encode(salt)}${_encode(key)}"


def verify_password(password: str, hashed: str) -> bool:
    """Return ``True`` if ``password`` matches ``hashed``."""

    try:
        _, n_str, r_str, p_str, salt_b64, key_b64 = hashed.split("$", 5)
        n = int(n_str)
        r = int(r_str)
        p = int(p_str)
        salt = _decode(salt_b64)
        expected = _decode(key_b64)
    except (ValueError, TypeError):
        return False

    try:
        candidate = hashlib.scrypt(password.encode("utf-8"), salt=salt, n=n, r=r, p=p, dklen=len(expected))
    except ValueError:
        return False

    return secrets.compare_digest(candidate, expected)


def create_signed_token(
    *,
    user_id: str,
    email: str,
    token_type: TokenType,
    secret: str,
    algorithm: str,
    expires_delta: timedelta,
) -> str:
    """Return a signed JWT for the supplied identity."""

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
        "typ": token_type,
        "jti": secrets.token_hex(8),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_signed_token(
    *, token: str, secret: str, algorithms: Sequence[str], expected_type: TokenType = "access"
) -> TokenPayload:
    """Decode ``token`` and return the parsed payload.

    Raises:
        NotAuthenticatedError: The token is malformed, expired, badly signed
            or of another type.
    """

    try:
        data = jwt.decode(token, secret, algorithms=list(algorithms))
    except jwt.PyJWTError as exc:
        raise NotAuthenticatedError("Session invalide ou expirée") from exc

    token_type = str(data.get("typ", "")).lower()
    if token_type != expected_type:
        raise NotAuthenticatedError("Type de jeton non supporté")

    return TokenPayload(
        user_id=str(data["sub"]),
        email=str(data.get("email", "")),
        issued_at=datetime.fromtimestamp(int(data["iat"]), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(int(data["exp"]), tz=timezone.utc),
        token_type=token_type,  # type: ignore[arg-type]
    )


__all__ = [
    "TokenPayload",
    "create_signed_token",
    "decode_signed_token",
    "hash_password",
    "normalise_email",
    "verify_password",
]
