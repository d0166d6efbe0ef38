"""Security primitives: bcrypt secret hashing and signed bearer tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from oficina.core.exceptions import InvalidCredentialError


def hash_secret(secret: str, rounds: int = 12) -> str:
    """Return a salted bcrypt hash of `secret`."""
    hashed = bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_secret(secret: str, hashed: str) -> bool:
    """Check `secret` against a bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(secret.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    claims: dict[str, Any],
    secret_key: str,
    expires_delta: timedelta,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> str:
    """Sign `claims` with an expiry of now + `expires_delta`."""
    issued_at = now or datetime.now(UTC)
    to_encode = claims.copy()
    to_encode.update({"iat": issued_at, "exp": issued_at + expires_delta})
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str, secret_key: str, algorithm: str = "HS256"
) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        InvalidCredentialError: token is malformed, badly signed or expired
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        raise InvalidCredentialError()
