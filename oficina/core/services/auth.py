"""
Credential verification.

Issues signed bearer tokens at login and turns an Authorization header back
into a caller identity on every request.
"""

from datetime import datetime, timedelta

from oficina.config import get_logger
from oficina.core.entities.user import Caller, User
from oficina.core.exceptions import (
    InvalidCredentialError,
    LoginFailedError,
    UnauthenticatedError,
)
from oficina.core.interfaces.user_store import IUserStore
from oficina.core.security import create_access_token, decode_access_token, verify_secret

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"


class AuthService:
    """Login and bearer-credential verification."""

    def __init__(
        self,
        user_store: IUserStore,
        secret_key: str,
        token_ttl_hours: int = 8,
        algorithm: str = "HS256",
    ) -> None:
        self._user_store = user_store
        self._secret_key = secret_key
        self._token_ttl = timedelta(hours=token_ttl_hours)
        self._algorithm = algorithm

    async def login(self, name: str, secret: str) -> tuple[str, Caller]:
        """
        Check a name/secret pair and issue a token.

        Raises:
            LoginFailedError: no account with that name, or wrong secret
        """
        user = await self._user_store.get_by_name(name.strip())
        if user is None or not verify_secret(secret, user.secret_hash):
            logger.warning("login_failed", name=name)
            raise LoginFailedError()

        caller = Caller(id=user.id, name=user.name, role=user.role)  # type: ignore[arg-type]
        token = self.issue_token(caller)
        logger.info("login_succeeded", user_id=caller.id, role=caller.role)
        return token, caller

    def issue_token(self, caller: Caller | User, now: datetime | None = None) -> str:
        """Sign {id, name, role} with the configured validity window."""
        return create_access_token(
            {"sub": str(caller.id), "name": caller.name, "role": caller.role},
            secret_key=self._secret_key,
            expires_delta=self._token_ttl,
            algorithm=self._algorithm,
            now=now,
        )

    def verify_credential(self, raw_header: str | None) -> Caller:
        """
        Decode an Authorization header value into the caller identity.

        Raises:
            UnauthenticatedError: header absent or empty
            InvalidCredentialError: not a bearer token, bad signature, expired,
                or missing identity claims
        """
        if raw_header is None or not raw_header.strip():
            raise UnauthenticatedError()

        parts = raw_header.strip().split()
        if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
            raise InvalidCredentialError()

        claims = decode_access_token(parts[1], self._secret_key, self._algorithm)
        try:
            return Caller(
                id=int(claims["sub"]),
                name=claims["name"],
                role=claims.get("role") or "",
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidCredentialError()
