"""Staff account management."""

from oficina.config import get_logger
from oficina.core.entities.user import Caller, Role, User
from oficina.core.exceptions import (
    DuplicateUserError,
    SelfDeletionError,
    UserNotFoundError,
    ValidationError,
)
from oficina.core.interfaces.user_store import IUserStore
from oficina.core.security import hash_secret
from oficina.core.services.role_policy import normalize_role

logger = get_logger(__name__)


class AccountService:
    """Create, update and delete staff accounts. Secrets are stored as bcrypt hashes."""

    def __init__(self, user_store: IUserStore, bcrypt_rounds: int = 12) -> None:
        self._user_store = user_store
        self._bcrypt_rounds = bcrypt_rounds

    async def list_users(self) -> list[User]:
        return await self._user_store.list_users()

    async def create_user(
        self, name: str, secret: str, role: str | None = None
    ) -> User:
        name = self._clean_name(name)
        if not secret:
            raise ValidationError("secret", "secret is required")
        if await self._user_store.get_by_name(name) is not None:
            raise DuplicateUserError(name)

        user = User(
            name=name,
            secret_hash=hash_secret(secret, self._bcrypt_rounds),
            role=normalize_role(role) or Role.MANAGER.value,
        )
        user = await self._user_store.create(user)
        logger.info("user_created", user_id=user.id, role=user.role)
        return user

    async def update_user(
        self,
        user_id: int,
        name: str | None = None,
        secret: str | None = None,
        role: str | None = None,
    ) -> User:
        user = await self._user_store.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if name is not None:
            name = self._clean_name(name)
            if name != user.name:
                existing = await self._user_store.get_by_name(name)
                if existing is not None and existing.id != user_id:
                    raise DuplicateUserError(name)
                user.name = name
        if secret:
            user.secret_hash = hash_secret(secret, self._bcrypt_rounds)
        if role is not None and normalize_role(role):
            user.role = normalize_role(role)

        user = await self._user_store.update(user)
        logger.info("user_updated", user_id=user.id, role=user.role)
        return user

    async def delete_user(self, actor: Caller, user_id: int) -> None:
        if actor.id == user_id:
            raise SelfDeletionError(user_id)
        if not await self._user_store.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info("user_deleted", user_id=user_id, by=actor.id)

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("name", "name is required", name)
        return cleaned
