"""Abstract interface for account storage."""

from abc import ABC, abstractmethod

from oficina.core.entities.user import User


class IUserStore(ABC):
    """Interface for staff account persistence."""

    @abstractmethod
    async def create(self, user: User) -> User:
        pass

    @abstractmethod
    async def get(self, user_id: int) -> User | None:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> User | None:
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        pass
