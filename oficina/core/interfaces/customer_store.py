"""Abstract interface for customer storage."""

from abc import ABC, abstractmethod

from oficina.core.entities.customer import Customer


class ICustomerStore(ABC):
    """Interface for customer persistence."""

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def get(self, customer_id: int) -> Customer | None:
        pass

    @abstractmethod
    async def list_customers(self) -> list[Customer]:
        """List customers ordered by name."""
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def delete(self, customer_id: int) -> bool:
        pass
