"""Abstract interface for product storage."""

from abc import ABC, abstractmethod

from oficina.core.entities.product import Product


class IProductStore(ABC):
    """Interface for product persistence."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """
        Insert a product.

        When `quantity_on_hand` > 0 the initial ENTRY movement (at
        `cost_price`) is written in the same transaction.
        """
        pass

    @abstractmethod
    async def get(self, product_id: int) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Product | None:
        """Get product by its (upper-case) code."""
        pass

    @abstractmethod
    async def list_products(self) -> list[Product]:
        """List all products ordered by description."""
        pass

    @abstractmethod
    async def update_details(self, product: Product) -> Product:
        """
        Update descriptive and price fields. Never touches quantity_on_hand.

        Raises ProductNotFoundError when the row no longer exists.
        """
        pass

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        """Unlink work-order lines from the product, then remove it."""
        pass
