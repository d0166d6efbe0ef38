"""Update Product Use Case: role-branching details, count and entry updates."""

from oficina.application.dto.requests import UpdateProductRequest
from oficina.config import get_logger
from oficina.core.entities.product import Product
from oficina.core.exceptions import ForbiddenError, ProductNotFoundError, ValidationError
from oficina.core.interfaces.inventory_store import IStockLedgerStore
from oficina.core.interfaces.product_store import IProductStore
from oficina.core.services.role_policy import Action, RolePolicy
from oficina.core.services.stock_ledger import StockLedgerService

logger = get_logger(__name__)

DETAIL_FIELDS = ("description", "brand", "unit", "cost_price", "sale_price")


class UpdateProductUseCase:
    """
    Staff: `entry_quantity` only, recorded as a stock entry at cost price.

    Other roles, applied in this order, each step in its own transaction:
    1. details (description, brand, unit, prices)
    2. `quantity`: physical count; increases are ledgered
    3. `entry_quantity`: stock entry at the (possibly new) cost price
    """

    def __init__(
        self,
        product_store: IProductStore | None = None,
        ledger_store: IStockLedgerStore | None = None,
        policy: RolePolicy | None = None,
    ):
        self._product_store = product_store
        self._ledger_store = ledger_store
        self._policy = policy or RolePolicy()

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from oficina.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_ledger(self) -> StockLedgerService:
        if self._ledger_store is None:
            from oficina.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return StockLedgerService(self._ledger_store)

    async def execute(
        self, product_id: int, request: UpdateProductRequest, role: str | None
    ) -> Product:
        """
        Raises:
            ProductNotFoundError: unknown product
            ForbiddenError: staff sending anything but entry_quantity
            ValidationError: bad quantities or blank description
        """
        self._policy.ensure(role, Action.UPDATE_PRODUCT)

        store = await self._get_product_store()
        product = await store.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        ledger = await self._get_ledger()

        if self._policy.is_staff(role):
            if set(changes) - {"entry_quantity"}:
                raise ForbiddenError()
            if "entry_quantity" not in changes:
                raise ValidationError("entry_quantity", "entry quantity is required")
            await ledger.record_entry(product_id, changes["entry_quantity"], product.cost_price)
        else:
            details = {k: v for k, v in changes.items() if k in DETAIL_FIELDS}
            if details:
                if "description" in details and not details["description"].strip():
                    raise ValidationError("description", "description cannot be blank")
                product = await store.update_details(product.model_copy(update=details))
            if "quantity" in changes:
                await ledger.adjust_to_count(product_id, changes["quantity"], product.cost_price)
            if "entry_quantity" in changes:
                await ledger.record_entry(
                    product_id, changes["entry_quantity"], product.cost_price
                )

        updated = await store.get(product_id)
        if updated is None:
            raise ProductNotFoundError(product_id)

        logger.info(
            "product_update_applied",
            product_id=product_id,
            fields=sorted(changes),
            quantity_on_hand=updated.quantity_on_hand,
        )
        return updated
