"""Register Product Use Case: product row plus its opening stock entry."""

from oficina.application.dto.requests import CreateProductRequest
from oficina.config import get_logger
from oficina.core.entities.product import Product
from oficina.core.exceptions import DuplicateProductCodeError, ValidationError
from oficina.core.interfaces.product_store import IProductStore
from oficina.core.services.role_policy import Action, RolePolicy

logger = get_logger(__name__)


class RegisterProductUseCase:
    """Create a product. Initial quantity > 0 is ledgered at cost price."""

    def __init__(
        self,
        product_store: IProductStore | None = None,
        policy: RolePolicy | None = None,
    ):
        self._product_store = product_store
        self._policy = policy or RolePolicy()

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from oficina.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(self, request: CreateProductRequest, role: str | None) -> Product:
        """
        Raises:
            ForbiddenError: caller is staff
            ValidationError: blank code or description
            DuplicateProductCodeError: code already registered
        """
        self._policy.ensure(role, Action.CREATE_PRODUCT)

        code = request.code.strip().upper()
        if not code:
            raise ValidationError("code", "code is required", request.code)
        if not request.description.strip():
            raise ValidationError("description", "description is required")

        store = await self._get_product_store()
        if await store.get_by_code(code) is not None:
            raise DuplicateProductCodeError(code)

        product = await store.create(
            Product(
                code=code,
                description=request.description.strip(),
                brand=request.brand,
                unit=(request.unit or "").strip() or "UN",
                quantity_on_hand=request.quantity,
                cost_price=request.cost_price,
                sale_price=request.sale_price,
            )
        )
        logger.info(
            "product_registered",
            product_id=product.id,
            code=product.code,
            opening_quantity=product.quantity_on_hand,
        )
        return product
