"""
Work order line engine.

Adds and reverses billable lines on a work order while keeping three things
consistent: the product's quantity on hand, the line rows, and the order's
derived total.

Price resolution:
    PART,  staff      sale price if > 0, else cost price
    PART,  others     explicit price when given and valid, else as staff
    LABOR, staff      0
    LABOR, others     explicit price, required
"""

import math
from typing import Any

from oficina.config import get_logger
from oficina.core.entities.product import Product
from oficina.core.entities.work_order import LineKind, WorkOrderLine
from oficina.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
    WorkOrderClosedError,
    WorkOrderNotFoundError,
)
from oficina.core.interfaces.product_store import IProductStore
from oficina.core.interfaces.work_order_store import IWorkOrderStore
from oficina.core.services.role_policy import Action, RolePolicy

logger = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def parse_kind(kind: Any) -> LineKind:
    """Accept the wire value case-insensitively."""
    try:
        return LineKind(str(kind or "").strip().upper())
    except ValueError:
        allowed = ", ".join(k.value for k in LineKind)
        raise ValidationError("kind", f"must be one of {allowed}", kind)


def resolve_unit_price(
    kind: LineKind,
    is_staff: bool,
    product: Product | None = None,
    requested: Any = None,
) -> float:
    """Apply the price rules above. Raises ValidationError for a missing labor price."""
    if kind == LineKind.PART:
        if product is None:
            raise ValidationError("product_id", "product is required for parts")
        if not is_staff and _is_number(requested) and requested >= 0:
            return float(requested)
        return product.reference_price

    if is_staff:
        return 0.0
    if not _is_number(requested) or requested < 0:
        raise ValidationError("price", "labor lines need a non-negative price", requested)
    return float(requested)


class WorkOrderLineService:
    """Add and remove work order lines with stock and total bookkeeping."""

    def __init__(
        self,
        work_order_store: IWorkOrderStore,
        product_store: IProductStore,
        policy: RolePolicy | None = None,
    ) -> None:
        self._work_order_store = work_order_store
        self._product_store = product_store
        self._policy = policy or RolePolicy()

    async def list_lines(self, work_order_id: int, role: str | None) -> list[WorkOrderLine]:
        """
        Lines of a work order, subject to the staff open-order rule.

        Raises:
            WorkOrderNotFoundError: order does not exist
            ForbiddenError: staff asking for a closed order's lines
        """
        order = await self._work_order_store.get(work_order_id)
        if order is None:
            raise WorkOrderNotFoundError(work_order_id)
        self._policy.ensure_can_view_lines(role, order)
        return await self._work_order_store.list_lines(work_order_id)

    async def add_line(
        self,
        work_order_id: int,
        kind: Any,
        quantity: Any,
        role: str | None,
        product_id: int | None = None,
        description: str | None = None,
        price: Any = None,
    ) -> WorkOrderLine:
        """
        Add a part or labor line to an open work order.

        Parts consume stock; the order total is recomputed in the same
        transaction as the insert.

        Raises:
            WorkOrderNotFoundError: order does not exist
            WorkOrderClosedError: order is not OPEN
            ValidationError: bad kind, quantity, price or missing description
            ProductNotFoundError: part references an unknown product
            InsufficientStockError: quantity exceeds quantity on hand
        """
        self._policy.ensure(role, Action.ADD_WORK_ORDER_LINE)

        order = await self._work_order_store.get(work_order_id)
        if order is None:
            raise WorkOrderNotFoundError(work_order_id)
        if not order.is_open:
            raise WorkOrderClosedError(work_order_id)

        line_kind = parse_kind(kind)
        if not _is_number(quantity) or quantity <= 0:
            raise ValidationError("quantity", "must be a number greater than zero", quantity)

        is_staff = self._policy.is_staff(role)
        text = (description or "").strip()

        if line_kind == LineKind.PART:
            if product_id is None:
                raise ValidationError("product_id", "product is required for parts")
            if quantity != int(quantity):
                raise ValidationError("quantity", "parts are counted in whole units", quantity)

            product = await self._product_store.get(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            if quantity > product.quantity_on_hand:
                raise InsufficientStockError(
                    product_id=product_id,
                    requested=quantity,
                    available=product.quantity_on_hand,
                )

            unit_price = resolve_unit_price(line_kind, is_staff, product, price)
            line = WorkOrderLine(
                work_order_id=work_order_id,
                product_id=product_id,
                description=text or product.label,
                kind=line_kind,
                quantity=int(quantity),
                unit_price=unit_price,
            )
        else:
            if not text:
                raise ValidationError("description", "labor lines need a description")
            unit_price = resolve_unit_price(line_kind, is_staff, None, price)
            line = WorkOrderLine(
                work_order_id=work_order_id,
                product_id=None,
                description=text,
                kind=line_kind,
                quantity=float(quantity),
                unit_price=unit_price,
            )

        line = await self._work_order_store.add_line(
            line, consume_stock=line_kind == LineKind.PART
        )
        logger.info(
            "work_order_line_added",
            work_order_id=work_order_id,
            line_id=line.id,
            kind=line.kind.value,
            product_id=line.product_id,
            quantity=line.quantity,
            subtotal=line.subtotal,
        )
        return line

    async def remove_line(self, line_id: int, role: str | None) -> float:
        """
        Reverse a line: restore part stock, delete it, recompute the total.

        The restore is not a ledger entry. Returns the order's new total.

        Raises:
            ForbiddenError: caller is staff
            WorkOrderLineNotFoundError: line does not exist
        """
        self._policy.ensure(role, Action.REMOVE_WORK_ORDER_LINE)

        total = await self._work_order_store.remove_line(line_id)
        logger.info("work_order_line_removed", line_id=line_id, total=total)
        return total
