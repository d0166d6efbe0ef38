"""Work order lifecycle: open, list, close."""

from datetime import UTC, datetime

from oficina.config import get_logger
from oficina.core.entities.work_order import WorkOrder
from oficina.core.exceptions import (
    CustomerNotFoundError,
    ValidationError,
    WorkOrderNotFoundError,
)
from oficina.core.interfaces.customer_store import ICustomerStore
from oficina.core.interfaces.work_order_store import IWorkOrderStore
from oficina.core.services.role_policy import Action, RolePolicy

logger = get_logger(__name__)


class WorkOrderService:
    """Opens and closes work orders. Totals are owned by the line engine."""

    def __init__(
        self,
        work_order_store: IWorkOrderStore,
        customer_store: ICustomerStore,
        policy: RolePolicy | None = None,
    ) -> None:
        self._work_order_store = work_order_store
        self._customer_store = customer_store
        self._policy = policy or RolePolicy()

    async def open_order(
        self,
        customer_id: int,
        plate: str,
        role: str | None,
        vehicle_description: str | None = None,
        problem_description: str | None = None,
    ) -> WorkOrder:
        """
        Open a work order for an existing customer.

        Raises:
            ValidationError: plate missing
            CustomerNotFoundError: unknown customer
        """
        self._policy.ensure(role, Action.CREATE_WORK_ORDER)

        if not (plate or "").strip():
            raise ValidationError("plate", "plate is required", plate)

        customer = await self._customer_store.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        order = await self._work_order_store.create(
            WorkOrder(
                customer_id=customer_id,
                customer_name=customer.name,
                plate=plate,
                vehicle_description=vehicle_description,
                problem_description=problem_description,
            )
        )
        logger.info(
            "work_order_opened",
            work_order_id=order.id,
            customer_id=customer_id,
            plate=order.plate,
        )
        return order

    async def list_orders(self, role: str | None) -> list[WorkOrder]:
        """Newest first. Staff only get open orders."""
        self._policy.ensure(role, Action.VIEW_WORK_ORDERS)
        orders = await self._work_order_store.list_orders()
        return self._policy.visible_work_orders(role, orders)

    async def close_order(
        self, work_order_id: int, role: str | None, now: datetime | None = None
    ) -> WorkOrder:
        """
        Mark a work order FINALIZADA and stamp closed_at.

        Raises:
            ForbiddenError: caller is staff
            WorkOrderNotFoundError: order does not exist
        """
        self._policy.ensure(role, Action.CLOSE_WORK_ORDER)

        order = await self._work_order_store.close(work_order_id, now or datetime.now(UTC))
        if order is None:
            raise WorkOrderNotFoundError(work_order_id)

        logger.info("work_order_closed", work_order_id=work_order_id, total=order.total)
        return order
