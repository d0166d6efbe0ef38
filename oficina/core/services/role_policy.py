"""
Role-based access policy.

Single source of truth for which roles may perform which actions, and for
the fields each role is allowed to see on products, work orders and work
order lines. Pure: no I/O, no framework imports.

Tiers:
    ADMIN        everything
    FUNCIONARIO  operational staff; no financial figures, no destructive actions
    anything else  manager/owner tier; everything except account management
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from oficina.core.entities.product import Product
from oficina.core.entities.user import Role
from oficina.core.entities.work_order import WorkOrder, WorkOrderLine
from oficina.core.exceptions import ForbiddenError


class Action(str, Enum):
    """Operations gated by the policy."""

    VIEW_PRODUCTS = "view_products"
    LOOKUP_PRODUCT_BY_CODE = "lookup_product_by_code"
    CREATE_PRODUCT = "create_product"
    UPDATE_PRODUCT = "update_product"
    DELETE_PRODUCT = "delete_product"

    VIEW_STOCK_SUMMARY = "view_stock_summary"
    VIEW_STOCK_HISTORY = "view_stock_history"
    VIEW_DASHBOARD = "view_dashboard"

    MANAGE_EXPENSES = "manage_expenses"
    MANAGE_CUSTOMERS = "manage_customers"
    MANAGE_RECEIVABLES = "manage_receivables"
    MANAGE_USERS = "manage_users"

    VIEW_WORK_ORDERS = "view_work_orders"
    CREATE_WORK_ORDER = "create_work_order"
    CLOSE_WORK_ORDER = "close_work_order"
    VIEW_WORK_ORDER_LINES = "view_work_order_lines"
    ADD_WORK_ORDER_LINE = "add_work_order_line"
    REMOVE_WORK_ORDER_LINE = "remove_work_order_line"


def normalize_role(role: str | None) -> str:
    """Upper-case a role; a missing role becomes "" and matches no allow-list."""
    return str(role or "").strip().upper()


@dataclass(frozen=True)
class AccessRule:
    """Allow-list (when set) or deny-list for one action."""

    allowed: frozenset[str] | None = None
    denied: frozenset[str] = field(default_factory=frozenset)

    def permits(self, role: str | None) -> bool:
        normalized = normalize_role(role)
        if self.allowed is not None:
            return normalized in self.allowed
        return normalized not in self.denied


def _only(*roles: Role) -> AccessRule:
    return AccessRule(allowed=frozenset(r.value for r in roles))


def _all_but(*roles: Role) -> AccessRule:
    return AccessRule(denied=frozenset(r.value for r in roles))


EVERYONE = AccessRule()

ACCESS_RULES: dict[Action, AccessRule] = {
    Action.VIEW_PRODUCTS: EVERYONE,
    Action.LOOKUP_PRODUCT_BY_CODE: _only(Role.STAFF),
    Action.CREATE_PRODUCT: _all_but(Role.STAFF),
    Action.UPDATE_PRODUCT: EVERYONE,
    Action.DELETE_PRODUCT: _all_but(Role.STAFF),
    Action.VIEW_STOCK_SUMMARY: _all_but(Role.STAFF),
    Action.VIEW_STOCK_HISTORY: _all_but(Role.STAFF),
    Action.VIEW_DASHBOARD: _all_but(Role.STAFF),
    Action.MANAGE_EXPENSES: _all_but(Role.STAFF),
    Action.MANAGE_CUSTOMERS: _all_but(Role.STAFF),
    Action.MANAGE_RECEIVABLES: _all_but(Role.STAFF),
    Action.MANAGE_USERS: _only(Role.ADMIN),
    Action.VIEW_WORK_ORDERS: EVERYONE,
    Action.CREATE_WORK_ORDER: EVERYONE,
    Action.CLOSE_WORK_ORDER: _all_but(Role.STAFF),
    Action.VIEW_WORK_ORDER_LINES: EVERYONE,
    Action.ADD_WORK_ORDER_LINE: EVERYONE,
    Action.REMOVE_WORK_ORDER_LINE: _all_but(Role.STAFF),
}

# Field sets exposed to staff
STAFF_PRODUCT_FIELDS = {"id", "code", "description", "brand", "unit", "quantity_on_hand"}
STAFF_WORK_ORDER_FIELDS = {
    "id",
    "customer_id",
    "customer_name",
    "plate",
    "vehicle_description",
    "problem_description",
    "status",
    "opened_at",
}
STAFF_LINE_FIELDS = {"id", "kind", "description", "quantity"}


class RolePolicy:
    """Authorization decisions and role-shaped views of records."""

    def __init__(self, rules: dict[Action, AccessRule] | None = None) -> None:
        self._rules = ACCESS_RULES if rules is None else rules

    @staticmethod
    def is_staff(role: str | None) -> bool:
        return normalize_role(role) == Role.STAFF.value

    def authorize(self, role: str | None, action: Action) -> bool:
        """Whether `role` may perform `action`. Unknown actions are denied."""
        rule = self._rules.get(action)
        if rule is None:
            return False
        return rule.permits(role)

    def ensure(self, role: str | None, action: Action) -> None:
        """Raise ForbiddenError unless `role` may perform `action`."""
        if not self.authorize(role, action):
            raise ForbiddenError()

    def project(self, role: str | None, record: BaseModel) -> dict[str, Any]:
        """Serialize `record` with only the fields `role` may see."""
        if not self.is_staff(role):
            return record.model_dump(mode="json")

        if isinstance(record, Product):
            view = record.model_dump(mode="json", include=STAFF_PRODUCT_FIELDS)
            view["cost_price"] = 0.0
            return view
        if isinstance(record, WorkOrder):
            return record.model_dump(mode="json", include=STAFF_WORK_ORDER_FIELDS)
        if isinstance(record, WorkOrderLine):
            return record.model_dump(mode="json", include=STAFF_LINE_FIELDS)
        return record.model_dump(mode="json")

    def project_all(self, role: str | None, records: Iterable[BaseModel]) -> list[dict[str, Any]]:
        return [self.project(role, record) for record in records]

    def visible_work_orders(
        self, role: str | None, orders: Iterable[WorkOrder]
    ) -> list[WorkOrder]:
        """Staff only see open work orders."""
        if self.is_staff(role):
            return [order for order in orders if order.is_open]
        return list(orders)

    def ensure_can_view_lines(self, role: str | None, order: WorkOrder) -> None:
        """Staff may only look at lines of an open work order."""
        self.ensure(role, Action.VIEW_WORK_ORDER_LINES)
        if self.is_staff(role) and not order.is_open:
            raise ForbiddenError()
