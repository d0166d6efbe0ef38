"""Tests for the role policy."""

import pytest

from oficina.core.entities import Role
from oficina.core.exceptions import ForbiddenError
from oficina.core.services import Action, RolePolicy

STAFF = Role.STAFF.value
ADMIN = Role.ADMIN.value
MANAGER = Role.MANAGER.value


class TestAuthorize:
    @pytest.mark.parametrize(
        "action",
        [
            Action.CREATE_PRODUCT,
            Action.DELETE_PRODUCT,
            Action.VIEW_STOCK_SUMMARY,
            Action.VIEW_STOCK_HISTORY,
            Action.VIEW_DASHBOARD,
            Action.MANAGE_EXPENSES,
            Action.MANAGE_CUSTOMERS,
            Action.MANAGE_RECEIVABLES,
            Action.CLOSE_WORK_ORDER,
            Action.REMOVE_WORK_ORDER_LINE,
            Action.MANAGE_USERS,
        ],
    )
    def test_staff_denied(self, policy, action):
        assert policy.authorize(STAFF, action) is False

    @pytest.mark.parametrize(
        "action",
        [
            Action.VIEW_PRODUCTS,
            Action.UPDATE_PRODUCT,
            Action.VIEW_WORK_ORDERS,
            Action.CREATE_WORK_ORDER,
            Action.VIEW_WORK_ORDER_LINES,
            Action.ADD_WORK_ORDER_LINE,
            Action.LOOKUP_PRODUCT_BY_CODE,
        ],
    )
    def test_staff_allowed(self, policy, action):
        assert policy.authorize(STAFF, action) is True

    def test_lookup_by_code_is_staff_only(self, policy):
        assert policy.authorize(ADMIN, Action.LOOKUP_PRODUCT_BY_CODE) is False
        assert policy.authorize(MANAGER, Action.LOOKUP_PRODUCT_BY_CODE) is False

    def test_user_management_is_admin_only(self, policy):
        assert policy.authorize(ADMIN, Action.MANAGE_USERS) is True
        assert policy.authorize(MANAGER, Action.MANAGE_USERS) is False

    def test_unknown_role_gets_manager_tier(self, policy):
        assert policy.authorize("SOCIO", Action.VIEW_DASHBOARD) is True
        assert policy.authorize("SOCIO", Action.MANAGE_USERS) is False

    def test_role_is_case_insensitive(self, policy):
        assert policy.authorize("funcionario", Action.VIEW_DASHBOARD) is False
        assert policy.authorize("admin", Action.MANAGE_USERS) is True

    def test_missing_role_never_matches_allow_list(self, policy):
        assert policy.authorize(None, Action.MANAGE_USERS) is False
        assert policy.authorize(None, Action.LOOKUP_PRODUCT_BY_CODE) is False

    def test_unknown_action_denied(self):
        policy = RolePolicy(rules={})
        assert policy.authorize(ADMIN, Action.VIEW_PRODUCTS) is False

    def test_ensure_raises(self, policy):
        with pytest.raises(ForbiddenError):
            policy.ensure(STAFF, Action.VIEW_DASHBOARD)
        policy.ensure(MANAGER, Action.VIEW_DASHBOARD)


class TestProjection:
    def test_staff_product_view(self, policy, sample_product):
        view = policy.project(STAFF, sample_product)
        assert view["cost_price"] == 0.0
        assert "sale_price" not in view
        assert view["quantity_on_hand"] == 10
        assert view["code"] == "FLT-001"

    def test_admin_product_view(self, policy, sample_product):
        view = policy.project(ADMIN, sample_product)
        assert view["cost_price"] == 20.0
        assert view["sale_price"] == 35.0

    def test_staff_work_order_view(self, policy, open_order):
        view = policy.project(STAFF, open_order)
        assert "total" not in view
        assert "closed_at" not in view
        assert view["status"] == "ABERTA"
        assert view["plate"] == "ABC1D23"

    def test_staff_line_view(self, policy, part_line):
        view = policy.project(STAFF, part_line)
        assert set(view) == {"id", "kind", "description", "quantity"}
        assert view["kind"] == "PECA"

    def test_manager_line_view_is_full(self, policy, part_line):
        view = policy.project(MANAGER, part_line)
        assert view["unit_price"] == 35.0
        assert view["subtotal"] == 70.0

    def test_project_all(self, policy, sample_product):
        views = policy.project_all(STAFF, [sample_product, sample_product])
        assert len(views) == 2
        assert all("sale_price" not in v for v in views)


class TestWorkOrderVisibility:
    def test_staff_sees_only_open(self, policy, open_order, closed_order):
        visible = policy.visible_work_orders(STAFF, [open_order, closed_order])
        assert visible == [open_order]

    def test_manager_sees_all(self, policy, open_order, closed_order):
        assert len(policy.visible_work_orders(MANAGER, [open_order, closed_order])) == 2

    def test_staff_cannot_view_closed_lines(self, policy, closed_order):
        with pytest.raises(ForbiddenError):
            policy.ensure_can_view_lines(STAFF, closed_order)

    def test_staff_can_view_open_lines(self, policy, open_order):
        policy.ensure_can_view_lines(STAFF, open_order)

    def test_admin_can_view_closed_lines(self, policy, closed_order):
        policy.ensure_can_view_lines(ADMIN, closed_order)
