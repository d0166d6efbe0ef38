"""Tests for SQLiteProductStore."""

from datetime import UTC, datetime, timedelta

import pytest

from oficina.core.entities import LineKind, Product, WorkOrder, WorkOrderLine
from oficina.core.exceptions import DuplicateProductCodeError, ProductNotFoundError
from oficina.infrastructure.storage.sqlite.inventory_store import SQLiteStockLedgerStore
from oficina.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from oficina.infrastructure.storage.sqlite.work_order_store import SQLiteWorkOrderStore


def _window() -> tuple[datetime, datetime]:
    now = datetime.now(UTC)
    return now - timedelta(hours=1), now + timedelta(hours=1)


class TestCreate:
    async def test_create_assigns_id(self, db):
        store = SQLiteProductStore()
        product = await store.create(Product(code="FLT-001", description="Oil filter"))

        assert product.id is not None
        fetched = await store.get(product.id)
        assert fetched.code == "FLT-001"
        assert fetched.unit == "UN"
        assert fetched.quantity_on_hand == 0

    async def test_opening_stock_is_ledgered(self, db):
        store = SQLiteProductStore()
        product = await store.create(
            Product(code="PAD-1", description="Brake pad", quantity_on_hand=6, cost_price=12.5)
        )

        entries = await SQLiteStockLedgerStore().list_entries(*_window())
        assert len(entries) == 1
        assert entries[0].product_id == product.id
        assert entries[0].quantity == 6
        assert entries[0].unit_cost == 12.5
        assert entries[0].product_code == "PAD-1"

    async def test_no_entry_without_stock(self, db):
        await SQLiteProductStore().create(Product(code="PAD-2", description="Brake pad"))
        assert await SQLiteStockLedgerStore().list_entries(*_window()) == []

    async def test_duplicate_code(self, db):
        store = SQLiteProductStore()
        await store.create(Product(code="FLT-001", description="Oil filter", quantity_on_hand=3))

        with pytest.raises(DuplicateProductCodeError):
            await store.create(
                Product(code="FLT-001", description="Other", quantity_on_hand=2)
            )

        assert len(await store.list_products()) == 1
        assert len(await SQLiteStockLedgerStore().list_entries(*_window())) == 1


class TestRead:
    async def test_get_missing(self, db):
        assert await SQLiteProductStore().get(999) is None

    async def test_get_by_code_normalizes(self, db):
        store = SQLiteProductStore()
        await store.create(Product(code="FLT-001", description="Oil filter"))

        found = await store.get_by_code(" flt-001 ")
        assert found is not None
        assert found.description == "Oil filter"

    async def test_list_ordered_by_description(self, db):
        store = SQLiteProductStore()
        await store.create(Product(code="B", description="Spark plug"))
        await store.create(Product(code="A", description="Air filter"))

        products = await store.list_products()
        assert [p.description for p in products] == ["Air filter", "Spark plug"]


class TestUpdateDetails:
    async def test_writes_prices_not_quantity(self, db):
        store = SQLiteProductStore()
        product = await store.create(
            Product(code="FLT-001", description="Oil filter", quantity_on_hand=4)
        )

        updated = await store.update_details(
            product.model_copy(update={"sale_price": 39.9, "quantity_on_hand": 100})
        )

        assert updated.sale_price == 39.9
        assert updated.quantity_on_hand == 4

    async def test_row_deleted_meanwhile(self, db):
        store = SQLiteProductStore()
        product = await store.create(Product(code="FLT-001", description="Oil filter"))
        await store.delete(product.id)

        with pytest.raises(ProductNotFoundError):
            await store.update_details(product.model_copy(update={"sale_price": 10.0}))


class TestDelete:
    async def test_delete_keeps_history_and_lines(self, db, customer_id):
        products = SQLiteProductStore()
        orders = SQLiteWorkOrderStore()
        product = await products.create(
            Product(code="FLT-001", description="Oil filter", quantity_on_hand=5, sale_price=35.0)
        )
        order = await orders.create(WorkOrder(customer_id=customer_id, plate="ABC1D23"))
        await orders.add_line(
            WorkOrderLine(
                work_order_id=order.id,
                product_id=product.id,
                description=product.description,
                kind=LineKind.PART,
                quantity=1,
                unit_price=35.0,
            ),
            consume_stock=True,
        )

        assert await products.delete(product.id) is True

        assert await products.get(product.id) is None
        (kept,) = await orders.list_lines(order.id)
        assert kept.product_id is None
        assert kept.description == "Oil filter"
        entries = await SQLiteStockLedgerStore().list_entries(*_window())
        assert [e.product_id for e in entries] == [product.id]

    async def test_delete_missing(self, db):
        assert await SQLiteProductStore().delete(999) is False
