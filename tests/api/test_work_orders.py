"""API tests for work order (OS) endpoints."""

from oficina.core.entities import LineKind, WorkOrderLine
from oficina.core.exceptions import WorkOrderLineNotFoundError


class TestListOrders:
    async def test_admin_sees_all_with_totals(self, client, headers):
        response = await client.get("/api/os", headers=headers["ADMIN"])

        assert response.status_code == 200
        orders = response.json()
        assert [o["status"] for o in orders] == ["ABERTA", "FINALIZADA"]
        assert orders[0]["total"] == 70.0

    async def test_staff_sees_open_without_totals(self, client, headers):
        response = await client.get("/api/os", headers=headers["FUNCIONARIO"])

        orders = response.json()
        assert len(orders) == 1
        assert orders[0]["status"] == "ABERTA"
        assert orders[0]["plate"] == "ABC1D23"
        assert "total" not in orders[0]
        assert "closed_at" not in orders[0]


class TestOpenOrder:
    async def test_created(self, client, headers, work_order_store):
        work_order_store.create.side_effect = lambda o: o.model_copy(update={"id": 12})

        response = await client.post(
            "/api/os",
            json={"customer_id": 1, "plate": "xyz9a87"},
            headers=headers["FUNCIONARIO"],
        )

        assert response.status_code == 201
        assert response.json()["id"] == 12
        assert response.json()["customer_name"] == "AUTO PECAS SILVA"

    async def test_unknown_customer(self, client, headers, customer_store):
        customer_store.get.return_value = None

        response = await client.post(
            "/api/os", json={"customer_id": 9, "plate": "X"}, headers=headers["ADMIN"]
        )

        assert response.status_code == 404

    async def test_plate_required(self, client, headers):
        response = await client.post(
            "/api/os", json={"customer_id": 1}, headers=headers["ADMIN"]
        )
        assert response.status_code == 422


class TestLines:
    async def test_list_projected_for_staff(self, client, headers, work_order_store, part_line):
        work_order_store.list_lines.return_value = [part_line]

        response = await client.get("/api/os/1/itens", headers=headers["FUNCIONARIO"])

        assert response.status_code == 200
        assert response.json() == [
            {"id": part_line.id, "kind": "PECA", "description": part_line.description, "quantity": 2}
        ]

    async def test_staff_closed_order_lines_forbidden(
        self, client, headers, work_order_store, closed_order
    ):
        work_order_store.get.return_value = closed_order
        response = await client.get("/api/os/2/itens", headers=headers["FUNCIONARIO"])
        assert response.status_code == 403

    async def test_add_part(self, client, headers, work_order_store):
        work_order_store.add_line.side_effect = lambda line, consume_stock: line.model_copy(
            update={"id": 40}
        )

        response = await client.post(
            "/api/os/1/itens",
            json={"kind": "PECA", "product_id": 1, "quantity": 3, "price": 99},
            headers=headers["GERENTE"],
        )

        assert response.status_code == 201
        body = response.json()
        assert body["unit_price"] == 99.0
        assert body["subtotal"] == 297.0
        assert work_order_store.add_line.call_args.kwargs["consume_stock"] is True

    async def test_add_part_beyond_stock(self, client, headers, work_order_store):
        response = await client.post(
            "/api/os/1/itens",
            json={"kind": "PECA", "product_id": 1, "quantity": 11},
            headers=headers["FUNCIONARIO"],
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"
        work_order_store.add_line.assert_not_called()

    async def test_add_to_closed_order(self, client, headers, work_order_store, closed_order):
        work_order_store.get.return_value = closed_order

        response = await client.post(
            "/api/os/2/itens",
            json={"kind": "SERVICO", "description": "Alignment", "quantity": 1, "price": 60},
            headers=headers["ADMIN"],
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "WORK_ORDER_CLOSED"

    async def test_bad_kind(self, client, headers):
        response = await client.post(
            "/api/os/1/itens",
            json={"kind": "OTHER", "quantity": 1},
            headers=headers["ADMIN"],
        )
        assert response.status_code == 400

    async def test_remove_returns_total(self, client, headers, work_order_store):
        work_order_store.remove_line.return_value = 0.0

        response = await client.delete("/api/os/itens/5", headers=headers["GERENTE"])

        assert response.status_code == 200
        assert response.json() == {"line_id": 5, "work_order_total": 0.0}

    async def test_staff_cannot_remove(self, client, headers, work_order_store):
        response = await client.delete("/api/os/itens/5", headers=headers["FUNCIONARIO"])

        assert response.status_code == 403
        work_order_store.remove_line.assert_not_called()

    async def test_remove_missing(self, client, headers, work_order_store):
        work_order_store.remove_line.side_effect = WorkOrderLineNotFoundError(5)
        response = await client.delete("/api/os/itens/5", headers=headers["ADMIN"])
        assert response.status_code == 404


class TestCloseOrder:
    async def test_close(self, client, headers, work_order_store, closed_order):
        work_order_store.close.return_value = closed_order

        response = await client.put("/api/os/1/finalizar", headers=headers["GERENTE"])

        assert response.status_code == 200
        assert response.json()["status"] == "FINALIZADA"

    async def test_staff_forbidden(self, client, headers):
        response = await client.put("/api/os/1/finalizar", headers=headers["FUNCIONARIO"])
        assert response.status_code == 403


def test_line_kinds_on_the_wire():
    line = WorkOrderLine(
        work_order_id=1, description="Labor", kind=LineKind.LABOR, quantity=1, unit_price=0
    )
    assert line.model_dump(mode="json")["kind"] == "SERVICO"
