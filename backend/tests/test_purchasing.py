"""
Acaia Club Backend — Supplier and Purchase Order Tests
=======================================================

What:  Endpoint tests for /api/suppliers and /api/purchase-orders.

What we test:
    ✅ Every purchasing route needs a login (401, no data in the body)
    ✅ Item and order totals are computed server-side, returned as strings
    ✅ Setting RECEIVED stamps actualDeliveryDate with the current time
    ✅ Other statuses leave actualDeliveryDate untouched
    ✅ Unknown supplier (404), duplicate invoice (409), supplier in use (409)
    ✅ Leaving RECEIVED keeps the delivery stamp
    ✅ Prices with sub-cent digits and totals too large to store are 400
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from conftest import create_supplier


def parse_timestamp(value: str) -> datetime:
    # SQLite hands timestamps back without an offset; they are UTC
    stamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def order_body(supplier_id: str, **fields) -> dict:
    body = {
        "supplierId": supplier_id,
        "items": [
            {"description": "Acai pulp", "orderedQuantity": "2.5", "orderedUnit": "kg", "unitCost": "10.00"},
            {"description": "Granola", "orderedQuantity": 3, "orderedUnit": "bag", "unitCost": 4.2},
        ],
    }
    body.update(fields)
    return body


class TestAuthentication:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/suppliers", "/api/purchase-orders"])
    async def test_listing_requires_login(self, test_client, path):
        response = await test_client.get(path)

        assert response.status_code == 401
        body = response.json()
        assert body == {"success": False, "error": body["error"]}

    @pytest.mark.asyncio
    async def test_create_order_requires_login(self, test_client):
        response = await test_client.post(
            "/api/purchase-orders", json=order_body("00000000-0000-0000-0000-000000000000")
        )

        assert response.status_code == 401


class TestSuppliers:

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(self, auth_client):
        await create_supplier(auth_client, "Dairy Co")

        response = await auth_client.post("/api/suppliers", json={"name": "Dairy Co"})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_update_contact(self, auth_client):
        supplier = await create_supplier(auth_client)

        response = await auth_client.patch(
            f"/api/suppliers/{supplier['id']}", json={"contactEmail": "orders@fruits.example"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["contactEmail"] == "orders@fruits.example"
        assert response.json()["data"]["name"] == supplier["name"]

    @pytest.mark.asyncio
    async def test_supplier_with_orders_cannot_be_deleted(self, auth_client):
        supplier = await create_supplier(auth_client)
        await auth_client.post("/api/purchase-orders", json=order_body(supplier["id"]))

        response = await auth_client.delete(f"/api/suppliers/{supplier['id']}")

        assert response.status_code == 409


class TestPurchaseOrders:

    @pytest.mark.asyncio
    async def test_create_computes_totals(self, auth_client):
        supplier = await create_supplier(auth_client)

        response = await auth_client.post("/api/purchase-orders", json=order_body(supplier["id"]))

        assert response.status_code == 201
        order = response.json()["data"]
        assert order["status"] == "PENDING"
        assert order["totalCost"] == "37.60"
        assert order["supplier"]["name"] == "Fresh Fruits Ltda"
        assert order["actualDeliveryDate"] is None
        totals = sorted(item["totalItemCost"] for item in order["items"])
        assert totals == ["12.60", "25.00"]

    @pytest.mark.asyncio
    async def test_client_supplied_totals_are_ignored(self, auth_client):
        supplier = await create_supplier(auth_client)
        body = order_body(supplier["id"], totalCost="1.00")

        response = await auth_client.post("/api/purchase-orders", json=body)

        assert response.json()["data"]["totalCost"] == "37.60"

    @pytest.mark.asyncio
    async def test_order_needs_items(self, auth_client):
        supplier = await create_supplier(auth_client)

        response = await auth_client.post(
            "/api/purchase-orders", json=order_body(supplier["id"], items=[])
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "items"

    @pytest.mark.asyncio
    async def test_invalid_item_reports_nested_field(self, auth_client):
        supplier = await create_supplier(auth_client)
        items = [{"description": "Ice", "orderedQuantity": 0, "orderedUnit": "kg", "unitCost": 1}]

        response = await auth_client.post(
            "/api/purchase-orders", json=order_body(supplier["id"], items=items)
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "items.0.orderedQuantity"

    @pytest.mark.asyncio
    async def test_unknown_supplier_is_404(self, auth_client):
        response = await auth_client.post(
            "/api/purchase-orders", json=order_body("00000000-0000-0000-0000-000000000000")
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate_invoice_number_is_conflict(self, auth_client):
        supplier = await create_supplier(auth_client)
        body = order_body(supplier["id"], invoiceNumber="INV-001")
        await auth_client.post("/api/purchase-orders", json=body)

        response = await auth_client.post("/api/purchase-orders", json=body)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_received_stamps_delivery_date(self, auth_client):
        supplier = await create_supplier(auth_client)
        created = await auth_client.post("/api/purchase-orders", json=order_body(supplier["id"]))
        order_id = created.json()["data"]["id"]

        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        response = await auth_client.patch(
            f"/api/purchase-orders/{order_id}/status", json={"status": "RECEIVED"}
        )
        after = datetime.now(timezone.utc) + timedelta(seconds=1)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "RECEIVED"
        assert before <= parse_timestamp(data["actualDeliveryDate"]) <= after

    @pytest.mark.asyncio
    async def test_other_status_leaves_delivery_date_alone(self, auth_client):
        supplier = await create_supplier(auth_client)
        created = await auth_client.post("/api/purchase-orders", json=order_body(supplier["id"]))
        order_id = created.json()["data"]["id"]

        response = await auth_client.patch(
            f"/api/purchase-orders/{order_id}/status", json={"status": "APPROVED"}
        )

        assert response.json()["data"]["status"] == "APPROVED"
        assert response.json()["data"]["actualDeliveryDate"] is None

    @pytest.mark.asyncio
    async def test_unknown_status_is_rejected(self, auth_client):
        supplier = await create_supplier(auth_client)
        created = await auth_client.post("/api/purchase-orders", json=order_body(supplier["id"]))

        response = await auth_client.patch(
            f"/api/purchase-orders/{created.json()['data']['id']}/status",
            json={"status": "LOST"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_removes_order(self, auth_client):
        supplier = await create_supplier(auth_client)
        created = await auth_client.post("/api/purchase-orders", json=order_body(supplier["id"]))
        order_id = created.json()["data"]["id"]

        response = await auth_client.delete(f"/api/purchase-orders/{order_id}")

        assert response.status_code == 200
        assert (await auth_client.get(f"/api/purchase-orders/{order_id}")).status_code == 404


class TestPurchasingLimits:

    @pytest.mark.asyncio
    async def test_update_unknown_supplier_is_404(self, auth_client):
        response = await auth_client.patch(f"/api/suppliers/{uuid.uuid4()}", json={"name": "Ghost"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_status_of_unknown_order_is_404(self, auth_client):
        response = await auth_client.patch(
            f"/api/purchase-orders/{uuid.uuid4()}/status", json={"status": "RECEIVED"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_leaving_received_keeps_delivery_date(self, auth_client):
        supplier = await create_supplier(auth_client)
        created = await auth_client.post("/api/purchase-orders", json=order_body(supplier["id"]))
        order_id = created.json()["data"]["id"]
        received = await auth_client.patch(
            f"/api/purchase-orders/{order_id}/status", json={"status": "RECEIVED"}
        )
        stamp = received.json()["data"]["actualDeliveryDate"]

        response = await auth_client.patch(
            f"/api/purchase-orders/{order_id}/status", json={"status": "APPROVED"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "APPROVED"
        assert parse_timestamp(response.json()["data"]["actualDeliveryDate"]) == parse_timestamp(stamp)

    @pytest.mark.asyncio
    async def test_unit_cost_beyond_cents_is_rejected(self, auth_client):
        supplier = await create_supplier(auth_client)
        body = order_body(supplier["id"])
        body["items"][0]["unitCost"] = "1.005"

        response = await auth_client.post("/api/purchase-orders", json=body)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "items.0.unitCost"

    @pytest.mark.asyncio
    async def test_total_beyond_column_range_is_rejected(self, auth_client):
        supplier = await create_supplier(auth_client)
        body = order_body(supplier["id"])
        body["items"][0].update(orderedQuantity="999999999.999", unitCost="9999999999.99")

        response = await auth_client.post("/api/purchase-orders", json=body)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "items"
        assert (await auth_client.get("/api/purchase-orders")).json()["data"] == []
