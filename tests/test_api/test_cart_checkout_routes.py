"""Tests for cart and checkout endpoints."""

import pytest
from httpx import AsyncClient

CUSTOMER = {"name": "Ada", "email": "ada@example.com", "phone": "555-0100"}


async def add_vase(client: AsyncClient, session_id: str = "s1", quantity: int = 1) -> dict:
    response = await client.post(
        f"/cart/{session_id}/items",
        json={"product_id": "prod-vase", "quantity": quantity, "colors": ["Black"]},
    )
    assert response.status_code == 201
    return response.json()


class TestCartRoutes:
    @pytest.mark.asyncio
    async def test_add_and_view(self, client: AsyncClient):
        line = await add_vase(client, quantity=2)
        # 20 base + 3 medium complexity
        assert line["unit_price"] == "23"

        cart = (await client.get("/cart/s1")).json()
        assert cart["item_count"] == 2
        assert cart["subtotal"] == "46"

    @pytest.mark.asyncio
    async def test_invalid_selection_is_422(self, client: AsyncClient):
        response = await client.post(
            "/cart/s1/items",
            json={"product_id": "prod-vase", "size": "medium", "material": "ultra"},
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "CartValidationError"

    @pytest.mark.asyncio
    async def test_quantity_zero_deletes(self, client: AsyncClient):
        line = await add_vase(client)

        response = await client.patch(f"/cart/s1/items/{line['id']}", json={"quantity": 0})

        assert response.status_code == 200
        assert response.json()["items"] == []

    @pytest.mark.asyncio
    async def test_remove_missing_line(self, client: AsyncClient):
        response = await client.delete("/cart/s1/items/nope")
        assert response.status_code == 404


class TestCheckoutRoutes:
    @pytest.mark.asyncio
    async def test_quote(self, client: AsyncClient):
        await add_vase(client)

        response = await client.post(
            "/checkout/quote",
            json={"session_id": "s1", "city": "Alpharetta", "state": "Georgia"},
        )

        data = response.json()
        assert data["options"]["available"] == ["pickup", "delivery"]
        assert data["fulfillment_type"] == "pickup"
        assert data["total"] == "23"

    @pytest.mark.asyncio
    async def test_place_order(self, client: AsyncClient, gateway):
        await add_vase(client, quantity=2)

        response = await client.post(
            "/checkout",
            json={
                "session_id": "s1",
                "customer": CUSTOMER,
                "fulfillment": {"mode": "shipping", "address": "1 Main St", "city": "Macon", "state": "GA"},
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert len(data["order_numbers"]) == 2
        assert data["shipping"] == "8.99"
        assert data["total"] == "54.99"
        assert (await client.get("/cart/s1")).json()["items"] == []

    @pytest.mark.asyncio
    async def test_partial_checkout_is_207(self, client: AsyncClient, gateway):
        await add_vase(client, quantity=3)
        gateway.fail_on_create = 2

        response = await client.post(
            "/checkout",
            json={"session_id": "s1", "customer": CUSTOMER, "fulfillment": {"mode": "pickup", "zone": "Cumming, GA"}},
        )

        assert response.status_code == 207
        data = response.json()
        assert data["complete"] is False
        assert len(data["order_numbers"]) == 1
        assert data["expected_units"] == 3

    @pytest.mark.asyncio
    async def test_nothing_created_is_503(self, client: AsyncClient, gateway):
        await add_vase(client)
        gateway.fail_on_create = 1

        response = await client.post(
            "/checkout",
            json={"session_id": "s1", "customer": CUSTOMER, "fulfillment": {"mode": "pickup", "zone": "Cumming, GA"}},
        )

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_missing_customer_email_is_422(self, client: AsyncClient, gateway):
        await add_vase(client)

        response = await client.post(
            "/checkout",
            json={
                "session_id": "s1",
                "customer": {"name": "Ada", "email": ""},
                "fulfillment": {"mode": "pickup", "zone": "Cumming, GA"},
            },
        )

        assert response.status_code == 422
        assert gateway.create_calls == 0

    @pytest.mark.asyncio
    async def test_delivery_requires_address(self, client: AsyncClient):
        await add_vase(client)

        response = await client.post(
            "/checkout",
            json={"session_id": "s1", "customer": CUSTOMER, "fulfillment": {"mode": "delivery", "zone": "Cumming, GA"}},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_client_prices_are_ignored(self, client: AsyncClient, gateway):
        await add_vase(client)

        response = await client.post(
            "/checkout",
            json={
                "session_id": "s1",
                "items": [{"product_id": "prod-vase", "quantity": 1, "unit_price": "0.01"}],
                "customer": CUSTOMER,
                "fulfillment": {"mode": "pickup", "zone": "Cumming, GA"},
            },
        )

        assert response.status_code == 201
        assert response.json()["total"] == "23"
        assert [order.total_amount for order in gateway.orders.values()] == [23]

    @pytest.mark.asyncio
    async def test_shipping_inside_zone_is_422(self, client: AsyncClient, gateway):
        await add_vase(client)

        response = await client.post(
            "/checkout",
            json={
                "session_id": "s1",
                "customer": CUSTOMER,
                "fulfillment": {"mode": "shipping", "address": "2 Oak St", "city": "Alpharetta", "state": "GA"},
            },
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "CheckoutValidationError"
        assert gateway.create_calls == 0

    @pytest.mark.asyncio
    async def test_session_id_is_required(self, client: AsyncClient):
        response = await client.post(
            "/checkout",
            json={"customer": CUSTOMER, "fulfillment": {"mode": "pickup", "zone": "Cumming, GA"}},
        )

        assert response.status_code == 422
