"""Integration tests for Cart API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.auth.dependencies import AuthenticatedCustomer, require_customer
from ordering.api.routes import cart_router, order_router
from ordering.cart.cart import CartStatus, ShoppingCart
from ordering.coupon.coupon import Coupon
from ordering.order.order import Order
from protean import current_domain
from shared.errors import register_error_handlers

CUSTOMER = AuthenticatedCustomer(id="cust-cart-001", email="asha@example.com", name="Asha")

ADDRESS = {"street": "12 Marine Drive", "city": "Mumbai", "state": "Maharashtra", "zipCode": "400001"}


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.dependency_overrides[require_customer] = lambda: CUSTOMER
    return TestClient(app)


def _create_cart(client, customer_id=CUSTOMER.id):
    """Helper: POST /carts and return the cart_id."""
    response = client.post("/carts", json={"customer_id": customer_id})
    assert response.status_code == 201
    return response.json()["cart_id"]


def _add_item(client, cart_id, quantity=1, customization=None, unit_price=199):
    """Helper: POST /carts/{cart_id}/items and return the line key."""
    response = client.post(
        f"/carts/{cart_id}/items",
        json={
            "productId": "prod-001",
            "name": "Big Mac",
            "unitPrice": unit_price,
            "quantity": quantity,
            "customization": customization,
        },
    )
    assert response.status_code == 201
    return response.json()["line_key"]


class TestCreateCartEndpoint:
    def test_create_cart(self, client):
        cart_id = _create_cart(client)
        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert cart.customer_id == CUSTOMER.id
        assert cart.status == CartStatus.ACTIVE.value

    def test_create_guest_cart(self, client):
        response = client.post("/carts", json={"sessionId": "browser-7f3a"})
        assert response.status_code == 201


class TestCartLinesEndpoints:
    def test_add_merges_identical_configurations(self, client):
        cart_id = _create_cart(client)
        first = _add_item(client, cart_id, 1, {"size": "large", "addedIngredients": ["Cheese", "Onions"]})
        second = _add_item(client, cart_id, 2, {"size": "large", "addedIngredients": ["Onions", "Cheese"]})
        assert first == second

        body = client.get(f"/carts/{cart_id}").json()
        assert body["item_count"] == 3
        assert len(body["lines"]) == 1
        assert body["lines"][0]["customization"]["added_ingredients"] == ["Cheese", "Onions"]

    def test_get_cart_prices_lines(self, client):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, 1, {"size": "large"}, unit_price=229)
        pricing = client.get(f"/carts/{cart_id}").json()["pricing"]
        assert pricing == {"subtotal": 229.0, "discount": 0.0, "tax": 11.45, "total": 240.45}

    def test_update_and_remove(self, client):
        cart_id = _create_cart(client)
        key = _add_item(client, cart_id)

        response = client.put(f"/carts/{cart_id}/items", json={"lineKey": key, "quantity": 5})
        assert response.status_code == 200
        assert client.get(f"/carts/{cart_id}").json()["item_count"] == 5

        response = client.delete(f"/carts/{cart_id}/items", params={"line_key": key})
        assert response.status_code == 200
        assert client.get(f"/carts/{cart_id}").json()["lines"] == []

    def test_unknown_line_is_bad_request(self, client):
        cart_id = _create_cart(client)
        response = client.put(f"/carts/{cart_id}/items", json={"lineKey": "missing", "quantity": 2})
        assert response.status_code == 400
        assert response.json()["error"] == "Item not found in cart"

    def test_invalid_size_is_bad_request(self, client):
        cart_id = _create_cart(client)
        response = client.post(
            f"/carts/{cart_id}/items",
            json={"productId": "prod-001", "name": "Big Mac", "unitPrice": 199, "customization": {"size": "huge"}},
        )
        assert response.status_code == 400

    def test_unknown_cart_is_not_found(self, client):
        response = client.get("/carts/missing")
        assert response.status_code == 404

    def test_clear(self, client):
        cart_id = _create_cart(client)
        _add_item(client, cart_id)
        assert client.post(f"/carts/{cart_id}/clear").status_code == 200
        assert client.get(f"/carts/{cart_id}").json()["item_count"] == 0


class TestCartStateEndpoints:
    def test_state_round_trips_through_restore(self, client):
        source = _create_cart(client)
        _add_item(client, source, 2, {"removedIngredients": ["Pickles"]})
        state = client.get(f"/carts/{source}/state").json()
        assert state["version"] == 1

        target = _create_cart(client)
        response = client.post(f"/carts/{target}/restore", json={"state": state})
        assert response.status_code == 200
        assert response.json() == {"line_count": 1}
        assert client.get(f"/carts/{target}").json()["item_count"] == 2

    def test_restore_browser_layout(self, client):
        cart_id = _create_cart(client)
        state = {"state": {"items": [{"product": "prod-004", "name": "Coca-Cola", "price": 79, "quantity": 3}]}}
        response = client.post(f"/carts/{cart_id}/restore", json={"state": state})
        assert response.json() == {"line_count": 1}

    def test_malformed_state_is_bad_request(self, client):
        cart_id = _create_cart(client)
        for state in (
            {"version": 1, "lines": ["oops"]},
            {"version": 1, "lines": [{"product_id": "p", "name": "Fries", "unit_price": 99, "quantity": "two"}]},
            {"state": {"items": [{"product": "p", "name": "Fries", "price": 99, "customization": "large"}]}},
        ):
            response = client.post(f"/carts/{cart_id}/restore", json={"state": state})
            assert response.status_code == 400


class TestCartCouponEndpoints:
    def test_apply_previews_pricing(self, client, launch_coupons):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, 2, unit_price=500)

        response = client.post(f"/carts/{cart_id}/coupon", json={"couponCode": "welcome20"})
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["deal"]["discount"] == 100.0
        assert body["pricing"]["total"] == 945.0
        assert client.get(f"/carts/{cart_id}").json()["coupon_code"] == "WELCOME20"

    def test_under_minimum_is_bad_request(self, client, launch_coupons):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, 1, unit_price=229)
        response = client.post(f"/carts/{cart_id}/coupon", json={"couponCode": "FLAT50"})
        assert response.status_code == 400
        assert response.json()["error"] == "Minimum order amount of ₹300 required"

    def test_unknown_coupon_is_not_found(self, client, launch_coupons):
        cart_id = _create_cart(client)
        _add_item(client, cart_id)
        response = client.post(f"/carts/{cart_id}/coupon", json={"couponCode": "NOPE"})
        assert response.status_code == 404
        assert response.json() == {"error": "Invalid or expired coupon code"}

    def test_preview_drops_discount_when_cart_shrinks(self, client, launch_coupons):
        cart_id = _create_cart(client)
        key = _add_item(client, cart_id, 2, unit_price=200)
        client.post(f"/carts/{cart_id}/coupon", json={"couponCode": "FLAT50"})

        client.put(f"/carts/{cart_id}/items", json={"lineKey": key, "quantity": 1})
        assert client.get(f"/carts/{cart_id}").json()["pricing"]["discount"] == 0.0


class TestCheckoutEndpoint:
    def test_checkout_places_order_and_converts_cart(self, client, launch_coupons):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, 2, {"size": "large"}, unit_price=229)
        client.post(f"/carts/{cart_id}/coupon", json={"couponCode": "FLAT50"})

        response = client.post(
            f"/carts/{cart_id}/checkout",
            json={"orderType": "delivery", "paymentMethod": "upi", "deliveryAddress": ADDRESS},
        )
        assert response.status_code == 201
        order = response.json()["order"]
        assert order["pricing"]["discount"] == 50.0
        assert order["pricing"]["total"] == 428.4
        assert order["cart_id"] == cart_id
        assert order["delivery_address"]["zip_code"] == "400001"

        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert cart.status == CartStatus.CONVERTED.value
        assert current_domain.repository_for(Coupon).find_by_code("FLAT50").used_count == 1
        assert current_domain.repository_for(Order).get(order["id"]).customer_id == CUSTOMER.id

    def test_checkout_twice_is_rejected(self, client):
        cart_id = _create_cart(client)
        _add_item(client, cart_id)
        body = {"orderType": "takeaway", "paymentMethod": "cash"}
        assert client.post(f"/carts/{cart_id}/checkout", json=body).status_code == 201
        assert client.post(f"/carts/{cart_id}/checkout", json=body).status_code == 400

    def test_other_customers_cart_is_not_found(self, client):
        cart_id = _create_cart(client, customer_id="cust-someone-else")
        _add_item(client, cart_id)
        response = client.post(f"/carts/{cart_id}/checkout", json={"orderType": "takeaway", "paymentMethod": "cash"})
        assert response.status_code == 404

    def test_empty_cart_is_rejected(self, client):
        cart_id = _create_cart(client)
        response = client.post(f"/carts/{cart_id}/checkout", json={"orderType": "takeaway", "paymentMethod": "cash"})
        assert response.status_code == 400
        assert response.json()["error"] == "Order must contain at least one item"
