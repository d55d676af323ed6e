"""End-to-end storefront flows through the assembled application."""

from assistant.llm import set_language_model
from assistant.llm.fake_adapter import FakeLanguageModel
from fastapi.testclient import TestClient


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestCheckoutFlow:
    def test_cart_to_order(self, client, seeded, signed_in):
        big_mac = seeded["Big Mac"]
        price = client.get(f"/products/{big_mac}/price", params={"size": "large"}).json()["price"]
        assert price == 229.0

        cart_id = client.post("/carts", json={"customerId": signed_in["user"]["id"]}).json()["cart_id"]
        client.post(
            f"/carts/{cart_id}/items",
            json={
                "productId": big_mac,
                "name": "Big Mac",
                "unitPrice": price,
                "customization": {"size": "large", "removedIngredients": ["Pickles"]},
            },
        )

        coupon = client.post(f"/carts/{cart_id}/coupon", json={"couponCode": "FLAT50"})
        assert coupon.status_code == 400
        assert coupon.json()["error"] == "Minimum order amount of ₹300 required"

        response = client.post(f"/carts/{cart_id}/checkout", json={"orderType": "takeaway", "paymentMethod": "upi"})
        assert response.status_code == 201
        order = response.json()["order"]
        assert order["pricing"]["total"] == 240.45

        orders = client.get("/orders").json()["orders"]
        assert [o["id"] for o in orders] == [order["id"]]
        assert orders[0]["lines"][0]["customization"]["removed_ingredients"] == ["Pickles"]

    def test_direct_order_with_bearer_token(self, client, seeded, signed_in):
        client.cookies.clear()
        response = client.post(
            "/orders",
            headers={"Authorization": f"Bearer {signed_in['token']}"},
            json={
                "items": [
                    {
                        "productId": seeded["Big Mac"],
                        "name": "Big Mac",
                        "unitPrice": 229,
                        "quantity": 2,
                        "customization": {"size": "large"},
                    }
                ],
                "orderType": "delivery",
                "paymentMethod": "card",
                "deliveryAddress": {
                    "street": "12 Marine Drive",
                    "city": "Mumbai",
                    "state": "Maharashtra",
                    "zipCode": "400001",
                },
                "couponCode": "welcome20",
            },
        )
        assert response.status_code == 201
        pricing = response.json()["order"]["pricing"]
        assert pricing["discount"] == 91.6
        assert pricing["total"] == 384.72

    def test_deals(self, client, seeded):
        deals = client.get("/deals").json()["deals"]
        assert {deal["code"] for deal in deals} == {"WELCOME20", "FLAT50", "BURGER30"}

        response = client.post("/deals/validate", json={"code": "welcome20", "orderAmount": 1000})
        assert response.json()["deal"]["discount"] == 100.0


class TestErrors:
    def test_orders_need_authentication(self, client):
        response = client.get("/orders")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_invalid_token(self, client):
        response = client.get("/orders", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_missing_field(self, client):
        response = client.post("/deals/validate", json={"code": "FLAT50"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("orderAmount: ")

    def test_unknown_product(self, client, seeded):
        response = client.get("/products/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_unexpected_error_is_generic(self, application, seeded, monkeypatch):
        from catalogue.api import routes

        def _broken(category=None):
            raise RuntimeError("database unreachable")

        monkeypatch.setattr(routes, "list_products", _broken)
        response = TestClient(application, raise_server_exceptions=False).get("/products")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestAssistant:
    def test_keyword_fallback_without_model(self, client, seeded):
        set_language_model(None)
        response = client.post("/ai/chatbot", json={"message": "a cold drink"})
        assert response.status_code == 200
        names = {product["name"] for product in response.json()["products"]}
        assert names == {"Coca Cola", "Orange Juice"}

    def test_model_reply(self, client, seeded):
        set_language_model(FakeLanguageModel(reply="The McFlurry is a treat."))
        body = client.post("/ai/chatbot", json={"message": "dessert?"}).json()
        assert body["text"] == "The McFlurry is a treat."
        assert [product["name"] for product in body["products"]] == ["McFlurry"]

    def test_failed_model_falls_back_silently(self, client, seeded):
        model = FakeLanguageModel()
        model.configure(should_fail=True)
        set_language_model(model)
        response = client.post("/ai/chatbot", json={"message": "show me burgers"})
        assert response.status_code == 200
        assert response.json()["text"] == "Here are our burger options:"

    def test_history_needs_login(self, client, seeded):
        set_language_model(None)
        body = client.post("/ai/chatbot", json={"message": "my order history"}).json()
        assert body["text"] == "Please login to view your order history."

    def test_blank_message(self, client):
        response = client.post("/ai/chatbot", json={"message": "   "})
        assert response.status_code == 400
        assert response.json()["error"] == "Message is required"

    def test_recommendations_within_budget(self, client, seeded):
        response = client.post("/ai/recommend", json={"budget": 80, "preferences": {"vegetarian": True}})
        names = {product["name"] for product in response.json()["recommendations"]}
        assert names == {"French Fries", "Coca Cola", "Orange Juice"}
