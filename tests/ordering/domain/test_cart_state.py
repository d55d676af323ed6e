"""Tests for the client-side cart state and its migrations."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.state import CURRENT_VERSION, dump_cart_state, load_cart_state, migrate
from protean.exceptions import ValidationError

BROWSER_PAYLOAD = {
    "state": {
        "items": [
            {
                "product": "prod-001",
                "name": "Big Mac",
                "price": 229,
                "quantity": 1,
                "customization": {"size": "large", "addedIngredients": ["Cheese"], "removedIngredients": []},
            },
            {
                "id": "prod-001-large-Cheese",
                "product": "prod-001",
                "name": "Big Mac",
                "price": 229,
                "quantity": 2,
                "customization": {"size": "large", "addedIngredients": ["Cheese"]},
            },
            {"id": "prod-004", "product": "prod-004", "name": "Coca-Cola", "price": 79, "quantity": 1},
        ]
    },
    "version": 0,
}


class TestMigrate:
    def test_browser_layout_becomes_current(self):
        payload = migrate(BROWSER_PAYLOAD)
        assert payload["version"] == CURRENT_VERSION
        assert len(payload["lines"]) == 3
        first = payload["lines"][0]
        assert first["product_id"] == "prod-001"
        assert first["unit_price"] == 229
        assert first["customization"]["added_ingredients"] == ["Cheese"]

    def test_missing_version_is_treated_as_browser_layout(self):
        payload = migrate({"state": {"items": []}})
        assert payload == {"version": CURRENT_VERSION, "lines": []}

    def test_newer_version_is_rejected(self):
        with pytest.raises(ValidationError):
            migrate({"version": CURRENT_VERSION + 1, "lines": []})

    def test_invalid_version_is_rejected(self):
        with pytest.raises(ValidationError):
            migrate({"version": "two"})


class TestLoadCartState:
    def test_lines_are_rekeyed_and_merged(self):
        state = load_cart_state(BROWSER_PAYLOAD)
        assert len(state.lines) == 2
        big_mac = state.lines[0]
        assert big_mac.key == "prod-001|size:large|added:Cheese"
        assert big_mac.quantity == 3
        assert state.lines[1].key == "prod-004"

    def test_lines_without_quantity_are_dropped(self):
        state = load_cart_state(
            {"version": 1, "lines": [{"product_id": "p", "name": "Fries", "unit_price": 99, "quantity": 0}]}
        )
        assert state.lines == []

    def test_incomplete_line_is_rejected(self):
        with pytest.raises(ValidationError):
            load_cart_state({"version": 1, "lines": [{"product_id": "p", "quantity": 1}]})

    def test_payload_must_be_an_object(self):
        with pytest.raises(ValidationError):
            load_cart_state(["not", "a", "cart"])

    @pytest.mark.parametrize(
        "payload",
        [
            {"version": 1, "lines": ["oops"]},
            {"version": 1, "lines": {"product_id": "p"}},
            {"version": 1, "lines": [{"product_id": "p", "name": "Fries", "unit_price": 99, "quantity": "two"}]},
            {"version": 1, "lines": [{"product_id": "p", "name": "Fries", "unit_price": "free", "quantity": 1}]},
            {
                "version": 1,
                "lines": [{"product_id": "p", "name": "Fries", "unit_price": 99, "quantity": 1, "customization": "large"}],
            },
            {
                "version": 1,
                "lines": [
                    {
                        "product_id": "p",
                        "name": "Fries",
                        "unit_price": 99,
                        "quantity": 1,
                        "customization": {"added_ingredients": "Salt"},
                    }
                ],
            },
            {"version": 0, "state": "oops"},
            {"version": 0, "state": {"items": [{"product": "p", "name": "Fries", "price": 99, "customization": "large"}]}},
        ],
    )
    def test_malformed_lines_are_rejected(self, payload):
        with pytest.raises(ValidationError) as exc:
            load_cart_state(payload)
        assert set(exc.value.messages) <= {"lines", "state"}


class TestDumpCartState:
    def test_dump_then_load_keeps_lines(self):
        cart = ShoppingCart.create(session_id="sess-001")
        cart.add_line("prod-001", "Big Mac", 229.0, 2, size="large", removed_ingredients=["Pickles"])
        cart.add_line("prod-004", "Coca-Cola", 79.0)

        payload = dump_cart_state(cart)
        assert payload["version"] == CURRENT_VERSION

        restored = load_cart_state(payload)
        assert {line.key: line.quantity for line in restored.lines} == {
            "prod-001|size:large|removed:Pickles": 2,
            "prod-004": 1,
        }

    def test_restore_replaces_lines(self):
        cart = ShoppingCart.create(session_id="sess-001")
        cart.add_line("prod-009", "McFlurry", 119.0)

        cart.restore(load_cart_state(BROWSER_PAYLOAD))

        assert sorted(line.line_key for line in cart.lines) == ["prod-001|size:large|added:Cheese", "prod-004"]
        assert cart.item_count == 4
