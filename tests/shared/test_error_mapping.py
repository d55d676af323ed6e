"""Tests for the JSON error bodies returned by every router."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import error_payload, first_message, register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/missing-entity")
    async def missing_entity():
        raise ObjectNotFoundError({"_entity": ["Cart not found"]})

    @app.get("/missing-record")
    async def missing_record():
        # Repositories raise with a plain sentence
        raise ObjectNotFoundError("`Cart` object with identifier cart-9 does not exist.")

    @app.get("/invalid")
    async def invalid():
        raise ValidationError({"quantity": ["is required"]})

    return TestClient(app, raise_server_exceptions=False)


class TestErrorPayload:
    def test_validation_error_messages(self):
        assert error_payload(ValidationError({"code": ["Bad"]})) == {"code": ["Bad"]}

    def test_not_found_payload_comes_from_args(self):
        assert error_payload(ObjectNotFoundError({"code": ["Gone"]})) == {"code": ["Gone"]}

    def test_not_found_without_args(self):
        assert error_payload(ObjectNotFoundError()) == ""

    def test_first_message_prefixes_field_level_messages(self):
        assert first_message({"quantity": ["is required"]}) == "quantity is required"
        assert first_message({"_entity": ["Cart not found"]}) == "Cart not found"


class TestHandlers:
    def test_not_found_with_message_dict(self, client):
        response = client.get("/missing-entity")
        assert response.status_code == 404
        assert response.json() == {"error": "Cart not found"}

    def test_not_found_with_plain_message(self, client):
        response = client.get("/missing-record")
        assert response.status_code == 404
        assert response.json() == {"error": "`Cart` object with identifier cart-9 does not exist."}

    def test_validation_error(self, client):
        response = client.get("/invalid")
        assert response.status_code == 400
        assert response.json() == {"error": "quantity is required", "details": {"quantity": ["is required"]}}
