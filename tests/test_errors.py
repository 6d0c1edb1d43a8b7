"""Tests for the shared exception handlers."""

import json

import pytest
from fastapi.exceptions import RequestValidationError

from app.server.errors import error_response, validation_exception_handler
from app.server.middleware import REQUEST_ID_HEADER
from app.server.static import StaticSite


@pytest.fixture
def failing_lookup(monkeypatch):
    async def explode(self, request_path, scope):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(StaticSite, "lookup", explode)


@pytest.mark.unit
def test_error_response_shape():
    response = error_response(418, "short and stout")

    assert response.status_code == 418
    assert json.loads(response.body) == {"error": "short and stout"}


@pytest.mark.integration
def test_unexpected_fault_is_a_generic_500(client, failing_lookup):
    response = client.get("/anything")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert "disk on fire" not in response.text


@pytest.mark.integration
def test_server_error_carries_request_id(client, failing_lookup):
    generated = client.get("/anything")
    propagated = client.get("/anything", headers={REQUEST_ID_HEADER: "trace-500"})

    assert generated.status_code == 500
    assert generated.headers[REQUEST_ID_HEADER].startswith("req-")
    assert propagated.headers[REQUEST_ID_HEADER] == "trace-500"


@pytest.mark.integration
def test_client_errors_carry_request_id(client):
    response = client.post("/api/echo", content=b"{", headers={REQUEST_ID_HEADER: "trace-400"})

    assert response.status_code == 400
    assert response.headers[REQUEST_ID_HEADER] == "trace-400"


@pytest.mark.integration
def test_listener_keeps_serving_after_fault(client, failing_lookup):
    assert client.get("/anything").status_code == 500

    assert client.get("/api/status").json()["status"] == "ok"


@pytest.mark.asyncio
async def test_validation_errors_are_reported():
    exc = RequestValidationError(
        [{"loc": ("body", "name"), "msg": "Field required", "type": "missing"}]
    )
    response = await validation_exception_handler(None, exc)

    assert response.status_code == 422
    body = json.loads(response.body)
    assert body["error"] == "Invalid request"
    assert body["details"][0]["loc"] == ["body", "name"]
