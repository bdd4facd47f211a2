"""Global Error Handlers — verifies the JSON envelope for errors raised outside the pipeline.

Invariants:
    - RestfulServiceError keeps its status and code
    - Unparseable input → 400 VALIDATION_ERROR with per-field details
    - Unexpected exceptions → 500 INTERNAL_ERROR without the exception text
"""

import pytest
from httpx import ASGITransport, AsyncClient

from restful_service.core.errors import MalformedCursorError, ResourceNotFoundError
from restful_service.main import create_app


@pytest.fixture
def app():
    app = create_app()

    @app.get("/lookup/{name}")
    async def lookup(name: str):
        raise ResourceNotFoundError(name)

    @app.get("/cursor")
    async def cursor():
        raise MalformedCursorError("@@@")

    @app.get("/explode")
    async def explode():
        raise RuntimeError("secret connection string")

    return app


@pytest.fixture
async def raw_client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_service_error_keeps_status_and_code(raw_client):
    res = await raw_client.get("/lookup/forecast")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == ResourceNotFoundError("forecast").code
    assert error["message"] == ResourceNotFoundError("forecast").message


async def test_service_error_400_family(raw_client):
    res = await raw_client.get("/cursor")
    assert res.status_code == 400
    assert res.json()["error"]["message"].startswith("Invalid token: ")


async def test_malformed_body_lists_fields(raw_client):
    res = await raw_client.put("/weatherforecast", json={"id": "two"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["category"] == "validation"
    assert error["details"][0]["field"] == "body.id"


async def test_unexpected_exception_hides_details(raw_client):
    res = await raw_client.get("/explode")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.text
