"""Health Probe — verifies liveness bypasses the auth gate."""

import pytest

from restful_service.services.authentication import RequiredHeaderAuthenticator


async def test_health_returns_healthy(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_openapi_documents_page_envelope(client):
    res = await client.get("/openapi.json")
    assert "ForecastPage" in res.json()["components"]["schemas"]


class TestWithAuthGate:
    @pytest.fixture
    def authenticator(self):
        return RequiredHeaderAuthenticator()

    async def test_health_ignores_auth_gate(self, client):
        res = await client.get("/api/v1/health/")
        assert res.status_code == 200
