"""App Factory — verifies create_app(settings) applies its settings beyond the middleware.

Invariants:
    - Explicit settings drive the pipeline, the auth gate and the seeded store
    - The module-level app keeps resolving get_settings() normally
"""

import pytest
from httpx import ASGITransport, AsyncClient

from restful_service.config import Settings, get_settings
from restful_service.main import app as default_app
from restful_service.main import create_app

AUTH = {"Authorization": "Bearer t"}


@pytest.fixture
def factory_settings():
    return Settings(
        default_page_size=4, forecast_seed_count=6,
        auth_mode="require_header", max_page_size=5,
    )


@pytest.fixture
async def factory_client(factory_settings):
    app = create_app(factory_settings)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


async def test_auth_mode_applies_to_pipeline(factory_client):
    res = await factory_client.get("/weatherforecast/all-weather")
    assert res.status_code == 401


async def test_seed_count_applies_to_store(factory_client):
    res = await factory_client.get("/weatherforecast/all-weather", headers=AUTH)
    assert len(res.json()["data"]["forecasts"]) == 6


async def test_page_limits_apply_to_pipeline(factory_client):
    res = await factory_client.get("/weatherforecast/initial", headers=AUTH)
    assert len(res.json()["data"]["forecasts"]) == 4
    res = await factory_client.get("/weatherforecast/initial?pageSize=6", headers=AUTH)
    assert res.status_code == 400


def test_app_state_carries_the_settings(factory_settings):
    app = create_app(factory_settings)
    assert app.state.settings is factory_settings
    assert app.dependency_overrides[get_settings]() is factory_settings


def test_default_app_does_not_override_settings():
    assert get_settings not in default_app.dependency_overrides
    assert default_app.state.settings is get_settings()
