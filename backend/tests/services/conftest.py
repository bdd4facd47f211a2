"""Service test fixtures — FastAPI test client with injectable settings, auth gate and store.

Invariants:
    - Every test gets a freshly seeded ForecastRepository (50 records, fixed seed)
    - get_settings / get_authenticator / get_forecast_repository overridden per test
    - Modules override the `settings`, `repo` or `authenticator` fixtures to vary policy

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the full middleware stack in-process
"""

import pytest
from httpx import ASGITransport, AsyncClient

from restful_service.api.dependencies import (
    get_authenticator, get_forecast_repository,
)
from restful_service.config import Settings, get_settings
from restful_service.main import app
from restful_service.services.authentication import AllowAllAuthenticator
from restful_service.services.forecast_repository import ForecastRepository


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def repo():
    return ForecastRepository.seeded(50)


@pytest.fixture
def authenticator():
    return AllowAllAuthenticator()


@pytest.fixture
async def client(settings, repo, authenticator):
    """FastAPI test client with settings, auth gate and repository overridden."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_authenticator] = lambda: authenticator
    app.dependency_overrides[get_forecast_repository] = lambda: repo

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
