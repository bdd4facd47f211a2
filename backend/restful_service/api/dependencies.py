"""Dependencies — FastAPI providers for settings, auth gate, pipeline and repository.

Invariants:
    - One Authenticator and one ForecastRepository per process (lru_cache)
    - The pipeline is rebuilt per request from injected pieces; it holds no request state

Design Decisions:
    - Depends() chain instead of module globals: tests swap any link via dependency_overrides
"""

from functools import lru_cache

from fastapi import Depends

from restful_service.config import Settings, get_settings
from restful_service.core.boundary_protocols import Authenticator
from restful_service.services.authentication import build_authenticator
from restful_service.services.forecast_repository import ForecastRepository
from restful_service.services.resource_pipeline import ResourcePipeline


@lru_cache
def get_authenticator() -> Authenticator:
    return build_authenticator(get_settings())


@lru_cache
def get_forecast_repository() -> ForecastRepository:
    return ForecastRepository.seeded(get_settings().forecast_seed_count)


def get_pipeline(
    settings: Settings = Depends(get_settings),
    authenticator: Authenticator = Depends(get_authenticator),
) -> ResourcePipeline:
    return ResourcePipeline(settings, authenticator)
