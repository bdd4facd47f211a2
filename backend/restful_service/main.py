"""Restful Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Security headers stamped by middleware on every response, pipeline or not
    - Global error handlers map RestfulServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - create_app(settings) factory: explicit settings reach the middleware, the lifespan and,
      through dependency_overrides, every Depends(get_settings) consumer plus the auth gate
      and store built from them; the module-level `app` is what uvicorn serves
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restful_service.api.dependencies import get_authenticator, get_forecast_repository
from restful_service.api.error_handlers import register_error_handlers
from restful_service.api.routes import health, weather_forecast
from restful_service.config import Settings, get_settings
from restful_service.core.response_headers import build_security_headers
from restful_service.infrastructure.observability import setup_logging
from restful_service.infrastructure.security_headers import SecurityHeadersMiddleware
from restful_service.services.authentication import build_authenticator
from restful_service.services.forecast_repository import ForecastRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Restful Service API started")
    yield
    logger.info("Restful Service API shutting down")


def _bind_settings(app: FastAPI, settings: Settings) -> None:
    authenticator = build_authenticator(settings)
    repository = ForecastRepository.seeded(settings.forecast_seed_count)
    app.dependency_overrides.update({
        get_settings: lambda: settings,
        get_authenticator: lambda: authenticator,
        get_forecast_repository: lambda: repository,
    })


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="Restful Service API", version="1.0.0", lifespan=lifespan,
    )
    if settings is None:
        settings = get_settings()
    else:
        _bind_settings(app, settings)
    app.state.settings = settings

    # CORS from settings, not hardcoded
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "Request-Id"],
    )
    # Added last → outermost: stamps CORS preflight responses too
    app.add_middleware(
        SecurityHeadersMiddleware, headers=build_security_headers(settings),
    )

    # Routes: explicit registration
    app.include_router(health.router)
    app.include_router(weather_forecast.router)

    register_error_handlers(app)
    return app


app = create_app()
