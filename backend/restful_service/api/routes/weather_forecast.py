"""Weather Forecast Routes — example resource wired through the ResourcePipeline.

Invariants:
    - Every handler delegates to the pipeline; none builds a response body itself
    - Identifier existence is checked HERE, before the pipeline (the pipeline has no opinion)
    - Writes validate the incoming record inside the callback, so a 422 leaves the store untouched
    - Literal paths (/all-weather, /initial, /next, /summary/...) registered before /{forecast_id}
    - pageSize/pageOffset carry no Query constraints: range errors are the pipeline's 400,
      not FastAPI's schema validation

Design Decisions:
    - Callbacks are closures over the repository: the pipeline invokes each exactly once
    - next link built with request.url_for so it stays correct behind a root_path
"""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from restful_service.api.dependencies import get_forecast_repository, get_pipeline
from restful_service.core.domain_types import CursorToken, NodeName, OperationKind, ResultShape
from restful_service.core.errors import PreconditionFailedError, ValidationFailedError
from restful_service.core.results import ValidationOutcome
from restful_service.schemas.forecast import ForecastPage, WeatherForecast
from restful_service.services.forecast_repository import ForecastRepository
from restful_service.services.resource_pipeline import ResourcePipeline

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/weatherforecast", tags=["weather-forecast"])

FORECAST = NodeName("forecast")
FORECASTS = NodeName("forecasts")


def _missing(forecast_id: int) -> PreconditionFailedError:
    return PreconditionFailedError(f"Cannot process. ID {forecast_id} does not exist")


def _write_if_valid(
    validate: Callable[[WeatherForecast], ValidationOutcome],
    candidate: WeatherForecast,
    write: Callable[[WeatherForecast], WeatherForecast | None],
) -> Callable[[], WeatherForecast | None]:
    """Callback that checks the candidate first and writes only when it passes.

    Runs inside the pipeline, so the auth gate still goes first and a failure
    renders as 422 with the validation message.
    """
    def produce() -> WeatherForecast | None:
        outcome = validate(candidate)
        if not outcome.passed:
            raise ValidationFailedError(outcome.message)
        return write(candidate)
    return produce


@router.get("/all-weather")
async def get_all_forecasts(
    request: Request,
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    """All forecasts under data.forecasts."""
    return await pipeline.read(
        request, repo.get_all, FORECASTS, shape=ResultShape.SEQUENCE,
    )


# ─── Token-based paging ─────────────────────────────────────────

def _next_href(request: Request):
    def href_for(token: CursorToken, page_size: int) -> str:
        return str(
            request.url_for("get_next_forecasts").include_query_params(
                token=token, pageSize=page_size,
            ),
        )
    return href_for


@router.get("/initial", responses={200: {"model": ForecastPage}})
async def get_initial_forecasts(
    request: Request,
    page_size: int | None = Query(None, alias="pageSize"),
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    """First page of forecasts plus a rel=next link."""
    return await pipeline.read_initial_page(
        request, repo.get_all, FORECASTS, page_size, _next_href(request),
    )


@router.get("/next", responses={200: {"model": ForecastPage}})
async def get_next_forecasts(
    request: Request,
    token: str | None = Query(None),
    page_size: int | None = Query(None, alias="pageSize"),
    page_offset: int = Query(1, alias="pageOffset"),
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    """Page `pageOffset` (1-based). The token is validated but pageOffset sets the position."""
    return await pipeline.read_next_page(
        request, repo.get_all, FORECASTS, token, page_size, page_offset,
        _next_href(request),
    )


# ─── Summaries ──────────────────────────────────────────────────

@router.get("/summary/{summary}")
async def get_summary_forecasts(
    summary: str,
    request: Request,
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    return await pipeline.read(
        request, lambda: repo.get_by_summary(summary), FORECASTS,
        shape=ResultShape.SEQUENCE,
    )


@router.patch("/summary/{forecast_id}/{summary}")
async def update_forecast_summary(
    forecast_id: int,
    summary: str,
    request: Request,
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    existing = repo.get(forecast_id) if forecast_id >= 0 else None
    if existing is None:
        return pipeline.reject(request, _missing(forecast_id), OperationKind.UPDATE)
    candidate = existing.model_copy(update={"summary": summary})
    return await pipeline.update(
        request, _write_if_valid(repo.validate_summary, candidate, repo.update), FORECAST,
    )


# ─── Single resource ────────────────────────────────────────────

@router.post("")
async def create_forecast(
    forecast: WeatherForecast,
    request: Request,
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    """201 + Location; 422 when the temperature is out of range."""
    return await pipeline.create(
        request, _write_if_valid(repo.validate, forecast, repo.create),
    )


@router.put("")
async def update_forecast(
    forecast: WeatherForecast,
    request: Request,
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    if forecast.id < 0 or not repo.exists(forecast.id):
        return pipeline.reject(request, _missing(forecast.id), OperationKind.UPDATE)
    return await pipeline.update(
        request, _write_if_valid(repo.validate, forecast, repo.update), FORECAST,
    )


@router.get("/{forecast_id}")
async def get_forecast(
    forecast_id: int,
    request: Request,
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    """Single forecast under data.forecast; 204 when unknown."""
    return await pipeline.read(request, lambda: repo.get(forecast_id), FORECAST)


@router.delete("/{forecast_id}")
async def delete_forecast(
    forecast_id: int,
    request: Request,
    pipeline: ResourcePipeline = Depends(get_pipeline),
    repo: ForecastRepository = Depends(get_forecast_repository),
) -> Response:
    if not repo.exists(forecast_id):
        return pipeline.reject(request, _missing(forecast_id), OperationKind.DELETE)
    return await pipeline.delete(request, lambda: repo.delete(forecast_id))
