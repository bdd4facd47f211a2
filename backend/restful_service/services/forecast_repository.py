"""Forecast Repository — in-memory example collection behind the forecast endpoints.

Invariants:
    - Records are ordered by insertion; ids are unique positive ints
    - Validation is pure: it inspects a record and never touches the store
    - get() returns None for unknown ids (the pipeline turns that into 204)

Design Decisions:
    - In-memory list, not a database: the pipeline is storage-agnostic and this store
      exists to exercise it (single-process uvicorn, state lost on restart)
    - Seeded with a fixed RNG seed so paging and payload-size behavior is reproducible
"""

import logging
import random

from restful_service.core.results import ValidationOutcome
from restful_service.schemas.forecast import WeatherForecast

logger = logging.getLogger(__name__)

SUMMARIES = (
    "Freezing", "Bracing", "Chilly", "Cool", "Mild",
    "Warm", "Balmy", "Hot", "Sweltering", "Scorching",
)

MIN_TEMPERATURE_C = -30
MAX_TEMPERATURE_C = 40


class ForecastRepository:
    """Ordered in-memory forecast store."""

    def __init__(self, forecasts: list[WeatherForecast] | None = None):
        self._forecasts: list[WeatherForecast] = list(forecasts or [])

    @classmethod
    def seeded(cls, count: int = 50, seed: int = 0) -> "ForecastRepository":
        rng = random.Random(seed)
        return cls([
            WeatherForecast(
                id=index,
                temperature_c=rng.randint(-20, 54),
                summary=rng.choice(SUMMARIES),
            )
            for index in range(1, count + 1)
        ])

    # ─── Reads ───────────────────────────────────────────────────

    def get_all(self) -> list[WeatherForecast]:
        return list(self._forecasts)

    def get(self, forecast_id: int) -> WeatherForecast | None:
        return next((f for f in self._forecasts if f.id == forecast_id), None)

    def get_by_summary(self, summary: str) -> list[WeatherForecast]:
        return [f for f in self._forecasts if f.summary == summary]

    def exists(self, forecast_id: int) -> bool:
        return self.get(forecast_id) is not None

    # ─── Writes ──────────────────────────────────────────────────

    def create(self, forecast: WeatherForecast) -> WeatherForecast:
        next_id = max((f.id for f in self._forecasts), default=0) + 1
        created = forecast.model_copy(update={"id": next_id})
        self._forecasts.append(created)
        logger.info(f"Forecast {next_id} created")
        return created

    def update(self, forecast: WeatherForecast) -> WeatherForecast | None:
        for i, existing in enumerate(self._forecasts):
            if existing.id == forecast.id:
                self._forecasts[i] = forecast
                return forecast
        return None

    def delete(self, forecast_id: int) -> bool:
        before = len(self._forecasts)
        self._forecasts = [f for f in self._forecasts if f.id != forecast_id]
        return len(self._forecasts) < before

    # ─── Validation ──────────────────────────────────────────────

    @staticmethod
    def validate(forecast: WeatherForecast) -> ValidationOutcome:
        if forecast.temperature_c < MIN_TEMPERATURE_C:
            return ValidationOutcome.fail("Temperature is too low.")
        if forecast.temperature_c > MAX_TEMPERATURE_C:
            return ValidationOutcome.fail("Temperature is too high.")
        return ValidationOutcome.ok("Validation passed.")

    @staticmethod
    def validate_summary(forecast: WeatherForecast) -> ValidationOutcome:
        if forecast.id < 0:
            return ValidationOutcome.fail("ID must be a non-negative value.")
        if not forecast.summary or not forecast.summary.strip():
            return ValidationOutcome.fail("Summary content cannot be empty or whitespace.")
        return ValidationOutcome.ok()
