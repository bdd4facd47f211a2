"""Forecast Schemas — Pydantic models for the example weather forecast resource.

Invariants:
    - camelCase on the wire (temperatureC, temperatureF), snake_case in Python
    - temperatureF is derived, never accepted from clients
    - Paging response models mirror core.pagination's envelope exactly

Design Decisions:
    - alias_generator=to_camel + populate_by_name: bodies accept either spelling
    - Range checks on temperature are domain VALIDATION (422 via the pipeline), not schema
      constraints (400) — the schema accepts any int
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class WeatherForecast(BaseModel):
    """A single forecast record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = 0
    date: datetime = Field(default_factory=datetime.now)
    temperature_c: int = 0
    summary: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temperature_f(self) -> int:
        return 32 + int(self.temperature_c / 0.5556)


# --- Paging response documentation -------------------------------------------

class PageMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page_offset: int
    page_size: int
    total: int


class Link(BaseModel):
    href: str
    rel: str


class ForecastPageData(BaseModel):
    forecasts: list[WeatherForecast]


class ForecastPage(BaseModel):
    """Envelope returned by the paging endpoints."""
    data: ForecastPageData
    meta: PageMeta
    links: list[Link]
