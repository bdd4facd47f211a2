"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Settings are frozen: built once, passed by reference, never mutated per request
    - get_settings() is cached (lru_cache) — single instance per process
    - Literal header policy strings live here, never inside the pipeline

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every key: the service runs out-of-the-box with no .env
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True,
    )

    # Pipeline limits
    max_payload_size_bytes: int = Field(10_485_760, gt=0)
    max_page_size: int = Field(100, gt=0)
    default_page_size: int = Field(10, gt=0)

    # Common response headers
    authenticate_header: str = 'Bearer realm="restful-service"'
    allowed_origin: str = "*"
    feature_policy: str = "geolocation 'none'; camera 'none'; microphone 'none'"
    referrer_policy: str = "no-referrer"
    response_expiry_days: int = Field(182, ge=0)

    # Authentication
    auth_mode: Literal["allow_all", "require_header"] = "allow_all"
    auth_header_name: str = "Authorization"

    # Security headers, stamped on every response by middleware
    content_security_policy: str = "frame-ancestors 'none'"
    x_content_type_options: str = "nosniff"
    x_frame_options: str = "SAMEORIGIN"
    strict_transport_security: str = "max-age=31536000; includeSubDomains"
    cache_control: str = "no-store, private, max-age=3600"

    # Example resource
    forecast_seed_count: int = Field(50, ge=0)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
