"""Common Response Headers — per-response header set attached by the pipeline.

Invariants:
    - Request-Id echoes the inbound value when present, otherwise a fresh UUID4
    - Expires is RFC 1123 (GMT) at now + expiry horizon
    - Policy values come from Settings; this module computes nothing but the two dynamic headers

Design Decisions:
    - `now` injected: keeps the function pure and testable without clock patching
    - The five fixed security headers are NOT here — SecurityHeadersMiddleware stamps them
      on every response, pipeline or not
"""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from uuid import uuid4

from restful_service.config import Settings
from restful_service.core.domain_types import RequestId

REQUEST_ID_HEADER = "Request-Id"


def resolve_request_id(inbound: str | None) -> RequestId:
    return RequestId(inbound) if inbound else RequestId(str(uuid4()))


def expiry_date(now: datetime, horizon_days: int) -> str:
    return format_datetime(
        (now + timedelta(days=horizon_days)).astimezone(timezone.utc), usegmt=True,
    )


def build_common_headers(
    settings: Settings, request_id: RequestId, now: datetime,
) -> dict[str, str]:
    return {
        "WWW-Authenticate": settings.authenticate_header,
        "Access-Control-Allow-Origin": settings.allowed_origin,
        "Expires": expiry_date(now, settings.response_expiry_days),
        "Feature-Policy": settings.feature_policy,
        "Referrer-Policy": settings.referrer_policy,
        REQUEST_ID_HEADER: request_id,
    }


def build_security_headers(settings: Settings) -> dict[str, str]:
    """Fixed policy headers stamped on every response by middleware."""
    return {
        "Content-Security-Policy": settings.content_security_policy,
        "X-Content-Type-Options": settings.x_content_type_options,
        "X-Frame-Options": settings.x_frame_options,
        "Strict-Transport-Security": settings.strict_transport_security,
        "Cache-Control": settings.cache_control,
    }
