"""Authenticators — concrete auth gate policies selected by Settings.auth_mode.

Invariants:
    - Pure decision: allowed (True) or denied (False); the pipeline owns the 401 response
    - Never raises for a missing or malformed header — denial is a return value
"""

import logging

from restful_service.config import Settings
from restful_service.core.boundary_protocols import Authenticator, RequestLike

logger = logging.getLogger(__name__)


class AllowAllAuthenticator:
    """Every request is allowed. Default for local development."""

    def is_authenticated(self, request: RequestLike) -> bool:
        return True


class RequiredHeaderAuthenticator:
    """Allowed when the configured header is present and non-blank."""

    def __init__(self, header_name: str = "Authorization"):
        self.header_name = header_name

    def is_authenticated(self, request: RequestLike) -> bool:
        value = request.headers.get(self.header_name)
        return bool(value and value.strip())


def build_authenticator(settings: Settings) -> Authenticator:
    if settings.auth_mode == "require_header":
        logger.info(f"Auth gate requires header {settings.auth_header_name}")
        return RequiredHeaderAuthenticator(settings.auth_header_name)
    return AllowAllAuthenticator()
