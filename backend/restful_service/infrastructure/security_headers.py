"""Security Headers — middleware stamping the fixed policy headers on every response.

Invariants:
    - Content-Security-Policy, X-Content-Type-Options, X-Frame-Options,
      Strict-Transport-Security and Cache-Control are set on every routed response
    - Values come from Settings; the middleware holds no policy of its own
    - Overwrites (not appends): a route cannot weaken the policy by setting its own value

Design Decisions:
    - One wrapping stage instead of per-branch header code: the policy is defined once
    - Starlette BaseHTTPMiddleware: registered via app.add_middleware like CORSMiddleware
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp a fixed header set onto each outgoing response."""

    def __init__(self, app: ASGIApp, headers: dict[str, str]):
        super().__init__(app)
        self.headers = dict(headers)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response
