"""Resource Pipeline — the single funnel every read/create/update/delete endpoint passes through.

Invariants:
    - Auth gate runs FIRST; a denied request never reaches its callback (401 + challenge, no body)
    - Each callback is invoked exactly once; its result is lifted to a tagged OperationResult
    - Validation runs strictly after a non-empty callback result and before any envelope/Location
    - Common headers are attached to every pipeline response, success or error
    - Nothing raised below the boundary escapes: RestfulServiceError renders its own status,
      any other exception becomes 500 "An error occurred: <message>"

Design Decisions:
    - One boundary (_run) shared by all entry points: the try/except lives in exactly one place
    - Error bodies are plain text carrying the message verbatim (422 body == validation message)
    - Settings passed once at construction; the pipeline never re-reads configuration
    - An omitted pageSize falls back to settings.default_page_size; an explicit one is range-checked
    - 202 for update/delete: the pipeline acknowledges the write but cannot vouch for the
      callback's durability
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from restful_service.config import Settings
from restful_service.core.boundary_protocols import Authenticator, Produce, Remove, Validate
from restful_service.core.domain_types import (
    CursorToken, NodeName, OperationKind, RequestId, ResultShape,
)
from restful_service.core.envelope import build_envelope
from restful_service.core.errors import (
    AuthDeniedError, CallbackFaultError, OperationFailedError,
    RestfulServiceError, ValidationFailedError,
)
from restful_service.core.pagination import (
    Page, build_page_envelope, check_page_size, initial_page, next_page,
)
from restful_service.core.response_headers import (
    REQUEST_ID_HEADER, build_common_headers, resolve_request_id,
)
from restful_service.core.results import Empty, OperationResult, to_result, unwrap
from restful_service.core.size_guard import check_payload_size

logger = logging.getLogger(__name__)

Step = Callable[[dict[str, str]], Awaitable[Response]]
HrefFor = Callable[[CursorToken, int], str]


async def _invoke(callback: Callable[[], Any]) -> Any:
    result = callback()
    if inspect.isawaitable(result):
        result = await result
    return result


class ResourcePipeline:
    """Auth → callback → checks → envelope → status, for the four operation kinds."""

    def __init__(
        self,
        settings: Settings,
        authenticator: Authenticator,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.settings = settings
        self.authenticator = authenticator
        self.clock = clock

    # ─── Entry points ────────────────────────────────────────────

    async def read(
        self,
        request: Request,
        produce: Produce,
        node_name: NodeName,
        shape: ResultShape = ResultShape.SCALAR,
    ) -> Response:
        """200 with envelope; 204 when the callback returns nothing."""
        async def step(headers: dict[str, str]) -> Response:
            result = to_result(await _invoke(produce), shape)
            if isinstance(result, Empty):
                return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)
            check_payload_size(unwrap(result), self.settings.max_payload_size_bytes)
            return self._json(
                status.HTTP_200_OK, build_envelope(node_name, result), headers,
            )

        return await self._run(OperationKind.READ, request, step)

    async def create(
        self,
        request: Request,
        produce: Produce,
        validate: Validate | None = None,
    ) -> Response:
        """201 with the raw created record and a Location header."""
        async def step(headers: dict[str, str]) -> Response:
            result = to_result(await _invoke(produce), ResultShape.SCALAR)
            self._require(result, "create")
            self._validate(result, validate)
            location = f"{request.url.path}/{uuid4()}"
            logger.info(
                f"Created resource at {location}",
                extra={"request_id": headers[REQUEST_ID_HEADER], "operation": "create"},
            )
            return self._json(
                status.HTTP_201_CREATED, unwrap(result),
                {**headers, "Location": location},
            )

        return await self._run(OperationKind.CREATE, request, step)

    async def update(
        self,
        request: Request,
        produce: Produce,
        node_name: NodeName,
        validate: Validate | None = None,
        shape: ResultShape = ResultShape.SCALAR,
    ) -> Response:
        """202 with envelope."""
        async def step(headers: dict[str, str]) -> Response:
            result = to_result(await _invoke(produce), shape)
            self._require(result, "update")
            self._validate(result, validate)
            return self._json(
                status.HTTP_202_ACCEPTED, build_envelope(node_name, result), headers,
            )

        return await self._run(OperationKind.UPDATE, request, step)

    async def delete(self, request: Request, remove: Remove) -> Response:
        """202 with the raw completion indicator. Existence is the caller's pre-check."""
        async def step(headers: dict[str, str]) -> Response:
            return self._json(status.HTTP_202_ACCEPTED, await _invoke(remove), headers)

        return await self._run(OperationKind.DELETE, request, step)

    async def read_initial_page(
        self,
        request: Request,
        produce: Produce,
        node_name: NodeName,
        page_size: int | None,
        href_for: HrefFor,
    ) -> Response:
        """First page; pageSize is checked before the collection is produced."""
        page_size = self._page_size(page_size)

        async def step(headers: dict[str, str]) -> Response:
            check_page_size(page_size, self.settings.max_page_size)
            collection = await self._collection(produce)
            return self._page(initial_page(collection, page_size), node_name, href_for, headers)

        return await self._run(OperationKind.READ, request, step)

    async def read_next_page(
        self,
        request: Request,
        produce: Produce,
        node_name: NodeName,
        token: str | None,
        page_size: int | None,
        page_offset: int,
        href_for: HrefFor,
    ) -> Response:
        """Page number page_offset; the token is decoded for validity only."""
        page_size = self._page_size(page_size)

        async def step(headers: dict[str, str]) -> Response:
            check_page_size(page_size, self.settings.max_page_size)
            collection = await self._collection(produce)
            page = next_page(collection, token, page_size, page_offset)
            return self._page(page, node_name, href_for, headers)

        return await self._run(OperationKind.READ, request, step)

    def reject(
        self, request: Request, error: RestfulServiceError, kind: OperationKind,
    ) -> Response:
        """Render a caller-side pre-check failure with the common headers."""
        headers = self._common_headers(request)
        self._log_error(error, kind, request, headers[REQUEST_ID_HEADER])
        return self._error_response(error, headers)

    # ─── Boundary ────────────────────────────────────────────────

    async def _run(
        self, kind: OperationKind, request: Request, step: Step,
    ) -> Response:
        headers = self._common_headers(request)
        request_id = RequestId(headers[REQUEST_ID_HEADER])
        try:
            self._authenticate(request)
            return await step(headers)
        except RestfulServiceError as e:
            e.context.request_id = request_id
            e.context.operation = kind.value
            self._log_error(e, kind, request, request_id)
            return self._error_response(e, headers)
        except Exception as e:
            fault = CallbackFaultError(e)
            logger.error(
                f"Callback failed during {kind.value} on {request.url.path}: {e}",
                exc_info=True,
                extra={
                    "request_id": request_id, "operation": kind.value,
                    "error_code": fault.code, "path": request.url.path,
                },
            )
            return self._error_response(fault, headers)

    def _authenticate(self, request: Request) -> None:
        if not self.authenticator.is_authenticated(request):
            raise AuthDeniedError(self.settings.authenticate_header)

    def _common_headers(self, request: Request) -> dict[str, str]:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        return build_common_headers(self.settings, request_id, self.clock())

    # ─── Steps ───────────────────────────────────────────────────

    @staticmethod
    def _require(result: OperationResult, action: str) -> None:
        if isinstance(result, Empty):
            raise OperationFailedError(action)

    @staticmethod
    def _validate(result: OperationResult, validate: Validate | None) -> None:
        if validate is None:
            return
        outcome = validate(unwrap(result))
        if not outcome.passed:
            raise ValidationFailedError(outcome.message)

    def _page_size(self, requested: int | None) -> int:
        return self.settings.default_page_size if requested is None else requested

    @staticmethod
    async def _collection(produce: Produce) -> list:
        return list(await _invoke(produce) or [])

    def _page(
        self, page: Page, node_name: NodeName, href_for: HrefFor, headers: dict[str, str],
    ) -> Response:
        return self._json(
            status.HTTP_200_OK, build_page_envelope(node_name, page, href_for), headers,
        )

    # ─── Rendering ───────────────────────────────────────────────

    @staticmethod
    def _json(status_code: int, content: Any, headers: dict[str, str]) -> Response:
        return JSONResponse(
            status_code=status_code, content=jsonable_encoder(content), headers=headers,
        )

    @staticmethod
    def _error_response(
        error: RestfulServiceError, headers: dict[str, str],
    ) -> Response:
        if isinstance(error, AuthDeniedError):
            return Response(
                status_code=error.http_status,
                headers={**headers, "WWW-Authenticate": error.challenge},
            )
        return PlainTextResponse(
            error.message, status_code=error.http_status, headers=headers,
        )

    @staticmethod
    def _log_error(
        error: RestfulServiceError, kind: OperationKind, request: Request, request_id: str,
    ) -> None:
        log = logger.error if error.http_status >= 500 else logger.warning
        log(
            f"{error.code} during {kind.value} on {request.url.path}: {error.message}",
            extra={
                "request_id": request_id, "operation": kind.value,
                "error_code": error.code, "status_code": error.http_status,
                "path": request.url.path,
            },
        )
