"""Boundary Protocols — contracts between the pipeline and its injected collaborators.

Invariants:
    - The pipeline calls each callback exactly once per request
    - Callbacks may be plain functions or coroutine functions; the shell awaits either
    - Implementations are supplied per endpoint (callbacks) or per process (Authenticator)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - RequestLike instead of starlette.Request: core stays framework-free
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, TypeVar, Union

from restful_service.core.results import ValidationOutcome

T = TypeVar("T")

Produce = Callable[[], Union[T, Awaitable[T]]]
Remove = Callable[[], Union[Any, Awaitable[Any]]]
Validate = Callable[[T], ValidationOutcome]


class RequestLike(Protocol):
    """Structural contract for the inbound request the auth gate inspects."""
    headers: Mapping[str, str]


class Authenticator(Protocol):
    """Auth gate policy — external to the pipeline."""
    def is_authenticated(self, request: RequestLike) -> bool: ...
