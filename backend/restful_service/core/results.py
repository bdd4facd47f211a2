"""Operation Results — tagged callback outcomes and validation verdicts.

Invariants:
    - Absent (Empty) is distinct from an empty Sequence: read maps Empty → 204, Sequence([]) → 200
    - The variant is decided by the callback's declared ResultShape, never by inspecting
      what a value happens to look like
    - ValidationOutcome.message is only meaningful when passed is False

Design Decisions:
    - Frozen dataclasses per variant over a single Optional: match statements stay exhaustive
    - Callbacks may return raw values (lifted by to_result) or an already-tagged variant
"""

from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import Any, Generic, NamedTuple, TypeVar, Union

from restful_service.core.domain_types import ResultShape

T = TypeVar("T")


@dataclass(frozen=True)
class Empty:
    """Callback produced nothing."""


@dataclass(frozen=True)
class Scalar(Generic[T]):
    """Callback produced a single record."""
    value: T


@dataclass(frozen=True)
class Sequence(Generic[T]):
    """Callback produced an ordered, possibly empty, list of records."""
    items: tuple[T, ...]


@dataclass(frozen=True)
class Mismatch:
    """Callback result contradicts its declared shape. Envelope maps it to not-found."""
    value: Any
    expected: ResultShape


OperationResult = Union[Empty, Scalar[T], Sequence[T], Mismatch]

EMPTY = Empty()


class ValidationOutcome(NamedTuple):
    """Pass/fail plus message, independent of the HTTP transport."""
    passed: bool
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> "ValidationOutcome":
        return cls(True, message)

    @classmethod
    def fail(cls, message: str) -> "ValidationOutcome":
        return cls(False, message)


def to_result(value: Any, shape: ResultShape) -> OperationResult:
    """Lift a raw callback return value into its tagged variant."""
    if isinstance(value, (Empty, Scalar, Sequence, Mismatch)):
        return value
    if value is None:
        return EMPTY
    is_sequence = isinstance(value, SequenceABC) and not isinstance(
        value, (str, bytes, bytearray),
    )
    if shape is ResultShape.SEQUENCE:
        return Sequence(tuple(value)) if is_sequence else Mismatch(value, shape)
    return Mismatch(value, shape) if is_sequence else Scalar(value)


def unwrap(result: OperationResult) -> Any:
    """Raw payload for size measurement and non-enveloped bodies. Empty → None."""
    match result:
        case Scalar(value=value):
            return value
        case Sequence(items=items):
            return list(items)
        case Mismatch(value=value):
            return value
        case _:
            return None
