"""Domain Types — rich types that replace bare primitives across the pipeline.

Invariants:
    - NodeName is caller-chosen (singular vs plural) — never derived from the payload type
    - CursorToken is opaque to clients; only core.cursor knows its layout
    - All operation kinds and result shapes encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log extras without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

NodeName = NewType("NodeName", str)
RequestId = NewType("RequestId", str)
CursorToken = NewType("CursorToken", str)


# ─── Enums ───────────────────────────────────────────────────────

class OperationKind(str, Enum):
    """The four pipeline entry points."""
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ResultShape(str, Enum):
    """Declared return contract of a business callback."""
    SCALAR = "scalar"
    SEQUENCE = "sequence"
