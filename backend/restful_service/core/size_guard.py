"""Size Guard — measures the encoded byte length of an outbound payload.

Invariants:
    - Encoding failure is EncodingFailureError (500), never confused with PayloadTooLargeError (413)
    - None always passes with length 0
    - Guards OUTBOUND payload size only; inbound bodies are the transport's concern

Design Decisions:
    - pydantic_core.to_json: same serializer family FastAPI uses for responses, handles
      BaseModel/dataclass/datetime natively and raises on unknown types
    - exclude_none=True: null fields are not counted, matching the compact wire form
"""

from typing import Any

from pydantic_core import PydanticSerializationError, to_json

from restful_service.core.errors import EncodingFailureError, PayloadTooLargeError


def measure_payload(payload: Any) -> int:
    """Return the compact JSON byte length of payload. Raises EncodingFailureError."""
    if payload is None:
        return 0
    try:
        return len(to_json(payload, by_alias=True, exclude_none=True))
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingFailureError(str(e)) from e


def check_payload_size(payload: Any, max_bytes: int) -> int:
    """Measure payload and enforce max_bytes. Returns the measured length."""
    size = measure_payload(payload)
    if size > max_bytes:
        raise PayloadTooLargeError(max_bytes, size)
    return size
