"""Cursor Codec — opaque pagination tokens encoding a single collection offset.

Invariants:
    - decode_cursor(encode_cursor(o)) == o for every 0 <= o <= 2**31 - 1
    - decode_cursor("") == decode_cursor(None) == 0 (start of collection)
    - Malformed tokens raise MalformedCursorError, never a bare decoding exception
    - Token is standard base64 of the 4-byte little-endian signed int32 ("CgAAAA==" is 10)

Design Decisions:
    - No version byte or checksum: robustness comes from strict decoding, not tamper resistance
    - Exactly four decoded bytes required: a truncated or padded token is rejected outright
"""

import base64
import binascii
import struct

from restful_service.core.domain_types import CursorToken
from restful_service.core.errors import MalformedCursorError

_OFFSET = struct.Struct("<i")
MAX_OFFSET = 2**31 - 1


def encode_cursor(offset: int) -> CursorToken:
    """Encode a non-negative offset as an opaque token."""
    if offset < 0 or offset > MAX_OFFSET:
        raise ValueError(f"offset must be within 0..{MAX_OFFSET}, got {offset}")
    return CursorToken(base64.b64encode(_OFFSET.pack(offset)).decode("ascii"))


def decode_cursor(token: str | None) -> int:
    """Decode a token to its offset. Raises MalformedCursorError."""
    if not token:
        return 0
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedCursorError(
            "The input is not a valid Base-64 string.",
        ) from e
    if len(raw) != _OFFSET.size:
        raise MalformedCursorError(
            f"Expected {_OFFSET.size} bytes, got {len(raw)}.",
        )
    (offset,) = _OFFSET.unpack(raw)
    if offset < 0:
        raise MalformedCursorError("Offset must be non-negative.")
    return offset
