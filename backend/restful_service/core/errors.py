"""Error Hierarchy — typed, categorized exceptions for every pipeline failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity), http_status
    - Client errors (400-level) are recoverable; server errors (500-level) are critical
    - `message` is the user-visible text, rendered verbatim in plain-text pipeline responses
    - to_response() produces the JSON envelope used by the global FastAPI handlers

Design Decisions:
    - Single hierarchy with RestfulServiceError base: one pipeline boundary catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PAYLOAD = "payload"
    PAGINATION = "pagination"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class RestfulServiceError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "request_id": self.context.request_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class AuthDeniedError(RestfulServiceError):
    """The auth gate refused the request. Rendered with a challenge and no body."""
    def __init__(self, challenge: str, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required", "AUTH_DENIED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.challenge = challenge


class OperationFailedError(RestfulServiceError):
    """A create/update callback produced no result."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to {action} the resource.",
            "OPERATION_FAILED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.action = action


class PreconditionFailedError(RestfulServiceError):
    """A caller-side pre-check (e.g. identifier existence) failed before the pipeline ran."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PRECONDITION_FAILED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class ValidationFailedError(RestfulServiceError):
    """Domain validation of a callback result failed. Message is passed through verbatim."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )


class ResourceNotFoundError(RestfulServiceError):
    """Callback result does not match the declared result shape."""
    def __init__(self, node_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Resource '{node_name}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.node_name = node_name


class PayloadTooLargeError(RestfulServiceError):
    """Encoded outbound payload exceeds the configured byte limit."""
    def __init__(
        self, max_bytes: int, actual_bytes: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Payload size exceeds the allowed limit of {max_bytes} bytes.",
            "PAYLOAD_TOO_LARGE", ErrorCategory.PAYLOAD,
            ErrorSeverity.WARNING, context, 413,
        )
        self.max_bytes = max_bytes
        self.actual_bytes = actual_bytes


class MalformedCursorError(RestfulServiceError):
    """Pagination token could not be decoded."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid token: {reason}",
            "MALFORMED_CURSOR", ErrorCategory.PAGINATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.reason = reason


class InvalidPageSizeError(RestfulServiceError):
    """pageSize outside (0, max_page_size]."""
    def __init__(self, page_size: int, context: ErrorContext | None = None):
        super().__init__(
            "Invalid pageSize value.",
            "INVALID_PAGE_SIZE", ErrorCategory.PAGINATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.page_size = page_size


class InvalidPageOffsetError(RestfulServiceError):
    """pageOffset below 1 (offsets are 1-based)."""
    def __init__(self, page_offset: int, context: ErrorContext | None = None):
        super().__init__(
            "Invalid pageOffset value.",
            "INVALID_PAGE_OFFSET", ErrorCategory.PAGINATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.page_offset = page_offset


# ─── Server Errors (500-level) ──────────────────────────────────

class EncodingFailureError(RestfulServiceError):
    """Payload cannot be represented in the wire format."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "Unable to determine payload size.",
            "ENCODING_FAILURE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.reason = reason


class CallbackFaultError(RestfulServiceError):
    """Unexpected exception raised by a business callback."""

    MARKER = "An error occurred: "

    def __init__(self, cause: BaseException, context: ErrorContext | None = None):
        super().__init__(
            f"{self.MARKER}{cause}",
            "CALLBACK_FAULT", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.cause = cause
