"""Error Hierarchy — typed, categorized exceptions for all Demo API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) leave the store untouched
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DemoApiError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    MALFORMED_INPUT = "malformed_input"
    PATCH_FAILED = "patch_failed"
    RESOURCE_NOT_FOUND = "resource_not_found"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    demo_id: int | None = None
    field_name: str | None = None
    operation_index: int | None = None
    debug_info: dict[str, Any] | None = None


class DemoApiError(Exception):
    """Base exception for all Demo API errors."""

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
                    "demo_id": self.context.demo_id,
                    "field": self.context.field_name,
                    "operation_index": self.context.operation_index,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(DemoApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class EntityValidationError(DemoApiError):
    """A patched document no longer fits the Demo shape."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class MalformedPatchDocumentError(DemoApiError):
    """Patch body is not valid JSON or not a well-formed patch document."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_PATCH_DOCUMENT", ErrorCategory.MALFORMED_INPUT,
            ErrorSeverity.WARNING, context, 400,
        )


class PatchApplicationError(DemoApiError):
    """A JSON Patch operation failed (bad path, failed test, type mismatch)."""
    def __init__(
        self, message: str, operation_index: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation_index = operation_index
        super().__init__(
            message, "PATCH_APPLICATION_FAILED", ErrorCategory.PATCH_FAILED,
            ErrorSeverity.WARNING, ctx, 422,
        )
        self.operation_index = operation_index


class UnsupportedMediaTypeError(DemoApiError):
    """PATCH body media type is not one of the accepted patch formats."""
    def __init__(self, content_type: str | None, context: ErrorContext | None = None):
        super().__init__(
            f"Unsupported patch media type: {content_type or '<none>'}",
            "UNSUPPORTED_MEDIA_TYPE", ErrorCategory.UNSUPPORTED_MEDIA_TYPE,
            ErrorSeverity.WARNING, context, 415,
        )
        self.content_type = content_type
