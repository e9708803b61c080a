"""Error Hierarchy — typed, categorized exceptions for all flowedit failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Errors raised inside a mutation discard the draft — the base snapshot is never touched
    - to_response() produces the REST envelope used by the API error handlers
    - Guarded no-ops are NOT errors: they are reported through MutationResult.reason

Design Decisions:
    - Single hierarchy with FlowEditError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Index errors are 409: a stale index means the UI is out of sync with the snapshot
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTEGRITY = "integrity"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    document_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class FlowEditError(Exception):
    """Base exception for all flowedit errors."""

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
                    "document_id": self.context.document_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class IndexOutOfRangeError(FlowEditError):
    """A positional index does not address an existing node in the snapshot."""
    def __init__(
        self,
        index_name: str,
        index: int | None,
        size: int,
        context: ErrorContext | None = None,
    ):
        if index is None:
            message = f"{index_name} is required"
        else:
            message = f"{index_name}={index} is out of range (container has {size})"
        super().__init__(
            message, "INDEX_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 409,
        )
        self.index_name = index_name
        self.index = index
        self.size = size


class UnsupportedBlockVariantError(FlowEditError):
    """Item construction requested on a block variant with no item rule."""
    def __init__(self, block_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Block type '{block_type}' does not support item construction",
            "UNSUPPORTED_BLOCK_VARIANT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )
        self.block_type = block_type


class DocumentIntegrityError(FlowEditError):
    """Document violates a structural invariant (duplicate ids, dangling edges, empty blocks)."""
    def __init__(self, violations: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Document integrity violated: {'; '.join(violations)}",
            "DOCUMENT_INTEGRITY", ErrorCategory.INTEGRITY,
            ErrorSeverity.ERROR, context, 400,
        )
        self.violations = violations


class ResourceNotFoundError(FlowEditError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
