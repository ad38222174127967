"""Error Hierarchy — typed, categorized exceptions for all indexer failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Decoder-contract violations (400-level) abort the current event only
    - Store failures (500-level) abort the current event with full rollback;
      the caller retries with the same event
    - to_response() produces the REST envelope used by the global handlers

Design Decisions:
    - Single hierarchy with IndexerError base: FastAPI global handler catches all
    - ErrorContext carries event coordinates so every log line can be traced to a log record
    - Zero total supply is NOT an error by default (reported condition);
      ZeroTotalSupplyError exists only for the opt-in halting policy
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
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tx_hash: str | None = None
    log_index: int | None = None
    event_kind: str | None = None
    debug_info: dict[str, Any] | None = None


class IndexerError(Exception):
    """Base exception for all indexer errors."""

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
                    "tx_hash": self.context.tx_hash,
                    "log_index": self.context.log_index,
                    "event_kind": self.context.event_kind,
                },
            }
        }


# ─── Decoder-Contract Errors (400-level) ─────────────────────────

class IdentifierError(IndexerError):
    """Event coordinates cannot be turned into a record identifier."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class AssetIndexError(IndexerError):
    """Asset index outside {0, 1} reached the accounting engine."""
    def __init__(self, index: int, context: ErrorContext | None = None):
        super().__init__(
            f"Asset index {index} is out of range for a two-asset pool",
            "ASSET_INDEX_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.index = index


# ─── Accounting Errors ───────────────────────────────────────────

class EventOrderError(IndexerError):
    """Event delivered behind the last applied event coordinate."""
    def __init__(
        self,
        last_applied: tuple[int, int],
        received: tuple[int, int],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Event at block {received[0]} log {received[1]} arrived after "
            f"block {last_applied[0]} log {last_applied[1]} was applied",
            "EVENT_OUT_OF_ORDER", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.last_applied = last_applied
        self.received = received


class ZeroTotalSupplyError(IndexerError):
    """Share of pool requested while LP total supply is zero (halting policy only)."""
    def __init__(self, pool_address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Pool {pool_address} total supply is 0",
            "ZERO_TOTAL_SUPPLY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.CRITICAL, context, 422,
        )
        self.pool_address = pool_address


class ResourceNotFoundError(IndexerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(IndexerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
