"""Error Hierarchy - typed, categorized exceptions for every terminal pipeline state.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error renders itself to an HttpResponse via to_http()
    - 401 and 500 responses carry an empty body: nothing about the cause leaks
    - Extraction errors carry the raw decoder text; validation errors the full field list

Design Decisions:
    - Single hierarchy with ConduitError base: the dispatcher and the global FastAPI
      handler both render through to_http() (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from conduit.core.domain_types import HttpResponse, ValidationErrors


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories, one per row of the error taxonomy."""
    TRANSPORT = "transport"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    CONTRACT = "contract"
    SERIALIZATION = "serialization"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs only, never rendered to the client."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    method: str | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class ConduitError(Exception):
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

    def to_http(self) -> HttpResponse:
        """Default rendering: status only, empty body."""
        return HttpResponse.empty(self.http_status)

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "operation": self.context.operation,
            "method": self.context.method,
            "path": self.context.path,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ExtractionError(ConduitError):
    """Path, query or body could not be decoded into its declared shape."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EXTRACTION_ERROR", ErrorCategory.TRANSPORT,
            ErrorSeverity.WARNING, context, 400,
        )

    def to_http(self) -> HttpResponse:
        return HttpResponse.text(self.http_status, self.message)


class RequestValidationFailed(ConduitError):
    """One or more declared constraints failed. Carries every failure, in order."""
    def __init__(self, errors: ValidationErrors, context: ErrorContext | None = None):
        super().__init__(
            "; ".join(f"{e.field}: {e.message}" for e in errors) or "invalid request",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.errors: ValidationErrors = tuple(errors)

    def to_response(self) -> dict:
        return {"errors": [e.to_dict() for e in self.errors]}

    def to_http(self) -> HttpResponse:
        return HttpResponse.json(
            self.http_status, json.dumps(self.to_response()).encode("utf-8"),
        )


class Unauthorized(ConduitError):
    """Route requires claims and none could be resolved."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Missing or invalid credentials", "UNAUTHORIZED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.INFO, context, 401,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class HandlerContractViolation(ConduitError):
    """Domain handler raised, or returned something outside its declared outcomes."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "HANDLER_CONTRACT_VIOLATION", ErrorCategory.CONTRACT,
            ErrorSeverity.CRITICAL, context, 500,
        )


class ResponseSerializationError(ConduitError):
    """A declared outcome payload could not be encoded."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SERIALIZATION_ERROR", ErrorCategory.SERIALIZATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class PipelineFailure(ConduitError):
    """Unexpected failure inside the pipeline itself, outside any handler."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PIPELINE_FAILURE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class ContractError(ConduitError):
    """The API implementation is missing operations. Raised at startup, never per request."""
    def __init__(self, missing: list[str]):
        super().__init__(
            f"API implementation is missing operations: {', '.join(missing)}",
            "CONTRACT_INCOMPLETE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.missing = missing

