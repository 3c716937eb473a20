"""Error Hierarchy: typed, categorized exceptions for Gatekeeper failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Policy outcomes are Verdict values, never exceptions, inside the gate
    - AdmissionRejectedError exists only at the HTTP edge, to short-circuit a route
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GatekeeperError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from gatekeeper.core.verdicts import Verdict


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    ADMISSION = "admission"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    method: str | None = None
    debug_info: dict[str, Any] | None = None


class GatekeeperError(Exception):
    """Base exception for all Gatekeeper errors."""

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
                    "path": self.context.path,
                    "method": self.context.method,
                },
            }
        }


# ─── Collaborator Errors ────────────────────────────────────────

class InvalidTokenError(GatekeeperError):
    """Token verifier could not decode or trust the presented token."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Token rejected by verifier: {reason}",
            "INVALID_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


# ─── Definition Errors ──────────────────────────────────────────

class PolicyDefinitionError(GatekeeperError):
    """Route declared an admission policy that can never be satisfied correctly."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "POLICY_DEFINITION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.field = field


# ─── HTTP Edge ──────────────────────────────────────────────────

class AdmissionRejectedError(GatekeeperError):
    """Raised by the FastAPI dependency so a rejected call never reaches the handler."""
    def __init__(self, verdict: Verdict, context: ErrorContext | None = None):
        super().__init__(
            verdict.description, "ADMISSION_REJECTED", ErrorCategory.ADMISSION,
            ErrorSeverity.WARNING, context, verdict.status,
        )
        self.verdict = verdict

    def to_response(self) -> dict:
        return self.verdict.to_response()
