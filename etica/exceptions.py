"""
ETICA Exceptions Module.

Centralized exception definitions with:
- Error codes for caller-side handling
- Structured details for diagnostics
"""

from enum import Enum
from typing import Any, Dict, Optional


# ============================================================================
# ERROR CODES
# ============================================================================


class ErrorCode(str, Enum):
    """ETICA error codes."""

    # General errors (1xxx)
    INTERNAL_ERROR = "E1000"

    # Reference data errors (2xxx)
    UNKNOWN_DOMAIN = "E2000"
    UNKNOWN_PATTERN = "E2001"
    UNKNOWN_LENS = "E2002"

    # Detection errors (3xxx)
    RULE_EVALUATION_FAILED = "E3000"


# ============================================================================
# BASE EXCEPTION
# ============================================================================


class EticaError(Exception):
    """Base exception for the ETICA core."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


# ============================================================================
# SPECIFIC EXCEPTIONS
# ============================================================================


class RuleEvaluationError(EticaError):
    """
    A detection rule raised while being evaluated.

    Raised and caught inside the detector only: the failing rule is skipped
    and the error is reported, never propagated to the caller.
    """

    def __init__(self, rule_id: str, cause: BaseException, stage: str = "predicate"):
        self.rule_id = rule_id
        self.cause = cause
        self.stage = stage
        super().__init__(
            message=f"Rule {rule_id} failed during {stage}: {cause!r}",
            code=ErrorCode.RULE_EVALUATION_FAILED,
            details={
                "rule_id": rule_id,
                "stage": stage,
                "error_type": type(cause).__name__,
                "error": str(cause),
            },
        )


class UnknownReferenceError(EticaError):
    """Strict lookup of a domain, pattern or lens id outside the closed set."""

    def __init__(self, kind: str, identifier: str, code: ErrorCode = ErrorCode.UNKNOWN_DOMAIN):
        super().__init__(
            message=f"Unknown {kind}: {identifier}",
            code=code,
            details={"kind": kind, "identifier": identifier},
        )
