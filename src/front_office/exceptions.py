"""
Front Office Exception Hierarchy

Error taxonomy shared by every engine in the package. Each exception carries
an error code, a severity level and a context dict so callers can log or
surface the failure without parsing message strings.

Exception Hierarchy:
    FrontOfficeException (base)
    ├── ValidationError   - malformed input (offer terms, restructure amount sign)
    ├── NotFoundError     - missing record (contract year, player, team)
    └── ConstraintError   - rule violation (re-drafting a prospect, acting on
        │                   a closed negotiation)
        └── RestructureLimitError - restructure below minimum salary; also a
                                    ValidationError

ValidationError and ConstraintError also derive from ValueError, and
NotFoundError from LookupError, so callers using builtin exception types
still catch them.
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from datetime import datetime


class ExceptionSeverity(Enum):
    """Severity levels for exceptions"""
    CRITICAL = "critical"  # Save state inconsistent, abort the operation
    ERROR = "error"        # Operation failed, caller must correct input
    WARNING = "warning"    # Operation rejected but state is untouched


class FrontOfficeException(Exception):
    """
    Base exception for all front office engine errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code (e.g., "CAP_001")
        severity: Exception severity level
        context_dict: Additional context (contract_id, year, team_id, ...)
        timestamp: When the exception was raised
    """

    def __init__(
        self,
        message: str,
        error_code: str = "FO_000",
        severity: ExceptionSeverity = ExceptionSeverity.ERROR,
        context_dict: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.context_dict = context_dict or {}
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build error message with context"""
        lines = [f"[{self.error_code}] {self.message}"]

        if self.context_dict:
            context_items = [f"{k}={v}" for k, v in self.context_dict.items()]
            lines.append(f"Context: {', '.join(context_items)}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context_dict,
            "timestamp": self.timestamp,
        }


class ValidationError(FrontOfficeException, ValueError):
    """
    Raised when caller-supplied data is malformed.

    Not fatal: the itemized ``errors`` list is meant to be shown to the user
    so the offer (or request) can be corrected and resubmitted.

    Examples:
    - Contract years outside 1-7
    - Guaranteed money exceeding total value
    - Signing bonus exceeding guaranteed money
    - Total value below $1,000,000
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        context_dict: Optional[Dict[str, Any]] = None
    ):
        self.errors = list(errors) if errors else [message]
        context = {"errors": self.errors, **(context_dict or {})}

        super().__init__(
            message=message,
            error_code="FO_VALIDATION_001",
            severity=ExceptionSeverity.ERROR,
            context_dict=context
        )


class NotFoundError(FrontOfficeException, LookupError):
    """
    Raised when a requested record does not exist.

    Examples:
    - Requested season has no annual_breakdown entry on a contract
    - Player or team id unknown to the store
    """

    def __init__(
        self,
        message: str,
        context_dict: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="FO_NOT_FOUND_002",
            severity=ExceptionSeverity.ERROR,
            context_dict=context_dict
        )


class ConstraintError(FrontOfficeException, ValueError):
    """
    Raised when an operation would violate a league rule.

    The operation is rejected as a whole; nothing is partially applied.

    Examples:
    - Restructure amount leaves base salary below the league minimum
    - Drafting a prospect that is already drafted
    - Submitting an offer to a negotiation that already ended
    """

    def __init__(
        self,
        message: str,
        context_dict: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="FO_CONSTRAINT_003",
            severity=ExceptionSeverity.WARNING,
            context_dict=context_dict
        )


class RestructureLimitError(ConstraintError, ValidationError):
    """
    Raised when a restructure would leave base salary below the league minimum.

    The amount breaks a league rule and is also a bad request the caller can
    correct, so it is catchable as either ConstraintError or ValidationError.
    """

    def __init__(
        self,
        message: str,
        context_dict: Optional[Dict[str, Any]] = None
    ):
        self.errors = [message]

        FrontOfficeException.__init__(
            self,
            message=message,
            error_code="FO_CONSTRAINT_004",
            severity=ExceptionSeverity.WARNING,
            context_dict=context_dict
        )
