"""
Custom Exception Hierarchy

Provides specific exception types for each pipeline stage
with structured error information.
"""
from typing import Optional, Dict, Any, List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from sle_predictor.core.validation.record_validator import ValidationIssue


class SLEPredictorError(Exception):
    """Base exception for all SLE predictor errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for callers that display errors."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(SLEPredictorError):
    """Errors raised while checking a submission against the field schema."""

    def __init__(
        self,
        message: str,
        validator: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"validator": validator, **(details or {})}
        )
        self.validator = validator


class RecordValidationError(ValidationError):
    """
    A patient record failed schema validation.

    Carries every offending field at once so the caller can re-prompt for
    all corrections in a single round trip.
    """

    def __init__(self, issues: Sequence["ValidationIssue"]):
        self.issues: List["ValidationIssue"] = list(issues)
        fields = ", ".join(issue.field for issue in self.issues)
        super().__init__(
            message=f"Invalid patient record ({len(self.issues)} issue(s)): {fields}",
            validator="record_schema",
            details={"issues": [issue.to_dict() for issue in self.issues]}
        )

    @property
    def fields(self) -> List[str]:
        """Names of all offending fields, in schema order."""
        return [issue.field for issue in self.issues]

    def fields_of_kind(self, kind) -> List[str]:
        return [issue.field for issue in self.issues if issue.kind == kind]

    @property
    def missing_fields(self) -> List[str]:
        from sle_predictor.core.validation.record_validator import IssueKind
        return self.fields_of_kind(IssueKind.MISSING_FIELD)


class ModelUnavailableError(SLEPredictorError):
    """One-time model initialisation failed. Safe to retry."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="MODEL_UNAVAILABLE",
            details={"retryable": True, **(details or {})}
        )


class PredictionError(SLEPredictorError):
    """Errors during risk scoring of an already validated record."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="PREDICTION_ERROR",
            details=details
        )


class ReportGenerationError(SLEPredictorError):
    """Errors during report rendering or export."""

    def __init__(
        self,
        message: str,
        report_type: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="REPORT_ERROR",
            details={"report_type": report_type, **(details or {})}
        )
        self.report_type = report_type
