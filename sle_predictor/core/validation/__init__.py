"""
Validation Module

Schema validation layer. Gates every prediction: nothing reaches the
scorer until the whole record is valid.
"""
from .record_validator import (
    RecordValidator,
    ValidatedRecord,
    ValidationIssue,
    ValidationReport,
    IssueKind,
    validate,
)

__all__ = [
    "RecordValidator",
    "ValidatedRecord",
    "ValidationIssue",
    "ValidationReport",
    "IssueKind",
    "validate",
]
