"""
Patient Record Validation Module

Checks a raw form submission against the field schema before anything is
scored.  Every problem in the record is collected in one pass so the form
can highlight all offending fields at once.

On success the record is coerced to canonical types exactly once:
    categorical → int    ("1", 1 and 1.0 are the same answer)
    numeric     → float
    PatientName → stripped str
Downstream stages never compare string and numeric encodings again.
"""
from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional, Union

from sle_predictor.core.schema import FieldKind, FieldSchema, FieldSpec, default_schema
from sle_predictor.utils import get_logger, RecordValidationError

logger = get_logger(__name__)

Number = Union[int, float]


class IssueKind(str, Enum):
    """Types of validation failures."""
    MISSING_FIELD = "missing_field"          # Required field absent or blank
    OUT_OF_RANGE = "out_of_range"            # Numeric value outside [min, max]
    INVALID_CATEGORY = "invalid_category"    # Not one of the allowed options
    INVALID_NUMBER = "invalid_number"        # Not parseable as a finite number


@dataclass
class ValidationIssue:
    """A single problem found in a submitted record."""
    field: str
    kind: IssueKind
    message: str
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "type": self.kind.value,
            "message": self.message,
            "value": self.value,
        }


@dataclass
class ValidationReport:
    """Result of checking a record without raising."""
    is_valid: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)
    checked_field_count: int = 0

    def issues_of_kind(self, kind: IssueKind) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "checked_fields": self.checked_field_count,
            "issue_count": len(self.issues),
            "issues": [issue.to_dict() for issue in self.issues],
        }


class ValidatedRecord(Mapping):
    """
    Read-only view of a record that passed validation.

    Behaves like a mapping of field name → canonical number; the patient
    name is kept separately as a string.
    """

    __slots__ = ("_values", "_patient_name")

    def __init__(self, values: Dict[str, Number], patient_name: str = ""):
        self._values = MappingProxyType(dict(values))
        self._patient_name = patient_name

    @property
    def patient_name(self) -> str:
        return self._patient_name

    @property
    def values(self) -> Mapping:
        return self._values

    def __getitem__(self, name: str) -> Number:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ValidatedRecord(patient_name={self._patient_name!r}, fields={len(self)})"

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _parse_number(value: Any) -> Optional[float]:
    """Parse a form value into a finite float, or None if it is not one."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, numbers.Real):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return None
    except (OverflowError, ValueError):
        # ints beyond float range, unparseable strings
        return None
    return number if math.isfinite(number) else None


def _format_bound(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class RecordValidator:
    """
    Validates patient records against a FieldSchema.

    Stateless apart from a validation counter; one instance can be shared by
    any number of prediction runs.
    """

    def __init__(self, schema: Optional[FieldSchema] = None):
        self.schema = schema or default_schema()
        self._validation_count = 0
        logger.debug(f"RecordValidator initialized ({len(self.schema)} fields)")

    def check(self, record: Mapping) -> ValidationReport:
        """Check a record and return every issue found (never raises)."""
        report, _ = self._run(record)
        return report

    def validate(self, record: Mapping) -> ValidatedRecord:
        """
        Validate and coerce a record.

        Raises:
            RecordValidationError: listing every offending field.
        """
        report, canonical = self._run(record)
        if not report.is_valid:
            logger.warning(
                f"Record rejected: {len(report.issues)} issue(s): "
                + ", ".join(f"{i.field} ({i.kind.value})" for i in report.issues)
            )
            raise RecordValidationError(report.issues)

        patient_name = canonical.pop(self.schema.patient_name.name, "") \
            if self.schema.patient_name is not None else ""
        return ValidatedRecord(canonical, patient_name=patient_name)

    @property
    def validation_count(self) -> int:
        return self._validation_count

    # ------------------------------------------------------------------

    def _run(self, record: Mapping):
        self._validation_count += 1
        report = ValidationReport()
        canonical: Dict[str, Any] = {}

        for spec in self.schema:
            raw = record.get(spec.name)
            if _is_blank(raw):
                if spec.required:
                    report.issues.append(ValidationIssue(
                        field=spec.name,
                        kind=IssueKind.MISSING_FIELD,
                        message=f"{spec.label or spec.name} is required",
                    ))
                continue

            report.checked_field_count += 1
            value, issue = self._coerce(spec, raw)
            if issue is not None:
                report.issues.append(issue)
            else:
                canonical[spec.name] = value

        report.is_valid = not report.issues
        return report, canonical

    def _coerce(self, spec: FieldSpec, raw: Any):
        if spec.kind == FieldKind.TEXT:
            return str(raw).strip(), None

        number = _parse_number(raw)
        if number is None:
            return None, ValidationIssue(
                field=spec.name,
                kind=IssueKind.INVALID_NUMBER,
                message=f"{spec.name} must be a number",
                value=raw,
            )

        if spec.kind == FieldKind.CATEGORICAL:
            for allowed in spec.allowed_values:
                if number == allowed:
                    return int(allowed), None
            allowed_text = ", ".join(
                f"{opt.value} ({opt.label})" for opt in spec.options
            )
            return None, ValidationIssue(
                field=spec.name,
                kind=IssueKind.INVALID_CATEGORY,
                message=f"{spec.name} must be one of {allowed_text}",
                value=raw,
            )

        if (spec.minimum is not None and number < spec.minimum) or \
           (spec.maximum is not None and number > spec.maximum):
            low = _format_bound(spec.minimum) if spec.minimum is not None else "-inf"
            high = _format_bound(spec.maximum) if spec.maximum is not None else "inf"
            return None, ValidationIssue(
                field=spec.name,
                kind=IssueKind.OUT_OF_RANGE,
                message=f"{spec.name} must be between {low} and {high}",
                value=raw,
            )

        return number, None


def validate(record: Mapping, schema: Optional[FieldSchema] = None) -> ValidatedRecord:
    """Validate `record` against `schema` (the default schema if omitted)."""
    return RecordValidator(schema).validate(record)
