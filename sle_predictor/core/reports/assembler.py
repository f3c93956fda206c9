"""
Report Assembler

Combines scorer output, classifier output and the validated input into a
single immutable PredictionResult, and turns that result into export
shapes:

- to_csv():             two-line machine-readable export
- to_summary_csv():     Field,Value summary shown on the results page
- to_report_document(): ordered content sections for a document renderer

No layout happens here.  Renderers (see pdf_renderer.py) decide fonts,
colours and pagination.
"""
import csv
import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sle_predictor.core.inference import (
    RiskScores,
    RiskTier,
    TreatmentPlan,
    RISK_TIER_INFO,
    ADDITIONAL_CLINICAL_CONSIDERATIONS,
    SLE_DIAGNOSIS_THRESHOLD,
    FLARE_RISK_THRESHOLD,
    classify,
    recommend_treatment,
    symptom_count,
)
from sle_predictor.core.schema import FieldSchema, default_schema
from sle_predictor.utils import get_logger

logger = get_logger(__name__)

REPORT_TITLE = "SLE Prediction Report"
REPORT_FOOTER = "SLE Predictor - Advanced AI for Medical Diagnosis and Prediction"
MODEL_VERSION = "1.0.0"
ANONYMOUS_PATIENT = "Not provided"

CSV_HEADERS = (
    "Timestamp", "SLE_Diagnosis", "SLE_Probability",
    "Flare_12m", "Flare_Probability", "Patient_Age",
    "Patient_Sex", "ANA_Positive", "Symptom_Count",
)

DISCLAIMER = (
    "DISCLAIMER: This AI-generated report is for educational and clinical decision "
    "support purposes only. It should not replace professional medical judgment or "
    "definitive diagnostic procedures. Always consult with qualified healthcare "
    "professionals for final diagnosis and treatment decisions. Treatment "
    "recommendations are based on AI analysis and should be validated by licensed "
    "medical professionals."
)


# ── Result record ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PredictionResult:
    """Outcome of one successful scoring run. Immutable once built."""
    sle_diagnosis: int
    sle_probability: float
    flare_12m: int
    flare_probability: float
    timestamp: str
    patient_name: str
    input_data: Mapping[str, Any] = field(default_factory=dict)
    doctor_notes: Optional[str] = None

    def __post_init__(self):
        for name in ("sle_probability", "flare_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {value}")
        if self.sle_diagnosis != int(self.sle_probability > SLE_DIAGNOSIS_THRESHOLD):
            raise ValueError("sle_diagnosis disagrees with sle_probability")
        if self.flare_12m != int(self.flare_probability > FLARE_RISK_THRESHOLD):
            raise ValueError("flare_12m disagrees with flare_probability")
        object.__setattr__(self, "input_data", MappingProxyType(dict(self.input_data)))

    @property
    def sle_tier(self) -> RiskTier:
        return classify(self.sle_probability)

    @property
    def flare_tier(self) -> RiskTier:
        return classify(self.flare_probability)

    @property
    def treatment_plan(self) -> TreatmentPlan:
        return recommend_treatment(self.sle_probability, self.flare_probability)

    @property
    def symptom_count(self) -> int:
        return symptom_count(self.input_data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sle_diagnosis": self.sle_diagnosis,
            "sle_probability": self.sle_probability,
            "flare_12m": self.flare_12m,
            "flare_probability": self.flare_probability,
            "timestamp": self.timestamp,
            "patient_name": self.patient_name,
            "input_data": dict(self.input_data),
            "doctor_notes": self.doctor_notes,
        }


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def assemble(
    record: Mapping[str, Any],
    scores: RiskScores,
    timestamp: Optional[str] = None,
    patient_name: Optional[str] = None,
    doctor_notes: Optional[str] = None,
) -> PredictionResult:
    """Build the PredictionResult for a validated record and its scores."""
    if patient_name is None:
        patient_name = getattr(record, "patient_name", "")
    return PredictionResult(
        sle_diagnosis=scores.sle_diagnosis,
        sle_probability=scores.sle_probability,
        flare_12m=scores.flare_12m,
        flare_probability=scores.flare_probability,
        timestamp=timestamp or utc_timestamp(),
        patient_name=patient_name,
        input_data=dict(record),
        doctor_notes=doctor_notes or None,
    )


# ── Formatting helpers ────────────────────────────────────────────────────────

def format_percent(probability: float, decimals: int = 2) -> str:
    return f"{probability * 100:.{decimals}f}%"


def format_value(value: Any) -> str:
    """Render a canonical field value; integral floats lose their '.0'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_timestamp(timestamp: str) -> str:
    """Human-readable timestamp; unparseable input is returned unchanged."""
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return moment.strftime("%B %d, %Y at %I:%M %p")


def _write_rows(rows) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


# ── CSV exports ───────────────────────────────────────────────────────────────

def to_csv(result: PredictionResult) -> str:
    """Two-line CSV: header row, then the values of `result`."""
    data = result.input_data
    row = (
        result.timestamp,
        result.sle_diagnosis,
        format_percent(result.sle_probability),
        result.flare_12m,
        format_percent(result.flare_probability),
        format_value(data.get("Age")),
        format_value(data.get("Sex")),
        format_value(data.get("ANA_Positive")),
        result.symptom_count,
    )
    return _write_rows([CSV_HEADERS, row])


def to_summary_csv(result: PredictionResult) -> str:
    """Field,Value summary as offered by the results page download."""
    return _write_rows([
        ("Field", "Value"),
        ("SLE Diagnosis", result.sle_diagnosis),
        ("SLE Probability", format_percent(result.sle_probability)),
        ("12-Month Flare Risk", result.flare_12m),
        ("Flare Probability", format_percent(result.flare_probability)),
        ("Analysis Date", format_timestamp(result.timestamp)),
    ])


# ── Structured report ─────────────────────────────────────────────────────────

class SectionKind(str, Enum):
    HEADER = "header"
    PATIENT_INFO = "patient_info"
    DIAGNOSIS_RESULT = "diagnosis_result"
    FLARE_RESULT = "flare_result"
    CLINICAL_INTERPRETATION = "clinical_interpretation"
    TREATMENT_RECOMMENDATIONS = "treatment_recommendations"
    CLINICAL_NOTES = "clinical_notes"
    DISCLAIMER = "disclaimer"


@dataclass(frozen=True)
class ReportSection:
    """One block of report content: label/value pairs, prose and bullet lists."""
    kind: SectionKind
    title: str
    items: Tuple[Tuple[str, str], ...] = ()
    paragraphs: Tuple[str, ...] = ()
    bullets: Tuple[str, ...] = ()
    subsections: Tuple["ReportSection", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "items": [list(item) for item in self.items],
            "paragraphs": list(self.paragraphs),
            "bullets": list(self.bullets),
            "subsections": [s.to_dict() for s in self.subsections],
        }


@dataclass(frozen=True)
class ReportDocument:
    """Ordered report sections for one PredictionResult."""
    report_id: str
    title: str
    footer: str
    sections: Tuple[ReportSection, ...]

    def section(self, kind: SectionKind) -> Optional[ReportSection]:
        for section in self.sections:
            if section.kind == kind:
                return section
        return None

    @property
    def section_kinds(self) -> List[SectionKind]:
        return [section.kind for section in self.sections]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "title": self.title,
            "footer": self.footer,
            "sections": [s.to_dict() for s in self.sections],
        }


def _report_id(timestamp: str) -> str:
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        moment = datetime.now(timezone.utc)
    return f"SLE-{moment.strftime('%Y%m%d-%H%M%S')}"


def _option_label(schema: FieldSchema, field_name: str, value: Any) -> str:
    if value is None:
        return "—"
    label = schema.field(field_name).option_label(value) if field_name in schema else None
    return label if label is not None else format_value(value)


def _tier_summary(tier: RiskTier) -> str:
    info = RISK_TIER_INFO[tier]
    return f"{info.label}: {info.description}"


def _interpretation(result: PredictionResult) -> Tuple[str, str]:
    sle_conf = format_percent(result.sle_probability, 1)
    flare_conf = format_percent(result.flare_probability, 1)

    if result.sle_diagnosis == 1:
        sle_text = (
            f"The AI model predicts a positive SLE diagnosis with {sle_conf} confidence. "
            "This suggests the presence of SLE markers warranting further clinical "
            "evaluation and confirmation through additional diagnostic procedures."
        )
    else:
        sle_text = (
            f"The AI model predicts a negative SLE diagnosis with {sle_conf} confidence. "
            "This indicates a lower probability of SLE based on current clinical "
            "indicators, though clinical correlation is advised."
        )

    if result.flare_12m == 1:
        flare_text = (
            "The model indicates a high risk of SLE flare within the next 12 months "
            f"with {flare_conf} confidence. Close monitoring and preventive measures "
            "are strongly recommended."
        )
    else:
        flare_text = (
            "The model suggests a lower risk of SLE flare in the next 12 months with "
            f"{flare_conf} confidence. Current indicators suggest stable disease management."
        )
    return sle_text, flare_text


def to_report_document(result: PredictionResult, schema: Optional[FieldSchema] = None) -> ReportDocument:
    """
    Build the ordered report content for `result`.

    Categorical values are labelled from `schema` (the default schema if omitted).
    """
    if schema is None:
        schema = default_schema()
    data = result.input_data
    sle_tier = result.sle_tier
    flare_tier = result.flare_tier
    plan = result.treatment_plan
    sle_text, flare_text = _interpretation(result)

    sections = [
        ReportSection(
            kind=SectionKind.HEADER,
            title=REPORT_TITLE,
            items=(("Model Version", MODEL_VERSION),),
        ),
        ReportSection(
            kind=SectionKind.PATIENT_INFO,
            title="Patient Information",
            items=(
                ("Patient Name", result.patient_name or ANONYMOUS_PATIENT),
                ("Report Generated", format_timestamp(result.timestamp)),
                ("Age", format_value(data.get("Age")) or "—"),
                ("Sex", _option_label(schema, "Sex", data.get("Sex"))),
            ),
        ),
        ReportSection(
            kind=SectionKind.DIAGNOSIS_RESULT,
            title="SLE Diagnosis Prediction",
            items=(
                ("Result", "Positive" if result.sle_diagnosis == 1 else "Negative"),
                ("Confidence", format_percent(result.sle_probability, 1)),
                ("Risk Level", sle_tier.value),
            ),
            paragraphs=(_tier_summary(sle_tier),),
        ),
        ReportSection(
            kind=SectionKind.FLARE_RESULT,
            title="12-Month Flare Risk Prediction",
            items=(
                ("Result", "High Risk" if result.flare_12m == 1 else "Low Risk"),
                ("Confidence", format_percent(result.flare_probability, 1)),
                ("Risk Level", flare_tier.value),
            ),
            paragraphs=(_tier_summary(flare_tier),),
        ),
        ReportSection(
            kind=SectionKind.CLINICAL_INTERPRETATION,
            title="Clinical Interpretation",
            paragraphs=(sle_text, flare_text),
        ),
        ReportSection(
            kind=SectionKind.TREATMENT_RECOMMENDATIONS,
            title="Primary Treatment Recommendations",
            items=(
                ("Protocol", plan.level),
                ("Urgency", plan.urgency.value),
            ),
            bullets=plan.steps,
            subsections=(
                ReportSection(
                    kind=SectionKind.TREATMENT_RECOMMENDATIONS,
                    title="Additional Clinical Considerations",
                    bullets=ADDITIONAL_CLINICAL_CONSIDERATIONS,
                ),
            ),
        ),
    ]

    if result.doctor_notes:
        sections.append(ReportSection(
            kind=SectionKind.CLINICAL_NOTES,
            title="Clinical Notes",
            paragraphs=(result.doctor_notes,),
        ))

    sections.append(ReportSection(
        kind=SectionKind.DISCLAIMER,
        title="Disclaimer",
        paragraphs=(DISCLAIMER,),
    ))

    return ReportDocument(
        report_id=_report_id(result.timestamp),
        title=REPORT_TITLE,
        footer=REPORT_FOOTER,
        sections=tuple(sections),
    )
