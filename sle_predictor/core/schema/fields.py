"""
Field Schema

Static description of every input the SLE predictor accepts:

    clinical          16 fields (demographics, symptoms, labs, scores)
    ultrasound        64 embedding dimensions   US_emb_0  .. US_emb_63
    chest X-ray       64 embedding dimensions   CXR_emb_0 .. CXR_emb_63
    omics             50 biomarker dimensions   Omic_0    .. Omic_49

plus the free-text PatientName.  194 numeric/categorical inputs in total.

The schema is immutable and built once; `default_schema()` caches it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, Optional, Tuple


class FieldKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    TEXT = "text"


class FieldGroup(str, Enum):
    PATIENT = "patient"
    CLINICAL = "clinical"
    ULTRASOUND = "ultrasound"
    CHEST_XRAY = "chest_xray"
    OMICS = "omics"


@dataclass(frozen=True)
class FieldOption:
    """One allowed value of a categorical field."""
    value: int
    label: str


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of a single input field."""
    name: str
    kind: FieldKind
    label: str = ""
    description: str = ""
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    step: Optional[float] = None
    options: Tuple[FieldOption, ...] = ()
    required: bool = True
    group: FieldGroup = FieldGroup.CLINICAL

    @property
    def bounds(self) -> Optional[Tuple[Optional[float], Optional[float], Optional[float]]]:
        """(min, max, step) for numeric fields, None otherwise."""
        if self.kind != FieldKind.NUMERIC:
            return None
        return (self.minimum, self.maximum, self.step)

    @property
    def allowed_values(self) -> Tuple[int, ...]:
        return tuple(option.value for option in self.options)

    def option_label(self, value) -> Optional[str]:
        for option in self.options:
            if option.value == value:
                return option.label
        return None


# ── Field constructors ────────────────────────────────────────────────────────

_NO_YES = (FieldOption(0, "No"), FieldOption(1, "Yes"))


def _numeric(name, label, description, minimum=None, maximum=None, step=None) -> FieldSpec:
    return FieldSpec(
        name=name, kind=FieldKind.NUMERIC, label=label, description=description,
        minimum=minimum, maximum=maximum, step=step,
    )


def _categorical(name, label, description, options=_NO_YES) -> FieldSpec:
    return FieldSpec(
        name=name, kind=FieldKind.CATEGORICAL, label=label,
        description=description, options=tuple(options),
    )


# ── Patient / clinical fields ─────────────────────────────────────────────────

PATIENT_NAME_FIELD = FieldSpec(
    name="PatientName",
    kind=FieldKind.TEXT,
    label="Patient Name",
    description="Patient's complete name",
    required=False,
    group=FieldGroup.PATIENT,
)

SYMPTOM_FIELDS = ("Fatigue", "Malar_Rash", "Arthritis", "Renal_Disorder", "Fever")

CLINICAL_FIELDS: Tuple[FieldSpec, ...] = (
    _numeric("Age", "Age (years)", "Patient age in years", 0, 120),
    _categorical("Sex", "Biological Sex", "Patient biological sex",
                 (FieldOption(0, "Female"), FieldOption(1, "Male"))),
    _categorical("Ethnicity", "Ethnicity", "Patient ethnic background", (
        FieldOption(0, "Caucasian"),
        FieldOption(1, "African American"),
        FieldOption(2, "Hispanic/Latino"),
        FieldOption(3, "Asian"),
        FieldOption(4, "Native American"),
        FieldOption(5, "Other/Mixed"),
    )),
    _categorical("Fatigue", "Fatigue", "Presence of persistent fatigue"),
    _categorical("Malar_Rash", "Malar Rash", "Butterfly rash across cheeks and nose bridge"),
    _categorical("Arthritis", "Arthritis", "Joint inflammation and pain"),
    _categorical("Renal_Disorder", "Renal Disorder", "Kidney involvement or dysfunction"),
    _categorical("Fever", "Fever", "Presence of fever episodes"),
    _categorical("ANA_Positive", "ANA Test", "Antinuclear antibody test result",
                 (FieldOption(0, "Negative"), FieldOption(1, "Positive"))),
    _numeric("Anti_dsDNA", "Anti-dsDNA (IU/mL)",
             "Anti-double stranded DNA antibody level", 0, step=0.1),
    _numeric("Complement_C3", "Complement C3 (mg/dL)", "Complement component 3 level", 0, step=0.1),
    _numeric("Complement_C4", "Complement C4 (mg/dL)", "Complement component 4 level", 0, step=0.1),
    _numeric("Creatinine", "Creatinine (mg/dL)", "Serum creatinine level", 0, step=0.01),
    _numeric("Fatigue_Score", "Fatigue Score (0-10)", "Patient-reported fatigue severity", 0, 10, 0.1),
    _numeric("QoL", "Quality of Life Score (0-100)", "Patient-reported quality of life", 0, 100, 0.1),
    _numeric("Pain_Score", "Pain Score (0-10)", "Patient-reported pain level", 0, 10, 0.1),
)


# ── Embedding / omics fields ──────────────────────────────────────────────────

EMBEDDING_STEP = 0.0001
EMBEDDING_MIN = -10.0
EMBEDDING_MAX = 10.0


@dataclass(frozen=True)
class EmbeddingSection:
    prefix: str
    count: int
    title: str
    description: str
    group: FieldGroup


EMBEDDING_SECTIONS: Tuple[EmbeddingSection, ...] = (
    EmbeddingSection(
        "US_emb", 64, "Ultrasound Embeddings",
        "64-dimensional ultrasound feature embeddings from deep learning analysis",
        FieldGroup.ULTRASOUND,
    ),
    EmbeddingSection(
        "CXR_emb", 64, "Chest X-Ray Embeddings",
        "64-dimensional chest X-ray feature embeddings from radiological analysis",
        FieldGroup.CHEST_XRAY,
    ),
    EmbeddingSection(
        "Omic", 50, "Omic Data",
        "50-dimensional omics feature data including genomic and proteomic markers",
        FieldGroup.OMICS,
    ),
)


def generate_fields(
    prefix: str,
    count: int,
    step: float = EMBEDDING_STEP,
    minimum: Optional[float] = EMBEDDING_MIN,
    maximum: Optional[float] = EMBEDDING_MAX,
    group: FieldGroup = FieldGroup.ULTRASOUND,
) -> Tuple[FieldSpec, ...]:
    """
    Produce `count` numeric FieldSpecs named ``{prefix}_{i}`` for i in [0, count).

    Embedding dimensions are optional: the form only submits the ones a
    clinician filled in.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return tuple(
        FieldSpec(
            name=f"{prefix}_{i}",
            kind=FieldKind.NUMERIC,
            label=f"{prefix} {i}",
            minimum=minimum,
            maximum=maximum,
            step=step,
            required=False,
            group=group,
        )
        for i in range(count)
    )


# ── Schema ────────────────────────────────────────────────────────────────────

class FieldSchema:
    """
    Ordered, immutable collection of field groups.

    Field order is: PatientName, clinical, ultrasound, chest X-ray, omics.
    Validation issues are reported in this order.
    """

    def __init__(
        self,
        clinical: Tuple[FieldSpec, ...],
        ultrasound: Tuple[FieldSpec, ...],
        chest_xray: Tuple[FieldSpec, ...],
        omics: Tuple[FieldSpec, ...],
        patient_name: Optional[FieldSpec] = PATIENT_NAME_FIELD,
    ):
        self.clinical = tuple(clinical)
        self.ultrasound = tuple(ultrasound)
        self.chest_xray = tuple(chest_xray)
        self.omics = tuple(omics)
        self.patient_name = patient_name

        self._fields: Tuple[FieldSpec, ...] = (
            ((patient_name,) if patient_name is not None else ())
            + self.clinical + self.ultrasound + self.chest_xray + self.omics
        )
        self._by_name: Dict[str, FieldSpec] = {}
        for spec in self._fields:
            if spec.name in self._by_name:
                raise ValueError(f"Duplicate field name in schema: {spec.name}")
            self._by_name[spec.name] = spec

    @property
    def fields(self) -> Tuple[FieldSpec, ...]:
        return self._fields

    @property
    def groups(self) -> Dict[FieldGroup, Tuple[FieldSpec, ...]]:
        return {
            FieldGroup.CLINICAL: self.clinical,
            FieldGroup.ULTRASOUND: self.ultrasound,
            FieldGroup.CHEST_XRAY: self.chest_xray,
            FieldGroup.OMICS: self.omics,
        }

    @property
    def required_fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(spec for spec in self._fields if spec.required)

    @property
    def numeric_field_count(self) -> int:
        """Number of numeric + categorical inputs (excludes free text)."""
        return sum(1 for spec in self._fields if spec.kind != FieldKind.TEXT)

    def field(self, name: str) -> FieldSpec:
        return self._by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self):
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)


@lru_cache(maxsize=1)
def default_schema() -> FieldSchema:
    """The SLE predictor's field schema (built once)."""
    us, cxr, omic = (
        generate_fields(section.prefix, section.count, group=section.group)
        for section in EMBEDDING_SECTIONS
    )
    return FieldSchema(clinical=CLINICAL_FIELDS, ultrasound=us, chest_xray=cxr, omics=omic)
