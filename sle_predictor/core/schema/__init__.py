"""
Field Schema Module

Static declarations of the clinical, imaging-embedding and omics inputs.
"""
from .fields import (
    FieldKind,
    FieldGroup,
    FieldOption,
    FieldSpec,
    FieldSchema,
    CLINICAL_FIELDS,
    SYMPTOM_FIELDS,
    EMBEDDING_SECTIONS,
    PATIENT_NAME_FIELD,
    generate_fields,
    default_schema,
)

__all__ = [
    "FieldKind",
    "FieldGroup",
    "FieldOption",
    "FieldSpec",
    "FieldSchema",
    "CLINICAL_FIELDS",
    "SYMPTOM_FIELDS",
    "EMBEDDING_SECTIONS",
    "PATIENT_NAME_FIELD",
    "generate_fields",
    "default_schema",
]
