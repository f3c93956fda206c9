"""
Unit Tests for the Field Schema

Field counts, naming, bounds and caching of the static input declarations.
"""
import pytest

from sle_predictor.core.schema import (
    FieldKind, FieldGroup, FieldSchema, CLINICAL_FIELDS, SYMPTOM_FIELDS,
    generate_fields, default_schema,
)


class TestGenerateFields:
    """Tests for the embedding field factory."""

    def test_names_and_count(self):
        fields = generate_fields("US_emb", 64, 0.0001)
        assert len(fields) == 64
        assert fields[0].name == "US_emb_0"
        assert fields[-1].name == "US_emb_63"

    def test_all_numeric_optional(self):
        fields = generate_fields("Omic", 50, 0.0001, group=FieldGroup.OMICS)
        assert all(f.kind == FieldKind.NUMERIC for f in fields)
        assert not any(f.required for f in fields)
        assert all(f.group == FieldGroup.OMICS for f in fields)
        assert fields[0].bounds == (-10.0, 10.0, 0.0001)

    def test_deterministic(self):
        assert generate_fields("CXR_emb", 8, 0.01) == generate_fields("CXR_emb", 8, 0.01)

    def test_zero_count(self):
        assert generate_fields("X", 0, 0.1) == ()

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            generate_fields("X", -1, 0.1)


class TestDefaultSchema:
    """Tests for the assembled schema."""

    def test_group_sizes(self):
        schema = default_schema()
        assert len(schema.clinical) == 16
        assert len(schema.ultrasound) == 64
        assert len(schema.chest_xray) == 64
        assert len(schema.omics) == 50

    def test_total_inputs(self):
        schema = default_schema()
        assert schema.numeric_field_count == 194
        assert len(schema) == 195  # plus PatientName

    def test_order_starts_with_patient_then_clinical(self):
        names = [f.name for f in default_schema().fields]
        assert names[0] == "PatientName"
        assert names[1:17] == [f.name for f in CLINICAL_FIELDS]
        assert names[17] == "US_emb_0"
        assert names[-1] == "Omic_49"

    def test_required_fields_are_clinical(self):
        required = {f.name for f in default_schema().required_fields}
        assert required == {f.name for f in CLINICAL_FIELDS}

    def test_cached(self):
        assert default_schema() is default_schema()

    def test_age_bounds(self):
        age = default_schema().field("Age")
        assert age.kind == FieldKind.NUMERIC
        assert (age.minimum, age.maximum) == (0, 120)

    def test_categorical_options(self):
        sex = default_schema().field("Sex")
        assert sex.kind == FieldKind.CATEGORICAL
        assert sex.allowed_values == (0, 1)
        assert sex.option_label(1) == "Male"
        assert sex.option_label(2) is None
        assert default_schema().field("Ethnicity").allowed_values == (0, 1, 2, 3, 4, 5)

    def test_symptom_fields_are_binary(self):
        schema = default_schema()
        for name in SYMPTOM_FIELDS:
            assert schema.field(name).allowed_values == (0, 1)

    def test_duplicate_names_rejected(self):
        dup = generate_fields("A", 2, 0.1)
        with pytest.raises(ValueError, match="Duplicate"):
            FieldSchema(clinical=CLINICAL_FIELDS, ultrasound=dup, chest_xray=dup, omics=())
