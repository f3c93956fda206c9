"""
Pytest Configuration and Fixtures

Shared fixtures for SLE prediction pipeline tests.
"""
import pytest
from pathlib import Path
import sys
from typing import Any, Dict

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sle_predictor.config import Settings  # noqa: E402
from sle_predictor.core.reports import PredictionResult  # noqa: E402


@pytest.fixture
def valid_record() -> Dict[str, Any]:
    """A complete clinical submission, values as a form would send them."""
    return {
        "PatientName": "Jane Doe",
        "Age": "45",
        "Sex": "0",
        "Ethnicity": "3",
        "Fatigue": "1",
        "Malar_Rash": "1",
        "Arthritis": "0",
        "Renal_Disorder": "0",
        "Fever": "1",
        "ANA_Positive": "1",
        "Anti_dsDNA": "35.5",
        "Complement_C3": "80.2",
        "Complement_C4": "12.1",
        "Creatinine": "0.9",
        "Fatigue_Score": "6.5",
        "QoL": "55",
        "Pain_Score": "4",
        "US_emb_0": "0.1234",
        "CXR_emb_63": "-1.5",
        "Omic_49": "2.25",
    }


@pytest.fixture
def low_risk_record() -> Dict[str, Any]:
    """No symptoms, ANA negative, normal creatinine, young patient: base score 0.1."""
    return {
        "PatientName": "John Roe",
        "Age": 25,
        "Sex": 1,
        "Ethnicity": 0,
        "Fatigue": 0,
        "Malar_Rash": 0,
        "Arthritis": 0,
        "Renal_Disorder": 0,
        "Fever": 0,
        "ANA_Positive": 0,
        "Anti_dsDNA": 5,
        "Complement_C3": 110,
        "Complement_C4": 25,
        "Creatinine": 0.8,
        "Fatigue_Score": 1,
        "QoL": 90,
        "Pain_Score": 0,
    }


@pytest.fixture
def extreme_record(low_risk_record) -> Dict[str, Any]:
    """Every risk factor present: base score 1.45 before clamping."""
    record = dict(low_risk_record)
    record.update({
        "Fatigue": 1, "Malar_Rash": 1, "Arthritis": 1, "Renal_Disorder": 1, "Fever": 1,
        "ANA_Positive": 1, "Creatinine": 5, "Age": 80,
    })
    return record


@pytest.fixture
def fast_settings(tmp_path) -> Settings:
    """Settings with no artificial delays and a fixed seed."""
    return Settings(
        model_load_delay=0,
        inference_delay=0,
        random_seed=42,
        report_dir=str(tmp_path / "reports"),
    )


@pytest.fixture
def fixed_result() -> PredictionResult:
    """A fixed PredictionResult for export tests."""
    return PredictionResult(
        sle_diagnosis=1,
        sle_probability=0.823,
        flare_12m=0,
        flare_probability=0.21,
        timestamp="2024-01-15T10:30:00.000+00:00",
        patient_name="Jane Doe",
        input_data={
            "Age": 45.0, "Sex": 1, "ANA_Positive": 1,
            "Fatigue": 1, "Malar_Rash": 1, "Arthritis": 1,
            "Renal_Disorder": 0, "Fever": 0,
        },
    )
