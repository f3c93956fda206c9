"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    SLEPredictorError,
    ValidationError,
    RecordValidationError,
    ModelUnavailableError,
    PredictionError,
    ReportGenerationError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "SLEPredictorError",
    "ValidationError",
    "RecordValidationError",
    "ModelUnavailableError",
    "PredictionError",
    "ReportGenerationError",
]
