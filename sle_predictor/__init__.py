"""
SLE Predictor

Risk-scoring and report pipeline for Systemic Lupus Erythematosus
diagnosis and 12-month flare prediction.

Usage:
    from sle_predictor import PredictionService

    service = PredictionService()
    result = await service.predict(form_data)
    csv_text = service.export_csv(result)
"""
from .config import Settings, configure_logging, get_settings

__version__ = "1.0.0"

# Initialize logging on package import
configure_logging()

from .services import PredictionService  # noqa: E402

__all__ = ["PredictionService", "Settings", "configure_logging", "get_settings", "__version__"]
