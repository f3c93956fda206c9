"""
SLE Predictor Configuration
=============================
Centralised runtime settings. Values come from environment variables,
optionally loaded from a .env file found from the working directory.
"""
import os
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from sle_predictor.utils import get_logger, setup_logging

logger = get_logger(__name__)

ENV_PREFIX = "SLE_"


class Settings(BaseModel):
    """Runtime settings for the prediction pipeline."""

    log_level: str = Field("INFO", pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_file: Optional[str] = None

    # Artificial latencies standing in for model load / inference (seconds)
    model_load_delay: float = Field(1.0, ge=0)
    inference_delay: float = Field(2.0, ge=0)

    # Scorer randomness
    random_seed: Optional[int] = None
    scorer_noise: bool = True

    report_dir: str = "reports"
    history_size: int = Field(100, ge=1)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``SLE_*`` variables.

        Blank values are treated as unset so that ``SLE_RANDOM_SEED=`` in a
        .env file falls back to the default.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip() != "":
                values[name] = raw.strip()
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env (searched from the working directory) once and return the process settings."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings.from_env()


def configure_logging() -> Optional[Settings]:
    """
    Apply the logging settings from the environment.

    Invalid ``SLE_*`` values fall back to default logging with a warning and
    return None. get_settings() raises the same error again when called.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.warning(f"Invalid SLE_* settings, using default logging: {e}")
        return None

    setup_logging(settings.log_level, settings.log_file)
    return settings
