"""
Unit Tests for Settings and Error Serialisation
"""
import logging

import pydantic
import pytest

from sle_predictor.config import Settings, configure_logging, get_settings
from sle_predictor.utils import (
    SLEPredictorError, ModelUnavailableError, ReportGenerationError, setup_logging,
)


class TestSettings:
    """Environment parsing."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.log_level == "INFO"
        assert settings.model_load_delay == 1.0
        assert settings.inference_delay == 2.0
        assert settings.random_seed is None
        assert settings.scorer_noise is True
        assert settings.history_size == 100

    def test_env_values(self):
        settings = Settings.from_env({
            "SLE_LOG_LEVEL": "debug",
            "SLE_INFERENCE_DELAY": "0.5",
            "SLE_RANDOM_SEED": "7",
            "SLE_SCORER_NOISE": "false",
            "SLE_REPORT_DIR": "/tmp/sle",
        })
        assert settings.log_level == "debug"
        assert settings.inference_delay == 0.5
        assert settings.random_seed == 7
        assert settings.scorer_noise is False
        assert settings.report_dir == "/tmp/sle"

    def test_blank_values_ignored(self):
        settings = Settings.from_env({"SLE_RANDOM_SEED": "", "SLE_LOG_FILE": "  "})
        assert settings.random_seed is None
        assert settings.log_file is None

    @pytest.mark.parametrize("env", [
        {"SLE_INFERENCE_DELAY": "-1"},
        {"SLE_HISTORY_SIZE": "0"},
        {"SLE_LOG_LEVEL": "LOUD"},
        {"SLE_RANDOM_SEED": "abc"},
    ])
    def test_invalid_values_rejected(self, env):
        with pytest.raises(pydantic.ValidationError):
            Settings.from_env(env)


class TestErrors:
    """Structured error payloads."""

    def test_base_to_dict(self):
        err = SLEPredictorError("boom", code="X", details={"a": 1})
        assert err.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}

    def test_model_unavailable(self):
        err = ModelUnavailableError("no model")
        assert err.code == "MODEL_UNAVAILABLE"
        assert err.details["retryable"] is True

    def test_report_error(self):
        err = ReportGenerationError("bad", report_type="pdf")
        assert err.details["report_type"] == "pdf"


def test_setup_logging_file_handler(tmp_path):
    log_file = tmp_path / "sle.log"
    setup_logging("DEBUG", str(log_file))

    logging.getLogger("sle_predictor.test").debug("hello from test")
    for handler in logging.getLogger("sle_predictor").handlers:
        handler.flush()

    assert "hello from test" in log_file.read_text()
    setup_logging("INFO")


@pytest.fixture
def fresh_settings():
    """get_settings() with its cache cleared before and after the test."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


class TestEnvironmentLoading:
    """Process-level settings and logging bootstrap."""

    def test_invalid_env_falls_back_to_default_logging(self, monkeypatch, fresh_settings, caplog):
        monkeypatch.setenv("SLE_LOG_LEVEL", "LOUD")

        assert configure_logging() is None
        assert logging.getLogger("sle_predictor").level == logging.INFO
        assert "Invalid SLE_* settings" in caplog.text

        with pytest.raises(pydantic.ValidationError):
            fresh_settings()

    def test_valid_env_applied(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("SLE_LOG_LEVEL", "WARNING")

        settings = configure_logging()
        assert settings.log_level == "WARNING"
        assert logging.getLogger("sle_predictor").level == logging.WARNING
        setup_logging("INFO")

    def test_dotenv_found_from_working_directory(self, tmp_path, monkeypatch, fresh_settings):
        (tmp_path / ".env").write_text("SLE_HISTORY_SIZE=7\n")
        monkeypatch.chdir(tmp_path)
        # restored on teardown, whatever load_dotenv writes
        monkeypatch.setenv("SLE_HISTORY_SIZE", "")
        monkeypatch.delenv("SLE_HISTORY_SIZE")

        assert fresh_settings().history_size == 7
