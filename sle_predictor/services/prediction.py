"""
Prediction Service

Orchestrates one submission end to end:

    validate → (simulated inference latency) → score → assemble → history

Each service instance owns its scorer, its "model loaded" flag and its
in-memory history; nothing is shared between instances.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, Callable, Deque, List, Mapping, Optional

import numpy as np

from sle_predictor.config import Settings, get_settings
from sle_predictor.core.inference import BaseScorer, HeuristicRiskScorer, classify
from sle_predictor.core.reports import (
    PDFReportRenderer,
    PredictionResult,
    assemble,
    to_csv,
    to_report_document,
)
from sle_predictor.core.validation import RecordValidator
from sle_predictor.utils import (
    get_logger,
    ModelUnavailableError,
    PredictionError,
    SLEPredictorError,
)

logger = get_logger(__name__)

ScorerLoader = Callable[[], BaseScorer]


class PredictionService:
    """
    SLE prediction pipeline for a single process or test.

    Args:
        settings:  Runtime settings (defaults to environment settings).
        loader:    Callable returning the scorer on first use. Defaults to
                   the heuristic scorer seeded from settings.
        validator: Record validator (defaults to the full field schema).
        renderer:  PDF renderer used by export_pdf().
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        loader: Optional[ScorerLoader] = None,
        validator: Optional[RecordValidator] = None,
        renderer: Optional[PDFReportRenderer] = None,
    ):
        self.settings = settings or get_settings()
        self.validator = validator or RecordValidator()
        self._loader = loader or self._default_loader
        self._renderer = renderer
        self._scorer: Optional[BaseScorer] = None
        self._load_lock = asyncio.Lock()
        self._history: Deque[PredictionResult] = deque(maxlen=self.settings.history_size)

    @property
    def model_loaded(self) -> bool:
        return self._scorer is not None

    def _default_loader(self) -> BaseScorer:
        rng = np.random.default_rng(self.settings.random_seed)
        return HeuristicRiskScorer(rng=rng, noise=self.settings.scorer_noise)

    async def load_model(self) -> None:
        """
        Load the scorer once. Later calls are no-ops.

        Raises:
            ModelUnavailableError: if loading fails. The service stays
                unloaded so the call can be retried.
        """
        async with self._load_lock:
            if self._scorer is not None:
                return

            logger.info("Loading SLE prediction model...")
            await asyncio.sleep(self.settings.model_load_delay)
            try:
                scorer = self._loader()
            except Exception as e:
                logger.error(f"Model loading failed: {e}")
                raise ModelUnavailableError(
                    "Failed to load prediction model",
                    details={"reason": str(e)},
                ) from e

            self._scorer = scorer
            logger.info(f"Model loaded successfully ({getattr(scorer, 'name', type(scorer).__name__)})")

    async def predict(
        self,
        record: Mapping[str, Any],
        patient_name: Optional[str] = None,
        doctor_notes: Optional[str] = None,
    ) -> PredictionResult:
        """
        Run the full pipeline for one submission.

        Raises:
            RecordValidationError: the record is invalid; nothing was scored.
            ModelUnavailableError: the model could not be loaded.
            PredictionError: scoring failed unexpectedly.
        """
        if not self.model_loaded:
            await self.load_model()

        validated = self.validator.validate(record)

        await asyncio.sleep(self.settings.inference_delay)

        try:
            scores = self._scorer.score(validated)
            result = assemble(
                validated,
                scores,
                patient_name=patient_name if patient_name is not None else validated.patient_name,
                doctor_notes=doctor_notes,
            )
        except SLEPredictorError:
            raise
        except Exception as e:
            logger.error(f"Prediction failed: {e}", exc_info=True)
            raise PredictionError(
                "Failed to generate prediction",
                details={"reason": str(e)},
            ) from e

        self._history.append(result)
        logger.info(
            f"Prediction complete: P(SLE)={result.sle_probability:.3f} "
            f"[{classify(result.sle_probability).value}], "
            f"P(flare)={result.flare_probability:.3f} "
            f"[{classify(result.flare_probability).value}]"
        )
        return result

    def history(self, limit: int = 10) -> List[PredictionResult]:
        """Most recent results first, at most `limit` of them."""
        if limit <= 0:
            return []
        return list(reversed(self._history))[:limit]

    def export_csv(self, result: PredictionResult) -> str:
        return to_csv(result)

    def export_pdf(self, result: PredictionResult, to_file: bool = False):
        """
        Render the PDF report for `result`.

        Returns PDF bytes, or the written file path when `to_file` is set.
        """
        if self._renderer is None:
            self._renderer = PDFReportRenderer(output_dir=self.settings.report_dir)
        document = to_report_document(result, schema=self.validator.schema)
        if to_file:
            return self._renderer.render_to_file(document)
        return self._renderer.render_bytes(document)
