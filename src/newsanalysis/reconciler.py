from __future__ import annotations

from .ensemble import EnsembleSimulator
from .features import FeatureExtractor
from .models import AnalysisResult, BackendPrediction, Probabilities
from .risk import backend_enriched_risk, local_ensemble_risk


class ResultReconciler:
    """Merge an optional backend prediction with locally computed text metrics."""

    def __init__(
        self,
        *,
        extractor: FeatureExtractor | None = None,
        simulator: EnsembleSimulator | None = None,
    ) -> None:
        self.extractor = extractor or FeatureExtractor()
        self.simulator = simulator or EnsembleSimulator()

    def reconcile(self, text: str, backend: BackendPrediction | None = None) -> AnalysisResult:
        metrics = self.extractor.extract(text)
        bias_count = len(metrics.bias_indicators)

        if backend is None:
            vote = self.simulator.run(text, metrics)
            return AnalysisResult(
                prediction=vote.prediction,
                confidence=vote.confidence,
                probabilities=Probabilities(
                    fake=vote.fake_probability,
                    real=1 - vote.fake_probability,
                ),
                model_scores=vote.model_scores,
                text_metrics=metrics,
                risk_level=local_ensemble_risk(vote.confidence, bias_count),
            )

        return AnalysisResult(
            prediction=backend.prediction,
            confidence=backend.confidence,
            probabilities=backend.probabilities,
            model_scores=backend.model_scores or {},
            text_metrics=metrics,
            risk_level=backend_enriched_risk(backend.confidence, bias_count),
        )
