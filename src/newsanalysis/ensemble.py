from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from .features import caps_ratio, exclamation_count
from .models import ModelScore, Prediction, TextMetrics

logger = logging.getLogger(__name__)

MODEL_NAMES = ("Naive Bayes", "Random Forest", "Logistic Regression", "SVM", "XGBoost")


class NoiseSource(Protocol):
    def uniform(self, low: float, high: float) -> float: ...


def predict_label(fake_probability: float) -> Prediction:
    return "Fake" if fake_probability > 0.5 else "Real"


def prediction_confidence(fake_probability: float) -> float:
    return abs(fake_probability - 0.5) * 2


@dataclass(frozen=True)
class EnsembleVote:
    fake_probability: float
    prediction: Prediction
    confidence: float
    model_scores: dict[str, ModelScore] = field(default_factory=dict)


@dataclass
class EnsembleWeights:
    naive_bayes: float = 0.8
    random_forest: float = 1.0
    logistic_regression: float = 0.9
    svm: float = 0.85
    xgboost: float = 1.1

    def as_dict(self) -> dict[str, float]:
        return {
            "Naive Bayes": self.naive_bayes,
            "Random Forest": self.random_forest,
            "Logistic Regression": self.logistic_regression,
            "SVM": self.svm,
            "XGBoost": self.xgboost,
        }


class EnsembleSimulator:
    """Heuristic stand-in for the backend classifiers.

    Every model starts from one shared fake-probability derived from the text
    metrics, applies its own multiplier and a small uniform jitter, and the
    results are combined by a weighted mean. The jitter comes from ``rng`` so
    tests can pin it.
    """

    DEFAULT_WEIGHT = 0.8
    MODEL_MULTIPLIERS = {
        "Naive Bayes": 0.95,
        "Random Forest": 1.05,
        "Logistic Regression": 0.98,
        "SVM": 1.02,
        "XGBoost": 1.08,
    }
    NOISE = 0.05
    MIN_PROBABILITY = 0.05
    MAX_PROBABILITY = 0.95

    def __init__(
        self,
        *,
        rng: NoiseSource | None = None,
        weights: EnsembleWeights | None = None,
        models: tuple[str, ...] = MODEL_NAMES,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._base_weights = (weights or EnsembleWeights()).as_dict()
        self._models = models

    def model_weight(self, model: str, metrics: TextMetrics) -> float:
        weight = self._base_weights.get(model, self.DEFAULT_WEIGHT)
        if metrics.word_count < 20 and model == "Naive Bayes":
            weight *= 1.2
        if len(metrics.bias_indicators) > 2 and model == "Random Forest":
            weight *= 1.1
        if metrics.readability_score < 30 and model == "XGBoost":
            weight *= 1.15
        return weight

    def base_fake_probability(self, text: str, metrics: TextMetrics) -> float:
        probability = 0.3
        probability += len(metrics.bias_indicators) * 0.15
        if metrics.readability_score < 40:
            probability += 0.1
        exclamations = exclamation_count(text)
        if exclamations > 2:
            probability += exclamations * 0.05
        ratio = caps_ratio(text)
        if ratio > 0.1:
            probability += ratio * 0.3
        return probability

    def simulate_model(self, model: str, base_probability: float) -> float:
        adjusted = base_probability * self.MODEL_MULTIPLIERS.get(model, 1.0)
        jitter = float(self._rng.uniform(-self.NOISE, self.NOISE))
        return max(self.MIN_PROBABILITY, min(self.MAX_PROBABILITY, adjusted + jitter))

    def run(self, text: str, metrics: TextMetrics) -> EnsembleVote:
        base_probability = self.base_fake_probability(text, metrics)
        model_scores: dict[str, ModelScore] = {}
        weighted_sum = 0.0
        total_weight = 0.0
        for model in self._models:
            weight = self.model_weight(model, metrics)
            fake_probability = self.simulate_model(model, base_probability)
            model_scores[model] = ModelScore(
                prediction=predict_label(fake_probability),
                confidence=prediction_confidence(fake_probability),
                weight=weight,
            )
            weighted_sum += fake_probability * weight
            total_weight += weight

        ensemble_probability = weighted_sum / total_weight
        logger.debug(
            "Ensemble vote: base=%.3f fake=%.3f models=%d",
            base_probability,
            ensemble_probability,
            len(model_scores),
        )
        return EnsembleVote(
            fake_probability=ensemble_probability,
            prediction=predict_label(ensemble_probability),
            confidence=prediction_confidence(ensemble_probability),
            model_scores=model_scores,
        )
