from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .errors import ResultValidationError
from .models import BackendPrediction

PREDICTIONS = ("Real", "Fake")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ValidationOutcome:
    prediction: BackendPrediction | None = None
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.prediction is not None

    def unwrap(self) -> BackendPrediction:
        if self.prediction is None:
            raise ResultValidationError(self.errors)
        return self.prediction


def _check_model_scores(scores: Any) -> list[str]:
    if not isinstance(scores, dict):
        return ["modelScores must be an object"]
    errors = []
    for name, score in scores.items():
        if not isinstance(score, dict):
            errors.append(f"modelScores[{name!r}] must be an object")
            continue
        if score.get("prediction") not in PREDICTIONS:
            errors.append(f"modelScores[{name!r}].prediction must be 'Real' or 'Fake'")
        for key in ("confidence", "weight"):
            if not _is_number(score.get(key)):
                errors.append(f"modelScores[{name!r}].{key} must be a number")
    return errors


def validate_backend_result(payload: Any) -> ValidationOutcome:
    """Check a decoded /predict body before it is trusted. Fails closed."""
    if not isinstance(payload, dict):
        return ValidationOutcome(errors=("payload must be an object",))

    errors = []
    prediction = payload.get("prediction")
    if not isinstance(prediction, str) or prediction not in PREDICTIONS:
        errors.append("prediction must be 'Real' or 'Fake'")
    if not _is_number(payload.get("confidence")):
        errors.append("confidence must be a number")

    probabilities = payload.get("probabilities")
    if not isinstance(probabilities, dict):
        errors.append("probabilities must be an object")
    else:
        for key in ("fake", "real"):
            if not _is_number(probabilities.get(key)):
                errors.append(f"probabilities.{key} must be a number")

    scores = payload.get("modelScores")
    if scores is not None:
        errors.extend(_check_model_scores(scores))

    if errors:
        return ValidationOutcome(errors=tuple(errors))

    # ranges and bounds
    try:
        validated = BackendPrediction.model_validate(
            {
                "prediction": prediction,
                "confidence": payload["confidence"],
                "probabilities": {"fake": probabilities["fake"], "real": probabilities["real"]},
                "modelScores": scores,
            }
        )
    except ValidationError as exc:
        messages = tuple(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        return ValidationOutcome(errors=messages)
    return ValidationOutcome(prediction=validated)
