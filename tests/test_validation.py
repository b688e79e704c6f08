import pytest

from conftest import backend_payload
from newsanalysis.errors import ResultValidationError
from newsanalysis.validation import validate_backend_result


def test_valid_payload():
    outcome = validate_backend_result(backend_payload())
    assert outcome.is_valid
    prediction = outcome.unwrap()
    assert prediction.prediction == "Fake"
    assert prediction.probabilities.real == pytest.approx(0.1)
    assert set(prediction.model_scores) == {"Remote BERT"}


def test_model_scores_are_optional():
    payload = backend_payload()
    del payload["modelScores"]
    outcome = validate_backend_result(payload)
    assert outcome.is_valid
    assert outcome.prediction.model_scores is None


def test_integer_numbers_are_accepted():
    outcome = validate_backend_result(
        backend_payload(confidence=1, probabilities={"fake": 1, "real": 0}, modelScores=None)
    )
    assert outcome.is_valid


def test_missing_real_probability_fails_closed():
    outcome = validate_backend_result(backend_payload(probabilities={"fake": 0.9}))
    assert not outcome.is_valid
    assert "probabilities.real must be a number" in outcome.errors
    with pytest.raises(ResultValidationError):
        outcome.unwrap()


@pytest.mark.parametrize(
    "overrides",
    [
        {"prediction": "fake"},
        {"prediction": None},
        {"confidence": "0.8"},
        {"confidence": True},
        {"probabilities": [0.9, 0.1]},
        {"probabilities": {"fake": "0.9", "real": 0.1}},
        {"modelScores": ["Remote BERT"]},
        {"modelScores": {"Remote BERT": {"prediction": "Maybe", "confidence": 0.5, "weight": 1}}},
        {"modelScores": {"Remote BERT": {"prediction": "Fake", "confidence": 0.5}}},
        {"confidence": 1.5},
        {"probabilities": {"fake": -0.1, "real": 1.1}},
    ],
)
def test_malformed_payloads_are_rejected(overrides):
    outcome = validate_backend_result(backend_payload(**overrides))
    assert not outcome.is_valid
    assert outcome.errors


@pytest.mark.parametrize("payload", [None, "Fake", [], 42])
def test_non_object_payloads_are_rejected(payload):
    outcome = validate_backend_result(payload)
    assert outcome.errors == ("payload must be an object",)


def test_validation_error_lists_problems():
    with pytest.raises(ResultValidationError) as excinfo:
        validate_backend_result({"prediction": "Real"}).unwrap()
    assert "confidence must be a number" in excinfo.value.errors
    assert "probabilities must be an object" in excinfo.value.errors
