import pytest

from conftest import SUSPICIOUS_TEXT
from newsanalysis.risk import RISK_LEVELS, backend_enriched_risk, local_ensemble_risk, risk_rank


@pytest.mark.parametrize(
    "confidence, bias_count, expected",
    [
        (0.1, 0, "Low"),
        (0.5, 0, "Low"),
        (0.51, 0, "Medium"),
        (0.1, 1, "Medium"),
        (0.71, 0, "High"),
        (0.1, 2, "High"),
        (0.91, 0, "Critical"),
        (0.1, 4, "Critical"),
    ],
)
def test_local_ensemble_risk(confidence, bias_count, expected):
    assert local_ensemble_risk(confidence, bias_count) == expected


@pytest.mark.parametrize(
    "confidence, bias_count, expected",
    [
        (0.1, 0, "Low"),
        (0.6, 0, "Low"),
        (0.61, 0, "Medium"),
        (0.1, 1, "Medium"),
        (0.76, 2, "High"),
        (0.76, 1, "Medium"),
        (0.91, 4, "Critical"),
        (0.91, 3, "High"),
        (0.5, 4, "Medium"),
    ],
)
def test_backend_enriched_risk(confidence, bias_count, expected):
    assert backend_enriched_risk(confidence, bias_count) == expected


def test_variants_diverge_on_single_signal():
    assert local_ensemble_risk(0.95, 0) == "Critical"
    assert backend_enriched_risk(0.95, 0) == "Medium"
    assert local_ensemble_risk(0.1, 2) == "High"
    assert backend_enriched_risk(0.1, 2) == "Medium"


def test_risk_rank_ordering():
    assert [risk_rank(level) for level in RISK_LEVELS] == [0, 1, 2, 3]


def test_more_bias_phrases_never_lower_local_risk(zero_noise_reconciler):
    sentence = "Officials released the quarterly budget report on Tuesday after a long review."
    prefixes = [
        "",
        "Shocking: ",
        "Shocking secret: ",
        "Shocking secret exposed: ",
        "Shocking secret exposed, urgent: ",
        "Shocking secret exposed, urgent, click here: ",
    ]
    ranks = []
    for count, prefix in enumerate(prefixes):
        result = zero_noise_reconciler.reconcile(prefix + sentence)
        assert len(result.text_metrics.bias_indicators) == count
        ranks.append(risk_rank(result.risk_level))
    assert ranks == sorted(ranks)
    assert ranks[0] == risk_rank("Low")
    assert ranks[-1] == risk_rank("Critical")


def test_suspicious_example_is_at_least_medium(zero_noise_reconciler):
    result = zero_noise_reconciler.reconcile(SUSPICIOUS_TEXT)
    assert risk_rank(result.risk_level) >= risk_rank("Medium")
