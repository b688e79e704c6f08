import sys
from pathlib import Path
import os

import httpx
import pytest


# Ensure project src is on path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

# Never reach a real prediction service from the unit run
os.environ.setdefault("NEWS_API_BASE_URL", "http://prediction.test")
os.environ.setdefault("NEWS_API_TIMEOUT_MS", "2000")

from newsanalysis.client import NewsAnalysisClient  # noqa: E402
from newsanalysis.ensemble import EnsembleSimulator  # noqa: E402
from newsanalysis.models import ServiceConfig  # noqa: E402
from newsanalysis.reconciler import ResultReconciler  # noqa: E402


SUSPICIOUS_TEXT = "SHOCKING: Scientists discover aliens living among us! Government covers up the truth!"
LEGITIMATE_TEXT = "The Federal Reserve announced a 0.25% interest rate increase."


class ZeroNoise:
    """Stand-in generator that never jitters model probabilities."""

    def uniform(self, low, high):
        return 0.0


@pytest.fixture
def zero_noise_reconciler():
    return ResultReconciler(simulator=EnsembleSimulator(rng=ZeroNoise()))


@pytest.fixture
def make_client(zero_noise_reconciler):
    def _make(handler, *, base_url="http://prediction.test", timeout_ms=2000):
        return NewsAnalysisClient(
            ServiceConfig(base_url=base_url, timeout_ms=timeout_ms),
            reconciler=zero_noise_reconciler,
            transport=httpx.MockTransport(handler),
            probe_timeout=0.5,
        )

    return _make


def backend_payload(**overrides):
    payload = {
        "prediction": "Fake",
        "confidence": 0.8,
        "probabilities": {"fake": 0.9, "real": 0.1},
        "modelScores": {
            "Remote BERT": {"prediction": "Fake", "confidence": 0.8, "weight": 1.0},
        },
    }
    payload.update(overrides)
    return payload
