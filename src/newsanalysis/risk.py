"""
Risk level derivation.

The local ensemble and the backend-enriched paths classify risk with
different boolean combinators. Both are kept as separate functions; merging
them would change the risk reported for backend results.
"""

from __future__ import annotations

from .models import RiskLevel

RISK_LEVELS: tuple[RiskLevel, ...] = ("Low", "Medium", "High", "Critical")


def risk_rank(level: RiskLevel) -> int:
    return RISK_LEVELS.index(level)


def local_ensemble_risk(confidence: float, bias_count: int) -> RiskLevel:
    """Either signal alone is enough to raise the level."""
    if bias_count > 3 or confidence > 0.9:
        return "Critical"
    if bias_count > 1 or confidence > 0.7:
        return "High"
    if bias_count > 0 or confidence > 0.5:
        return "Medium"
    return "Low"


def backend_enriched_risk(confidence: float, bias_count: int) -> RiskLevel:
    """Critical and High need both signals; Medium needs either."""
    if confidence > 0.9 and bias_count > 3:
        return "Critical"
    if confidence > 0.75 and bias_count > 1:
        return "High"
    if confidence > 0.6 or bias_count > 0:
        return "Medium"
    return "Low"
