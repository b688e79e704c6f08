from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .config import get_settings

Prediction = Literal["Real", "Fake"]
RiskLevel = Literal["Low", "Medium", "High", "Critical"]

MODEL_CONFIG = {"frozen": True, "populate_by_name": True, "protected_namespaces": ()}


class Probabilities(BaseModel):
    model_config = MODEL_CONFIG

    fake: float = Field(..., ge=0.0, le=1.0)
    real: float = Field(..., ge=0.0, le=1.0)


class ModelScore(BaseModel):
    model_config = MODEL_CONFIG

    prediction: Prediction
    confidence: float = Field(..., ge=0.0, le=1.0)
    weight: float = Field(..., gt=0.0)


class TextMetrics(BaseModel):
    """Text statistics derived deterministically from the analysed text.

    ``bias_indicators`` holds one entry per matched phrase, while the
    sentiment score counts every occurrence of its words.
    """

    model_config = MODEL_CONFIG

    word_count: int = Field(..., ge=0, alias="wordCount")
    readability_score: float = Field(..., ge=0.0, le=100.0, alias="readabilityScore")
    sentiment_score: float = Field(..., alias="sentimentScore")
    bias_indicators: list[str] = Field(default_factory=list, alias="biasIndicators")
    confidence_factors: list[str] = Field(default_factory=list, alias="confidenceFactors")


class AnalysisResult(BaseModel):
    model_config = MODEL_CONFIG

    prediction: Prediction
    confidence: float = Field(..., ge=0.0, le=1.0)
    probabilities: Probabilities
    model_scores: dict[str, ModelScore] = Field(default_factory=dict, alias="modelScores")
    text_metrics: TextMetrics = Field(..., alias="textMetrics")
    risk_level: RiskLevel = Field(..., alias="riskLevel")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class BackendPrediction(BaseModel):
    """Prediction returned by the remote service once it passed validation."""

    model_config = MODEL_CONFIG

    prediction: Prediction
    confidence: float = Field(..., ge=0.0, le=1.0)
    probabilities: Probabilities
    model_scores: dict[str, ModelScore] | None = Field(default=None, alias="modelScores")


class AnalysisRequest(BaseModel):
    model_config = MODEL_CONFIG

    text: str
    model_name: str = "Ensemble"

    def to_wire(self) -> dict[str, str]:
        return {"text": self.text, "model_name": self.model_name}


class ServiceConfig(BaseModel):
    """Immutable snapshot of where and how long to call the prediction service."""

    model_config = MODEL_CONFIG

    base_url: str = "http://localhost:5000"
    timeout_ms: int = Field(default=30000, gt=0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @classmethod
    def from_settings(cls) -> "ServiceConfig":
        settings = get_settings()
        return cls(base_url=settings.news_api_base_url, timeout_ms=settings.news_api_timeout_ms)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000
