from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from .client import NewsAnalysisClient
from .errors import NewsAnalysisError
from .models import AnalysisResult
from .reconciler import ResultReconciler

logger = logging.getLogger(__name__)

LOCAL_NOTICE = "Prediction service unavailable, showing local analysis."
SUPERVISOR_NOTICE = "API connection failed. Using local analysis. Configure the API connection in settings."


@dataclass(frozen=True)
class SupervisedAnalysis:
    result: AnalysisResult
    source: Literal["remote", "local", "supervisor"]
    notice: str | None = None

    @property
    def degraded(self) -> bool:
        return self.source != "remote"


class AnalysisSupervisor:
    """Caller-level fallback around the client.

    Anything the client raises (timeouts, HTTP errors) is turned into a local
    analysis with a notice for the user, so a request always yields a result.
    """

    def __init__(self, client: NewsAnalysisClient, *, reconciler: ResultReconciler | None = None) -> None:
        self.client = client
        self.reconciler = reconciler or client.reconciler

    async def analyze(self, text: str, model_name: str | None = None) -> SupervisedAnalysis:
        try:
            outcome = await self.client.analyze_news_detailed(text, model_name)
        except NewsAnalysisError as exc:
            logger.warning("API call failed, falling back to local analysis: %s", exc)
            return SupervisedAnalysis(
                result=self.reconciler.reconcile(text),
                source="supervisor",
                notice=SUPERVISOR_NOTICE,
            )
        if outcome.source == "local":
            return SupervisedAnalysis(result=outcome.result, source="local", notice=LOCAL_NOTICE)
        return SupervisedAnalysis(result=outcome.result, source="remote")
