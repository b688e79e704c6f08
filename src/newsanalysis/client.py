"""
Client for the remote prediction service.

Every call snapshots the current ServiceConfig once, so changing the base URL
or timeout through ``configure`` never redirects a request already in flight.
Transport and validation failures degrade to local analysis; timeouts and
HTTP errors are raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Literal

import httpx

from .config import get_settings
from .errors import (
    AnalysisTimeoutError,
    BackendHTTPError,
    BackendNetworkError,
    ResultValidationError,
)
from .models import AnalysisRequest, AnalysisResult, BackendPrediction, ServiceConfig
from .reconciler import ResultReconciler
from .validation import validate_backend_result

logger = logging.getLogger(__name__)

DEFAULT_MODELS = ("Ensemble", "Naive Bayes", "Logistic Regression", "Random Forest", "SVM", "XGBoost")
JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class AnalysisOutcome:
    result: AnalysisResult
    source: Literal["remote", "local"]
    fallback_reason: str | None = None


@dataclass(frozen=True)
class ConnectionStatus:
    healthy: bool
    models: list[str] = field(default_factory=list)


class NewsAnalysisClient:
    def __init__(
        self,
        config: ServiceConfig | None = None,
        *,
        reconciler: ResultReconciler | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        probe_timeout: float | None = None,
        default_model_name: str | None = None,
    ) -> None:
        settings = get_settings()
        self._config = config or ServiceConfig.from_settings()
        self._probe_timeout = probe_timeout or settings.probe_timeout
        self._default_model_name = default_model_name or settings.default_model_name
        self._transport = transport
        self.reconciler = reconciler or ResultReconciler()

    @property
    def config(self) -> ServiceConfig:
        return self._config

    def configure(self, *, base_url: str | None = None, timeout_ms: int | None = None) -> ServiceConfig:
        """Replace the config used by calls started from now on."""
        update = {}
        if base_url is not None:
            update["base_url"] = base_url
        if timeout_ms is not None:
            update["timeout_ms"] = timeout_ms
        self._config = ServiceConfig.model_validate({**self._config.model_dump(), **update})
        logger.info("Prediction service set to %s (timeout %d ms)", self._config.base_url, self._config.timeout_ms)
        return self._config

    async def analyze_news(self, text: str, model_name: str | None = None) -> AnalysisResult:
        outcome = await self.analyze_news_detailed(text, model_name)
        return outcome.result

    async def analyze_news_detailed(self, text: str, model_name: str | None = None) -> AnalysisOutcome:
        config = self._config
        request = AnalysisRequest(text=text, model_name=model_name or self._default_model_name)
        try:
            backend = await self._request_prediction(config, request)
        except (BackendNetworkError, ResultValidationError) as exc:
            logger.warning("Falling back to local analysis: %s", exc)
            return AnalysisOutcome(
                result=self.reconciler.reconcile(text),
                source="local",
                fallback_reason=str(exc),
            )
        return AnalysisOutcome(result=self.reconciler.reconcile(text, backend), source="remote")

    async def _request_prediction(self, config: ServiceConfig, request: AnalysisRequest) -> BackendPrediction:
        try:
            response = await asyncio.wait_for(
                self._post_predict(config, request),
                timeout=config.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("Prediction request to %s timed out after %d ms", config.base_url, config.timeout_ms)
            raise AnalysisTimeoutError(config.timeout_ms) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise BackendNetworkError(f"Could not reach {config.base_url}: {exc}") from exc

        if not response.is_success:
            logger.error("Prediction service returned %d", response.status_code)
            raise BackendHTTPError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ResultValidationError(["response body is not valid JSON"]) from exc
        return validate_backend_result(payload).unwrap()

    async def _post_predict(self, config: ServiceConfig, request: AnalysisRequest) -> httpx.Response:
        async with self._http_client(config, timeout=config.timeout_seconds) as client:
            return await client.post("/predict", json=request.to_wire())

    async def check_health(self) -> bool:
        config = self._config
        try:
            async with self._http_client(config, timeout=self._probe_timeout) as client:
                response = await client.get("/health", headers=JSON_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.info("Health check against %s failed: %s", config.base_url, exc)
            return False
        return response.is_success

    async def get_available_models(self) -> list[str]:
        config = self._config
        try:
            async with self._http_client(config, timeout=self._probe_timeout) as client:
                response = await client.get("/models", headers=JSON_HEADERS)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.info("Model listing from %s failed, using defaults: %s", config.base_url, exc)
            return list(DEFAULT_MODELS)
        models = payload.get("models") if isinstance(payload, dict) else None
        if isinstance(models, list) and all(isinstance(name, str) for name in models):
            return list(models)
        return list(DEFAULT_MODELS)

    async def check_connection(self) -> ConnectionStatus:
        if not await self.check_health():
            return ConnectionStatus(healthy=False)
        return ConnectionStatus(healthy=True, models=await self.get_available_models())

    def _http_client(self, config: ServiceConfig, *, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=config.base_url,
            timeout=timeout,
            transport=self._transport,
            follow_redirects=True,
        )
