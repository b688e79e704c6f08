"""
Failure taxonomy for calls against the prediction service.

Network and validation failures are recovered inside the client by falling
back to local analysis. Timeouts and HTTP errors reach the caller.
"""

from __future__ import annotations


class NewsAnalysisError(RuntimeError):
    """Base class for prediction service failures."""


class AnalysisTimeoutError(NewsAnalysisError):
    """Raised when the prediction service does not answer within the timeout."""

    def __init__(self, timeout_ms: int) -> None:
        super().__init__(f"Request timeout - analysis took longer than {timeout_ms} ms")
        self.timeout_ms = timeout_ms


class BackendNetworkError(NewsAnalysisError):
    """Transport failed before any response arrived."""


class BackendHTTPError(NewsAnalysisError):
    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code
        self.body = body


class ResultValidationError(NewsAnalysisError):
    """Backend answered with a payload that does not match the result schema."""

    def __init__(self, errors: tuple[str, ...] | list[str]) -> None:
        self.errors = tuple(errors)
        detail = "; ".join(self.errors) or "unknown"
        super().__init__(f"Invalid response format from server: {detail}")
