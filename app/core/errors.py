"""
Error taxonomy for the monitoring engine.

Every error carries the HTTP status the API layer answers with, plus an
``extra`` payload merged into the response body.  Services raise these;
the FastAPI exception handler in :mod:`app.main` renders them.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional


class MonitoringError(Exception):
    """Base class for all engine errors."""

    kind = "monitoring_error"
    http_status = 400

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.kind, "detail": self.message, **self.extra}


class ValidationError(MonitoringError):
    """Malformed or missing required field.  Never silently defaulted."""

    kind = "validation_error"
    http_status = 422


class NotFoundError(MonitoringError):
    """Referenced session or athlete does not exist."""

    kind = "not_found"
    http_status = 404


class WindowExpiredError(MonitoringError):
    """Submission attempted after its deadline.

    Not fatal: the payload carries the resolved window and tells the caller
    an unlock request is possible.
    """

    kind = "window_expired"
    http_status = 409

    def __init__(self, message: str, window: Any = None, unlock_request: Optional[str] = None):
        extra: dict[str, Any] = {"can_request_unlock": True}
        if window is not None:
            extra["window"] = window.model_dump(mode="json")
        if unlock_request:
            extra["unlock_request"] = unlock_request
        super().__init__(message, **extra)
        self.window = window


class PartialDataError(MonitoringError):
    """One snapshot data source failed or timed out.

    Recoverable: the aggregator marks the source absent and carries on.
    """

    kind = "partial_data"
    http_status = 503

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        reason = "timed out" if isinstance(cause, (TimeoutError, asyncio.TimeoutError)) else f"failed: {cause!r}"
        super().__init__(f"Data source '{source}' {reason}", source=source)
        self.source = source
        self.cause = cause


class ConflictError(MonitoringError):
    """Duplicate submission; the existing record is returned unchanged."""

    kind = "conflict"
    http_status = 409

    def __init__(self, message: str, existing: Any = None, **extra: Any):
        if existing is not None and hasattr(existing, "model_dump"):
            extra["existing"] = existing.model_dump(mode="json")
        super().__init__(message, **extra)
        self.existing = existing


class InvalidTransitionError(ConflictError):
    """Illegal unlock state-machine transition."""

    kind = "invalid_transition"


class ConfigurationError(MonitoringError):
    """Invalid static configuration.  Raised at startup, never per request."""

    kind = "configuration_error"
    http_status = 500
