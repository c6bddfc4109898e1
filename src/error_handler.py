"""Error handling helpers for the method dispatcher."""
from typing import Any, Dict
import logging

from src.gateway.results import DispatchFailure, FailureKind

logger = logging.getLogger(__name__)


class ErrorHandler:
    def to_failure(self, exc: Exception, context: Dict[str, Any] = None) -> DispatchFailure:
        context = context or {}
        kind = getattr(exc, "error_type", None) or FailureKind.API_ERROR.value
        message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
        logger.error(
            "Stripe API error: method=%s type=%s message=%s",
            context.get("method"),
            kind,
            message,
        )
        return DispatchFailure(message=message, kind=kind, context=context)
