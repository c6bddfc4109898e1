from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from src.integrations.contracts.interfaces import CollaboratorError


class IntegrationResponseError(CollaboratorError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_type="api_error", payload=payload)


class StripeErrorModel(BaseModel):
    type: str = "api_error"
    message: str = "Unknown Stripe error"
    code: Optional[str] = None
    param: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict)


class StripeObjectModel(BaseModel):
    id: str
    object: str
    raw: Dict[str, Any] = Field(default_factory=dict)


def normalize_stripe_error(raw: Any, *, status_code: Optional[int] = None) -> CollaboratorError:
    """Build a CollaboratorError from a Stripe ``{"error": {...}}`` body."""
    body = raw.get("error") if isinstance(raw, dict) else None
    if not isinstance(body, dict):
        return CollaboratorError(
            f"Stripe request failed with HTTP {status_code}",
            error_type="api_error",
            status_code=status_code,
            payload=raw if isinstance(raw, dict) else {},
        )

    error = StripeErrorModel(
        type=str(_first_non_empty(body, "type", default="api_error")),
        message=str(_first_non_empty(body, "message", default=f"Stripe request failed with HTTP {status_code}")),
        code=body.get("code"),
        param=body.get("param"),
        raw=raw,
    )
    return CollaboratorError(
        error.message,
        error_type=error.type,
        code=error.code,
        status_code=status_code,
        payload=error.raw,
    )


def normalize_stripe_object(raw: Any, *, expected_object: str) -> Dict[str, Any]:
    """Check a successful Stripe response is the object we asked for and return it untouched."""
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Expected a JSON object from Stripe, got {type(raw).__name__}.")

    obj = _build_model(
        StripeObjectModel,
        {
            "id": _first_non_empty(raw, "id"),
            "object": _first_non_empty(raw, "object", default=expected_object),
            "raw": raw,
        },
        raw,
    )
    if obj.object != expected_object:
        raise IntegrationResponseError(
            f"Unexpected Stripe object '{obj.object}'; expected '{expected_object}'.",
            payload=raw,
        )
    return obj.raw


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
