"""
Real Stripe HTTP Client.

Used when STRIPE_SECRET_KEY is configured. Talks to the Stripe REST API
directly: form-encoded request bodies, bearer authentication with the secret
key, JSON responses.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from src.integrations.contracts.interfaces import (
    CollaboratorError,
    CollectionMethod,
    ConfirmationMethod,
    PaymentCollaborator,
)
from src.integrations.policy.response_wrappers import normalize_stripe_error, normalize_stripe_object

logger = logging.getLogger(__name__)

DEFAULT_STRIPE_API_BASE = "https://api.stripe.com/v1"


class StripePaymentsClient(PaymentCollaborator):
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = (api_key or os.getenv("STRIPE_SECRET_KEY", "")).strip()
        if not self.api_key:
            raise ValueError("STRIPE_SECRET_KEY is not configured.")
        self.base_url = (base_url or os.getenv("STRIPE_API_BASE", DEFAULT_STRIPE_API_BASE)).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    async def create_customer(self, email: Optional[str], description: str) -> Dict[str, Any]:
        data = await self._request("POST", "/customers", {"email": email, "description": description})
        return normalize_stripe_object(data, expected_object="customer")

    async def retrieve_customer(self, customer_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/customers/{quote(customer_id, safe='')}")
        return normalize_stripe_object(data, expected_object="customer")

    # ------------------------------------------------------------------
    # Invoicing
    # ------------------------------------------------------------------

    async def create_invoice_item(
        self,
        customer_id: str,
        amount: int,
        currency: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        form = {
            "customer": customer_id,
            "amount": amount,
            "currency": currency,
            "description": description,
        }
        data = await self._request("POST", "/invoiceitems", form)
        return normalize_stripe_object(data, expected_object="invoiceitem")

    async def create_invoice(
        self,
        customer_id: str,
        collection_method: CollectionMethod,
        days_until_due: int,
    ) -> Dict[str, Any]:
        form = {
            "customer": customer_id,
            "collection_method": collection_method.value,
            "days_until_due": days_until_due,
        }
        data = await self._request("POST", "/invoices", form)
        return normalize_stripe_object(data, expected_object="invoice")

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        *,
        payment_method: Optional[str] = None,
        customer_id: Optional[str] = None,
        confirmation_method: ConfirmationMethod = ConfirmationMethod.MANUAL,
        confirm: bool = True,
        return_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        form = {
            "amount": amount,
            "currency": currency,
            "payment_method": payment_method,
            "customer": customer_id,
            "confirmation_method": confirmation_method.value,
            "confirm": confirm,
            "return_url": return_url,
        }
        data = await self._request("POST", "/payment_intents", form)
        return normalize_stripe_object(data, expected_object="payment_intent")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, form: Optional[Dict[str, Any]] = None) -> Any:
        headers: Dict[str, str] = {"Authorization": f"Bearer {self.api_key}"}
        url = f"{self.base_url}{path}"
        body = _encode_form(form) if form is not None else None

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.request(method, url, data=body, headers=headers)
        except httpx.TimeoutException as exc:
            raise CollaboratorError(
                f"Request to Stripe timed out after {self.timeout_seconds}s",
                error_type="api_connection_error",
            ) from exc
        except httpx.HTTPError as exc:
            raise CollaboratorError(
                f"Could not connect to Stripe: {exc}",
                error_type="api_connection_error",
            ) from exc

        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}

        if response.is_error:
            error = normalize_stripe_error(data, status_code=response.status_code)
            logger.warning(
                "Stripe %s %s failed: status=%s type=%s code=%s",
                method, path, response.status_code, error.error_type, error.code,
            )
            raise error
        return data


def _encode_form(form: Dict[str, Any]) -> Dict[str, str]:
    """Drop unset fields and render values the way Stripe's form decoder expects."""
    encoded: Dict[str, str] = {}
    for key, value in form.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = str(value)
    return encoded
