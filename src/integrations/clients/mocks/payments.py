"""
Stripe MOCK client.

⚠️  This is a mock implementation for development and testing.
    It does NOT make any network calls. Objects are kept in memory and
    shaped like the Stripe objects the real client returns.

Usage:
- Selected in src/gateway/context.py when INTEGRATIONS_MODE=mock
- Used by the test-suite to observe the exact sequence of collaborator calls

Failures can be injected per operation with ``fail_on(...)``, and a latency
can be simulated with ``delay_seconds`` to exercise timeouts.
"""

import asyncio
import logging
import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

from src.integrations.contracts.interfaces import (
    CollaboratorError,
    CollectionMethod,
    ConfirmationMethod,
    PaymentCollaborator,
)

logger = logging.getLogger(__name__)


class MockStripeClient(PaymentCollaborator):
    """
    In-memory Stripe stand-in.

    Parameters
    ----------
    delay_seconds : float
        Seconds every operation sleeps before answering. Default 0.
    """

    def __init__(self, delay_seconds: float = 0.0):
        self._delay_seconds = delay_seconds

        # In-memory stores (reset on restart)
        self._customers: Dict[str, Dict[str, Any]] = {}
        self._pending_items: Dict[str, List[Dict[str, Any]]] = {}
        self._invoices: Dict[str, Dict[str, Any]] = {}
        self._payment_intents: Dict[str, Dict[str, Any]] = {}

        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self._failures: Dict[Tuple[str, int], Exception] = {}
        self._call_counts: Dict[str, int] = {}

        logger.info("[STRIPE MOCK] Client initialised (delay=%.2fs)", delay_seconds)

    # ------------------------------------------------------------------
    # Test hooks
    # ------------------------------------------------------------------

    def fail_on(self, operation: str, error: Exception, call_number: int = 1) -> None:
        """Make the ``call_number``-th call of ``operation`` raise ``error``."""
        self._failures[(operation, call_number)] = error

    def operations(self) -> List[str]:
        return [name for name, _ in self.calls]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _enter(self, operation: str, **kwargs: Any) -> None:
        self.calls.append((operation, kwargs))
        count = self._call_counts.get(operation, 0) + 1
        self._call_counts[operation] = count

        if self._delay_seconds:
            logger.debug("[STRIPE MOCK] Simulating network latency for %s", operation)
            await asyncio.sleep(self._delay_seconds)

        error = self._failures.get((operation, count))
        if error is not None:
            logger.info("[STRIPE MOCK] Injected failure for %s #%d: %s", operation, count, error)
            raise error

    @staticmethod
    def _new_id(prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex[:14]}"

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    async def create_customer(self, email: Optional[str], description: str) -> Dict[str, Any]:
        await self._enter("create_customer", email=email, description=description)
        customer = {
            "id": self._new_id("cus"),
            "object": "customer",
            "email": email,
            "description": description,
            "created": int(time.time()),
            "livemode": False,
        }
        self._customers[customer["id"]] = customer
        return customer

    async def retrieve_customer(self, customer_id: str) -> Dict[str, Any]:
        await self._enter("retrieve_customer", customer_id=customer_id)
        if customer_id not in self._customers:
            raise CollaboratorError(
                f"No such customer: '{customer_id}'",
                error_type="invalid_request_error",
                code="resource_missing",
                status_code=404,
            )
        return self._customers[customer_id]

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
        await self._enter(
            "create_invoice_item",
            customer_id=customer_id,
            amount=amount,
            currency=currency,
            description=description,
        )
        item = {
            "id": self._new_id("ii"),
            "object": "invoiceitem",
            "customer": customer_id,
            "amount": amount,
            "currency": currency,
            "description": description,
        }
        self._pending_items.setdefault(customer_id, []).append(item)
        return item

    async def create_invoice(
        self,
        customer_id: str,
        collection_method: CollectionMethod,
        days_until_due: int,
    ) -> Dict[str, Any]:
        await self._enter(
            "create_invoice",
            customer_id=customer_id,
            collection_method=collection_method,
            days_until_due=days_until_due,
        )
        lines = self._pending_items.pop(customer_id, [])
        invoice = {
            "id": self._new_id("in"),
            "object": "invoice",
            "customer": customer_id,
            "collection_method": collection_method.value,
            "days_until_due": days_until_due,
            "amount_due": sum(line["amount"] for line in lines),
            "lines": {"object": "list", "data": lines},
            "status": "draft",
        }
        self._invoices[invoice["id"]] = invoice
        return invoice

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
        await self._enter(
            "create_payment_intent",
            amount=amount,
            currency=currency,
            payment_method=payment_method,
            customer_id=customer_id,
            confirmation_method=confirmation_method,
            confirm=confirm,
            return_url=return_url,
        )
        intent = {
            "id": self._new_id("pi"),
            "object": "payment_intent",
            "amount": amount,
            "currency": currency,
            "customer": customer_id,
            "payment_method": payment_method,
            "confirmation_method": confirmation_method.value,
            "status": "succeeded" if confirm and payment_method else "requires_payment_method",
        }
        self._payment_intents[intent["id"]] = intent
        return intent
