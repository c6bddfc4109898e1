"""
Contracts (data models).

This folder defines the request/response shapes for the Stripe integration:
- the collaborator interface both the real and the mock client implement
- the error raised by either client when Stripe rejects a call
- the typed parameters accepted by each gateway method

Both mock and real HTTP clients should use these contracts.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CollectionMethod(str, Enum):
    CHARGE_AUTOMATICALLY = "charge_automatically"
    SEND_INVOICE = "send_invoice"


class ConfirmationMethod(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CollaboratorError(Exception):
    """Raised by a payment client when the collaborator reports a failure."""

    def __init__(
        self,
        message: str,
        *,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type or "api_error"
        self.code = code
        self.status_code = status_code
        self.payload = payload or {}


# ---------------------------------------------------------------------------
# Abstract collaborator interface
# ---------------------------------------------------------------------------

class PaymentCollaborator(ABC):
    """Every Stripe client (real or mock) must implement this interface.

    Payloads are returned as plain dicts, exactly as Stripe serializes them.
    """

    # -- Customers --

    @abstractmethod
    async def create_customer(self, email: Optional[str], description: str) -> Dict[str, Any]:
        """Create a customer record."""

    @abstractmethod
    async def retrieve_customer(self, customer_id: str) -> Dict[str, Any]:
        """Fetch an existing customer by ID."""

    # -- Invoicing --

    @abstractmethod
    async def create_invoice_item(
        self,
        customer_id: str,
        amount: int,
        currency: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Add a pending line item (amount in minor units) to a customer."""

    @abstractmethod
    async def create_invoice(
        self,
        customer_id: str,
        collection_method: CollectionMethod,
        days_until_due: int,
    ) -> Dict[str, Any]:
        """Create an invoice collecting the customer's pending line items."""

    # -- Payments --

    @abstractmethod
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
        """Create (and optionally confirm) a payment intent."""
