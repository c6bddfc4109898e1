"""
Method dispatcher.

Routes a ``{method, params}`` request to one of the four Stripe operations and
returns a DispatchResult. Order of checks:

1. no Stripe client configured  -> configuration_error (method not inspected)
2. method not a GatewayMethod   -> bad_request, with the available methods
3. params fail validation       -> bad_request, no Stripe call made
4. handler runs; any exception is converted by ErrorHandler

Every Stripe call is awaited under ``asyncio.wait_for`` so a hung upstream
cannot stall a request forever. Cancellation of the inbound request
propagates into the pending call.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from src.error_handler import ErrorHandler
from src.gateway.context import GatewayContext
from src.gateway.results import DispatchFailure, DispatchResult, DispatchSuccess, FailureKind
from src.integrations.contracts.interfaces import (
    CollectionMethod,
    ConfirmationMethod,
    PaymentCollaborator,
)
from src.integrations.contracts.payments import (
    INVOICE_DAYS_UNTIL_DUE,
    METHOD_PARAMS,
    CreateCustomerParams,
    CreateInvoiceParams,
    GatewayMethod,
    ProcessPaymentParams,
    RetrieveCustomerParams,
    to_minor_units,
)

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Stripe not configured - STRIPE_SECRET_KEY environment variable is required"
UNKNOWN_METHOD_MESSAGE = "Unknown method"
TIMEOUT_MESSAGE = "Stripe API request timed out"


class DispatchRequest(BaseModel):
    method: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)


class MethodDispatcher:
    def __init__(
        self,
        context: GatewayContext,
        error_handler: Optional[ErrorHandler] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self.context = context
        self.error_handler = error_handler or ErrorHandler()
        self.timeout_seconds = timeout_seconds or context.settings.stripe_timeout_seconds
        self._handlers: Dict[GatewayMethod, Callable[[PaymentCollaborator, Any], Awaitable[DispatchSuccess]]] = {
            GatewayMethod.CREATE_CUSTOMER: self._create_customer,
            GatewayMethod.CREATE_INVOICE: self._create_invoice,
            GatewayMethod.PROCESS_PAYMENT: self._process_payment,
            GatewayMethod.RETRIEVE_CUSTOMER: self._retrieve_customer,
        }

    async def dispatch(self, request: DispatchRequest) -> DispatchResult:
        client = self.context.client
        if client is None:
            logger.error("Rejected %s: Stripe is not configured", request.method)
            return DispatchFailure(message=NOT_CONFIGURED_MESSAGE, kind=FailureKind.CONFIGURATION_ERROR.value)

        try:
            method = GatewayMethod(request.method)
        except ValueError:
            logger.warning("Rejected unknown method: %r", request.method)
            return DispatchFailure(
                message=UNKNOWN_METHOD_MESSAGE,
                kind=FailureKind.BAD_REQUEST.value,
                available_methods=GatewayMethod.names(),
            )

        try:
            params = METHOD_PARAMS[method](**request.params)
        except ValidationError as e:
            logger.warning("Rejected %s: invalid params: %s", method.value, e)
            return DispatchFailure(
                message=f"Invalid params for {method.value}: {_summarize(e)}",
                kind=FailureKind.BAD_REQUEST.value,
            )

        try:
            return await self._handlers[method](client, params)
        except asyncio.TimeoutError:
            logger.error("Stripe call for %s timed out after %ss", method.value, self.timeout_seconds)
            return DispatchFailure(message=TIMEOUT_MESSAGE, kind=FailureKind.TIMEOUT_ERROR.value)
        except Exception as e:
            return self.error_handler.to_failure(e, context={"method": method.value})

    async def _call(self, awaitable: Awaitable[Dict[str, Any]]) -> Dict[str, Any]:
        return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _create_customer(self, client: PaymentCollaborator, params: CreateCustomerParams) -> DispatchSuccess:
        customer = await self._call(client.create_customer(email=params.email, description=params.description))
        return DispatchSuccess(entity="customer", payload=customer)

    async def _create_invoice(self, client: PaymentCollaborator, params: CreateInvoiceParams) -> DispatchSuccess:
        created: List[str] = []
        # Items are created one at a time so Stripe records them in request order.
        for item in params.items:
            line = await self._call(
                client.create_invoice_item(
                    customer_id=params.customer_id,
                    amount=to_minor_units(item.amount),
                    currency=params.currency,
                    description=item.description,
                )
            )
            created.append(line.get("id"))

        try:
            invoice = await self._call(
                client.create_invoice(
                    customer_id=params.customer_id,
                    collection_method=CollectionMethod.SEND_INVOICE,
                    days_until_due=INVOICE_DAYS_UNTIL_DUE,
                )
            )
        except BaseException:
            if created:
                logger.warning(
                    "Invoice creation failed for customer %s; %d invoice item(s) left pending: %s",
                    params.customer_id,
                    len(created),
                    ", ".join(str(i) for i in created),
                )
            raise
        return DispatchSuccess(entity="invoice", payload=invoice)

    async def _process_payment(self, client: PaymentCollaborator, params: ProcessPaymentParams) -> DispatchSuccess:
        intent = await self._call(
            client.create_payment_intent(
                amount=to_minor_units(params.amount),
                currency=params.currency,
                payment_method=params.payment_method,
                customer_id=params.customer_id,
                confirmation_method=ConfirmationMethod.MANUAL,
                confirm=True,
                return_url=self.context.settings.return_url,
            )
        )
        return DispatchSuccess(entity="paymentIntent", payload=intent)

    async def _retrieve_customer(self, client: PaymentCollaborator, params: RetrieveCustomerParams) -> DispatchSuccess:
        customer = await self._call(client.retrieve_customer(params.customer_id))
        return DispatchSuccess(entity="customer", payload=customer)


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)
