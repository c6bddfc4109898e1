"""
Payment contracts.

Defines the gateway methods and the parameters each one accepts, e.g.:
- creating a customer
- building an invoice from line items
- charging a payment method

Amounts arrive as decimal currency values and are sent to Stripe in minor
units (cents for USD).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Optional, Type

from pydantic import BaseModel, Field

DEFAULT_CURRENCY = "usd"
DEFAULT_CUSTOMER_DESCRIPTION = "Created via MCP"
INVOICE_DAYS_UNTIL_DUE = 30
# Stripe accepts at most 8 digits of minor units.
MAX_AMOUNT = 999_999.99


class GatewayMethod(str, Enum):
    CREATE_CUSTOMER = "create_customer"
    CREATE_INVOICE = "create_invoice"
    PROCESS_PAYMENT = "process_payment"
    RETRIEVE_CUSTOMER = "retrieve_customer"

    @classmethod
    def names(cls) -> List[str]:
        return [m.value for m in cls]


# ---------------------------------------------------------------------------
# Method parameters
# ---------------------------------------------------------------------------


class CreateCustomerParams(BaseModel):
    email: Optional[str] = None
    description: str = DEFAULT_CUSTOMER_DESCRIPTION


class InvoiceItemParams(BaseModel):
    amount: float = Field(allow_inf_nan=False, ge=-MAX_AMOUNT, le=MAX_AMOUNT)
    description: Optional[str] = None


class CreateInvoiceParams(BaseModel):
    customer_id: str
    items: List[InvoiceItemParams] = Field(default_factory=list)
    currency: str = DEFAULT_CURRENCY


class ProcessPaymentParams(BaseModel):
    amount: float = Field(allow_inf_nan=False, ge=-MAX_AMOUNT, le=MAX_AMOUNT)
    currency: str = DEFAULT_CURRENCY
    payment_method: Optional[str] = None
    customer_id: Optional[str] = None


class RetrieveCustomerParams(BaseModel):
    customer_id: str


METHOD_PARAMS: dict[GatewayMethod, Type[BaseModel]] = {
    GatewayMethod.CREATE_CUSTOMER: CreateCustomerParams,
    GatewayMethod.CREATE_INVOICE: CreateInvoiceParams,
    GatewayMethod.PROCESS_PAYMENT: ProcessPaymentParams,
    GatewayMethod.RETRIEVE_CUSTOMER: RetrieveCustomerParams,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def to_minor_units(amount: float) -> int:
    """
    Convert a decimal currency amount to integer minor units.

    The amount is multiplied by 100 first and rounded once, half away from
    zero. Going through ``str`` keeps the literal the caller sent, so 5.005
    becomes 501 rather than the 500 a binary float product would give.
    """
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
