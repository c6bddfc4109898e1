"""
Integrations layer.
This package contains all code used to communicate with external systems:
- Stripe (customers, invoices, payment intents)

Key rule:
- The dispatcher MUST NOT call Stripe directly with ad-hoc HTTP.
- It calls a client implementing PaymentCollaborator (under src/integrations/clients).
- We use the MOCK client during development and tests, and the REAL_HTTP client when a key is configured.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/gateway/context.py).
"""

from .contracts.interfaces import (
    CollaboratorError,
    CollectionMethod,
    ConfirmationMethod,
    PaymentCollaborator,
)
from .contracts.payments import (
    CreateCustomerParams,
    CreateInvoiceParams,
    GatewayMethod,
    InvoiceItemParams,
    ProcessPaymentParams,
    RetrieveCustomerParams,
    to_minor_units,
)

__all__ = [
    # interfaces
    "CollaboratorError", "CollectionMethod", "ConfirmationMethod", "PaymentCollaborator",
    # payments
    "CreateCustomerParams", "CreateInvoiceParams", "GatewayMethod", "InvoiceItemParams",
    "ProcessPaymentParams", "RetrieveCustomerParams", "to_minor_units",
]
