"""
Gateway context.

Built once when the process starts and shared read-only by every request.
The Stripe client is either constructed here or permanently absent until
the process restarts.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.integrations.clients.mocks.payments import MockStripeClient
from src.integrations.clients.real_http.payments import StripePaymentsClient
from src.integrations.contracts.interfaces import PaymentCollaborator
from src.utils.config_loader import GatewaySettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayContext:
    settings: GatewaySettings
    client: Optional[PaymentCollaborator] = None
    client_error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.client is not None


def build_context(settings: GatewaySettings) -> GatewayContext:
    """Create the Stripe client selected by the settings, if any."""
    if settings.integrations_mode == "mock":
        logger.warning("INTEGRATIONS_MODE=mock - using the in-memory Stripe client")
        return GatewayContext(settings=settings, client=MockStripeClient())

    if not settings.stripe_configured:
        logger.warning("STRIPE_SECRET_KEY not provided - running in limited mode")
        return GatewayContext(settings=settings)

    try:
        logger.info("Initializing Stripe...")
        client = StripePaymentsClient(
            api_key=settings.stripe_secret_key,
            base_url=settings.stripe_api_base,
            timeout_seconds=settings.stripe_timeout_seconds,
        )
    except ValueError as e:
        logger.error("Failed to initialize Stripe: %s", e)
        return GatewayContext(settings=settings, client_error=str(e))

    logger.info("Stripe initialized successfully")
    return GatewayContext(settings=settings, client=client)
