"""
Configuration loader for the Stripe gateway
"""

import logging
import os
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class CorsConfig(BaseModel):
    """CORS boundary policy"""

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    allow_methods: list[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    allow_headers: list[str] = Field(default_factory=lambda: ["Content-Type", "Authorization"])


class GatewaySettings(BaseModel):
    """Process-wide settings, read once at startup"""

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    environment: Optional[str] = None
    stripe_secret_key: Optional[str] = None
    stripe_api_base: str = "https://api.stripe.com/v1"
    stripe_timeout_seconds: float = Field(default=20.0, gt=0.0)
    return_url: str = "https://your-website.com/return"
    integrations_mode: Literal["real", "mock"] = "real"
    cors: CorsConfig = Field(default_factory=CorsConfig)

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key)


_ENV_FIELDS = {
    "HOST": "host",
    "PORT": "port",
    "NODE_ENV": "environment",
    "STRIPE_SECRET_KEY": "stripe_secret_key",
    "STRIPE_API_BASE": "stripe_api_base",
    "STRIPE_TIMEOUT_SECONDS": "stripe_timeout_seconds",
    "STRIPE_RETURN_URL": "return_url",
    "INTEGRATIONS_MODE": "integrations_mode",
}


def load_gateway_settings(environ: Optional[Mapping[str, str]] = None) -> GatewaySettings:
    """
    Load and validate gateway settings from the environment

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading a .env file

    Returns:
        Validated GatewaySettings object

    Raises:
        ValidationError: If a variable doesn't match the schema
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    data = {}
    for var, field_name in _ENV_FIELDS.items():
        value = environ.get(var)
        if value is None or not value.strip():
            continue
        data[field_name] = value.strip()
    if "integrations_mode" in data:
        data["integrations_mode"] = data["integrations_mode"].lower()

    try:
        settings = GatewaySettings(**data)
    except ValidationError as e:
        logger.error(f"Gateway settings validation failed: {e}")
        raise

    logger.info(
        "Environment check: environment=%s port=%s stripe_key_exists=%s",
        settings.environment,
        settings.port,
        settings.stripe_configured,
    )
    return settings
