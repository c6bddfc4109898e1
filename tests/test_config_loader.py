import pytest
from pydantic import ValidationError

from src.utils.config_loader import load_gateway_settings


def test_defaults_when_environment_is_empty():
    settings = load_gateway_settings({})

    assert settings.port == 8080
    assert settings.host == "0.0.0.0"
    assert settings.stripe_secret_key is None
    assert settings.stripe_configured is False
    assert settings.integrations_mode == "real"
    assert settings.cors.allow_methods == ["GET", "POST", "OPTIONS"]
    assert settings.cors.allow_headers == ["Content-Type", "Authorization"]


def test_reads_known_variables():
    settings = load_gateway_settings(
        {
            "PORT": "3000",
            "NODE_ENV": "production",
            "STRIPE_SECRET_KEY": "sk_live_abc",
            "STRIPE_TIMEOUT_SECONDS": "5",
            "INTEGRATIONS_MODE": "MOCK",
        }
    )

    assert settings.port == 3000
    assert settings.environment == "production"
    assert settings.stripe_configured is True
    assert settings.stripe_timeout_seconds == 5.0
    assert settings.integrations_mode == "mock"


def test_blank_key_counts_as_missing():
    assert load_gateway_settings({"STRIPE_SECRET_KEY": "   "}).stripe_configured is False


def test_invalid_port_is_rejected():
    with pytest.raises(ValidationError):
        load_gateway_settings({"PORT": "not-a-port"})
