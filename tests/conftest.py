"""Pytest fixtures for dispatcher and API tests."""

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.gateway.context import GatewayContext
from src.gateway.dispatcher import MethodDispatcher
from src.integrations.clients.mocks.payments import MockStripeClient
from src.utils.config_loader import GatewaySettings


@pytest.fixture
def settings():
    return GatewaySettings(stripe_secret_key="sk_test_123", environment="test", port=8080)


@pytest.fixture
def stripe_mock():
    """In-memory Stripe client that records every call."""
    return MockStripeClient()


@pytest.fixture
def context(settings, stripe_mock):
    return GatewayContext(settings=settings, client=stripe_mock)


@pytest.fixture
def unconfigured_context():
    return GatewayContext(settings=GatewaySettings())


@pytest.fixture
def dispatcher(context):
    return MethodDispatcher(context)


@pytest.fixture
def client(context):
    return TestClient(create_app(context))


@pytest.fixture
def unconfigured_client(unconfigured_context):
    return TestClient(create_app(unconfigured_context))
