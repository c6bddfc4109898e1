from urllib.parse import parse_qs

import httpx
import pytest

from src.integrations.clients.real_http.payments import StripePaymentsClient
from src.integrations.contracts.interfaces import CollaboratorError, CollectionMethod
from src.integrations.policy.response_wrappers import IntegrationResponseError


class RecordingTransport:
    """Answers each request with the next queued (status, json) pair."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses.pop(0)
        return httpx.Response(status, json=body)

    def form(self, index=0):
        parsed = parse_qs(self.requests[index].content.decode())
        return {k: v[0] for k, v in parsed.items()}


def _client(handler) -> StripePaymentsClient:
    return StripePaymentsClient(
        api_key="sk_test_123",
        base_url="https://stripe.test/v1",
        transport=httpx.MockTransport(handler),
    )


def test_missing_key_is_rejected(monkeypatch):
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    with pytest.raises(ValueError):
        StripePaymentsClient(api_key="  ")


@pytest.mark.asyncio
async def test_create_customer_posts_form_with_bearer_key():
    transport = RecordingTransport((200, {"id": "cus_1", "object": "customer", "email": "a@b.co"}))

    customer = await _client(transport).create_customer(email="a@b.co", description="Created via MCP")

    request = transport.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://stripe.test/v1/customers"
    assert request.headers["Authorization"] == "Bearer sk_test_123"
    assert transport.form() == {"email": "a@b.co", "description": "Created via MCP"}
    assert customer["id"] == "cus_1"


@pytest.mark.asyncio
async def test_unset_fields_are_omitted_and_booleans_lowercased():
    transport = RecordingTransport((200, {"id": "pi_1", "object": "payment_intent"}))

    await _client(transport).create_payment_intent(1000, "usd", return_url="https://example.com/r")

    assert transport.form() == {
        "amount": "1000",
        "currency": "usd",
        "confirmation_method": "manual",
        "confirm": "true",
        "return_url": "https://example.com/r",
    }


@pytest.mark.asyncio
async def test_create_invoice_sends_collection_settings():
    transport = RecordingTransport((200, {"id": "in_1", "object": "invoice"}))

    await _client(transport).create_invoice("cus_1", CollectionMethod.SEND_INVOICE, 30)

    assert transport.form() == {"customer": "cus_1", "collection_method": "send_invoice", "days_until_due": "30"}


@pytest.mark.asyncio
async def test_retrieve_customer_is_a_get():
    transport = RecordingTransport((200, {"id": "cus_9", "object": "customer"}))

    await _client(transport).retrieve_customer("cus_9")

    assert transport.requests[0].method == "GET"
    assert transport.requests[0].url.path == "/v1/customers/cus_9"


@pytest.mark.asyncio
async def test_stripe_error_body_becomes_collaborator_error():
    transport = RecordingTransport(
        (402, {"error": {"type": "card_error", "code": "card_declined", "message": "Your card was declined."}})
    )

    with pytest.raises(CollaboratorError) as exc_info:
        await _client(transport).create_payment_intent(500, "usd", payment_method="pm_card_chargeDeclined")

    assert exc_info.value.message == "Your card was declined."
    assert exc_info.value.error_type == "card_error"
    assert exc_info.value.code == "card_declined"
    assert exc_info.value.status_code == 402


@pytest.mark.asyncio
async def test_error_without_body_defaults_to_api_error():
    transport = RecordingTransport((503, None))

    with pytest.raises(CollaboratorError) as exc_info:
        await _client(transport).retrieve_customer("cus_1")

    assert exc_info.value.error_type == "api_error"
    assert "503" in exc_info.value.message


@pytest.mark.asyncio
async def test_timeout_maps_to_connection_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(CollaboratorError) as exc_info:
        await _client(handler).retrieve_customer("cus_1")

    assert exc_info.value.error_type == "api_connection_error"


@pytest.mark.asyncio
async def test_unexpected_object_is_rejected():
    transport = RecordingTransport((200, {"id": "in_1", "object": "invoice"}))

    with pytest.raises(IntegrationResponseError):
        await _client(transport).retrieve_customer("cus_1")


@pytest.mark.asyncio
async def test_customer_id_is_escaped_in_path():
    transport = RecordingTransport((200, {"id": "cus_1", "object": "customer"}))

    await _client(transport).retrieve_customer("cus_1/../invoices?limit=1#x")

    request = transport.requests[0]
    assert request.url.raw_path == b"/v1/customers/cus_1%2F..%2Finvoices%3Flimit%3D1%23x"
    assert request.url.query == b""
