from fastapi.testclient import TestClient

from src.api.main import create_app
from src.gateway.context import GatewayContext
from src.integrations.contracts.interfaces import CollaboratorError

TOOLS = ["create_customer", "create_invoice", "process_payment", "retrieve_customer"]


def test_health_reports_configured_stripe(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["env"] == {"nodeEnv": "test", "port": 8080, "stripeConfigured": True}
    assert body["uptime"] >= 0
    assert body["memory"]["rss"] > 0
    assert "T" in body["timestamp"]


def test_health_unaffected_by_failed_calls(client, stripe_mock):
    stripe_mock.fail_on("create_customer", CollaboratorError("boom"))
    client.post("/mcp", json={"method": "create_customer", "params": {}})
    client.post("/mcp", json={"method": "nope", "params": {}})

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["env"]["stripeConfigured"] is True


def test_health_without_key(unconfigured_client):
    resp = unconfigured_client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["env"]["stripeConfigured"] is False


def test_root_lists_tools_and_ready_status(client):
    resp = client.get("/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Stripe MCP Server"
    assert body["version"] == "1.0.0"
    assert body["tools"] == TOOLS
    assert body["status"] == "ready"


def test_root_reports_not_configured(unconfigured_client):
    assert unconfigured_client.get("/").json()["status"] == "stripe_not_configured"


def test_mcp_success_envelope(client):
    resp = client.post("/mcp", json={"method": "create_customer", "params": {"email": "jane@example.com"}})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["customer"]["email"] == "jane@example.com"
    assert body["customer"]["description"] == "Created via MCP"


def test_mcp_payment_intent_key(client):
    resp = client.post("/mcp", json={"method": "process_payment", "params": {"amount": 12.5, "payment_method": "pm_1"}})

    assert resp.status_code == 200
    assert resp.json()["paymentIntent"]["amount"] == 1250


def test_mcp_unknown_method_is_400(client):
    resp = client.post("/mcp", json={"method": "does_not_exist", "params": {}})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Unknown method", "available_methods": TOOLS}


def test_mcp_unconfigured_is_500(unconfigured_client):
    resp = unconfigured_client.post("/mcp", json={"method": "create_customer", "params": {}})

    assert resp.status_code == 500
    body = resp.json()
    assert body["type"] == "configuration_error"
    assert "STRIPE_SECRET_KEY" in body["error"]


def test_mcp_collaborator_error_is_500_with_type(client, stripe_mock):
    stripe_mock.fail_on("create_customer", CollaboratorError("Invalid email address", error_type="invalid_request_error"))

    resp = client.post("/mcp", json={"method": "create_customer", "params": {"email": "bad"}})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Invalid email address", "type": "invalid_request_error"}


def test_mcp_malformed_body_is_treated_as_unknown_method(client, stripe_mock):
    resp = client.post("/mcp", content=b"not json", headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert resp.json()["available_methods"] == TOOLS
    assert stripe_mock.calls == []


def test_mcp_invalid_params_is_400(client):
    resp = client.post("/mcp", json={"method": "retrieve_customer", "params": {}})

    assert resp.status_code == 400
    assert resp.json()["type"] == "bad_request"


def test_cors_preflight_allows_any_origin(client):
    resp = client.options(
        "/mcp",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "POST" in resp.headers["access-control-allow-methods"]


def test_mcp_nan_item_amount_is_400(client, stripe_mock):
    body = b'{"method": "create_invoice", "params": {"customer_id": "cus_1", "items": [{"amount": NaN}]}}'

    resp = client.post("/mcp", content=body, headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert resp.json()["type"] == "bad_request"
    assert stripe_mock.calls == []


def test_mcp_infinite_payment_amount_is_400(client, stripe_mock):
    body = b'{"method": "process_payment", "params": {"amount": Infinity}}'

    resp = client.post("/mcp", content=body, headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert stripe_mock.calls == []


def test_root_shows_client_construction_error(settings):
    context = GatewayContext(settings=settings, client_error="STRIPE_SECRET_KEY is not configured.")
    body = TestClient(create_app(context)).get("/").json()

    assert body["status"] == "stripe_not_configured"
    assert body["stripe_error"] == "STRIPE_SECRET_KEY is not configured."


def test_root_omits_error_when_ready(client):
    assert "stripe_error" not in client.get("/").json()
