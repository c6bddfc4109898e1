import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.gateway.context import GatewayContext
from src.gateway.dispatcher import DispatchRequest, MethodDispatcher
from src.gateway.results import DispatchFailure
from src.integrations.contracts.payments import GatewayMethod

logger = logging.getLogger(__name__)

api = APIRouter()
mcp_api = api

SERVER_NAME = "Stripe MCP Server"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = "Model Context Protocol server for Stripe API integration"


def get_context(request: Request) -> GatewayContext:
    return request.app.state.context


def get_dispatcher(request: Request) -> MethodDispatcher:
    return request.app.state.dispatcher


@api.get("/", tags=["MCP"])
async def server_info(context: GatewayContext = Depends(get_context)):
    """Describe the server and the tools it exposes."""
    info = {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": SERVER_DESCRIPTION,
        "tools": GatewayMethod.names(),
        "status": "ready" if context.ready else "stripe_not_configured",
    }
    if context.client_error:
        info["stripe_error"] = context.client_error
    return info


@api.post("/mcp", tags=["MCP"])
async def mcp_call(request: Request, dispatcher: MethodDispatcher = Depends(get_dispatcher)):
    """
    Run one gateway method.

    Example payload:
    {
        "method": "create_customer",
        "params": {"email": "jane@example.com"}
    }
    """
    dispatch_request = _parse_dispatch_request(await _read_json(request))
    result = await dispatcher.dispatch(dispatch_request)

    if isinstance(result, DispatchFailure):
        return JSONResponse(status_code=result.status_code, content=result.to_body())
    return result.to_body()


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Unreadable /mcp body: %s", e)
        return None


def _parse_dispatch_request(body: Any) -> DispatchRequest:
    if not isinstance(body, dict):
        return DispatchRequest()

    method = body.get("method")
    params: Dict[str, Any] = body.get("params") if isinstance(body.get("params"), dict) else {}
    return DispatchRequest(method=method if isinstance(method, str) else None, params=params)
