"""
FastAPI application - Main entry point
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api.endpoints.mcp import mcp_api
from src.gateway.context import GatewayContext, build_context
from src.gateway.dispatcher import MethodDispatcher
from src.gateway.health import HealthReporter
from src.utils.config_loader import load_gateway_settings

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(context: Optional[GatewayContext] = None) -> FastAPI:
    """Build the app around a context created once for the process."""
    if context is None:
        context = build_context(load_gateway_settings())

    app = FastAPI(
        title="Stripe MCP Server",
        description="Model Context Protocol server for Stripe API integration",
        version="1.0.0",
    )

    app.state.context = context
    app.state.dispatcher = MethodDispatcher(context)
    app.state.health = HealthReporter(context.settings)

    # CORS middleware
    cors = context.settings.cors
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.allow_origins,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s - %s %s", datetime.now(timezone.utc).isoformat(), request.method, request.url.path)
        return await call_next(request)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness probe: uptime, memory and whether Stripe is configured."""
        return app.state.health.snapshot()

    app.include_router(mcp_api)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.context.settings
    logger.info("Stripe MCP Server running on port %s", settings.port)
    logger.info("Health check available at: http://localhost:%s/health", settings.port)
    logger.info("Stripe configured: %s", app.state.context.ready)
    if app.state.context.client_error:
        logger.error("Stripe unavailable: %s", app.state.context.client_error)
    uvicorn.run(app, host=settings.host, port=settings.port)
