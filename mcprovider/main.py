"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from mcprovider.api.v1 import router as v1_router
from mcprovider.core.config import settings
from mcprovider.core.errors import setup_error_handlers
from mcprovider.core.middleware import MetricsMiddleware, RequestIDMiddleware
from mcprovider.provider import MonteCarloProvider

logger = logging.getLogger(__name__)


def create_app(provider: Optional[MonteCarloProvider] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        provider: Pre-configured provider; when omitted one is built from settings on startup
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info("Starting Monte Carlo provider service...")
        if app.state.provider.client is None:
            app.state.provider.configure()
        yield
        logger.info("Shutting down Monte Carlo provider service...")
        app.state.provider.close()

    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Monte Carlo Provider API",
        description="""
Lifecycle endpoints for the Monte Carlo transactional warehouse resource.

## Features
- **Resources**: metadata, schema, validate, create, read, update, delete, import, upgrade
- **Health**: liveness, readiness, Prometheus metrics

Lifecycle outcomes are returned as state plus diagnostics.
        """.strip(),
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.environment == "development" else None,
        redoc_url="/api/redoc" if settings.environment == "development" else None,
        openapi_tags=[
            {"name": "health", "description": "Health checks and metrics"},
            {"name": "resources", "description": "Resource lifecycle operations"},
        ],
    )
    app.state.provider = provider or MonteCarloProvider()

    # Metrics middleware (collect metrics for all requests)
    app.add_middleware(MetricsMiddleware)

    # Request ID middleware (added last so it runs first on requests)
    app.add_middleware(RequestIDMiddleware)

    setup_error_handlers(app)

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
