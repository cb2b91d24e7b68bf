"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticketbridge.api.dependencies import close_services, init_services
from ticketbridge.api.models import APIResponse
from ticketbridge.api.routes import issues, items, sync
from ticketbridge.board import ItemNotFoundError
from ticketbridge.config import Settings
from ticketbridge.exceptions import ConfigurationError, TransportError
from ticketbridge.mapping import MappingError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger("ticketbridge.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings = getattr(app.state, "settings", None) or Settings.from_env()
    init_services(settings)
    logger.info("Services initialized for board %s", settings.board_id)

    yield
    # Shutdown
    close_services()


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses in the APIResponse envelope."""

    @app.exception_handler(ItemNotFoundError)
    async def item_not_found_handler(_request: Request, exc: ItemNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(MappingError)
    async def mapping_error_handler(_request: Request, exc: MappingError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(TransportError)
    async def transport_error_handler(_request: Request, exc: TransportError) -> JSONResponse:
        logger.error("Upstream call failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        _request: Request, _exc: ConfigurationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Server is not configured").model_dump(),
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Runtime settings. Read from the environment on startup
            when omitted.
    """
    app = FastAPI(
        title="TicketBridge API",
        description="REST API for TicketBridge - Board to tracker ticket sync",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(items.router, prefix="/api/v1")
    app.include_router(issues.router, prefix="/api/v1")
    app.include_router(sync.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
