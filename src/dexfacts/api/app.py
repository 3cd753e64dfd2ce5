"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dexfacts import __version__
from dexfacts.api.routes import chain_router, health_router, tokens_router
from dexfacts.api.schemas import APIError, ErrorDetail
from dexfacts.client import DexfactsClient
from dexfacts.config import DexfactsSettings, get_settings
from dexfacts.core.exceptions import (
    DexfactsError,
    UnknownMintError,
    UpstreamFetchError,
    UpstreamUnavailableError,
    ValidationError,
)
from dexfacts.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Opens the facade client (loading the token table) and closes it on shutdown.
    """
    settings: DexfactsSettings = app.state.settings
    configure_logging(settings.log_level)

    logger.info("Loading token table...")
    app.state.client = await DexfactsClient.open(settings)
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if getattr(app.state, "client", None) is not None:
        await app.state.client.close()
    logger.info("Application shutdown complete")


def _error_response(status_code: int, code: str, exc: DexfactsError) -> JSONResponse:
    body = APIError(error=ErrorDetail(code=code, message=exc.message, details=exc.details or None))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def _handle_validation(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, "invalid_input", exc)


async def _handle_unknown_mint(request: Request, exc: UnknownMintError) -> JSONResponse:
    return _error_response(404, "unknown_mint", exc)


async def _handle_upstream(
    request: Request, exc: UpstreamUnavailableError | UpstreamFetchError
) -> JSONResponse:
    return _error_response(502, "upstream_unavailable", exc)


def create_app(
    settings: DexfactsSettings | None = None,
    *,
    title: str = "Dexfacts API",
    description: str = "Pool and token fact resolution API",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (environment settings if omitted)
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings or get_settings()

    # Configure CORS
    if cors_origins is None:
        cors_origins = ["http://localhost:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _handle_validation)
    app.add_exception_handler(UnknownMintError, _handle_unknown_mint)
    app.add_exception_handler(UpstreamUnavailableError, _handle_upstream)
    app.add_exception_handler(UpstreamFetchError, _handle_upstream)

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(tokens_router, prefix="/api/v1")
    app.include_router(chain_router, prefix="/api/v1")

    return app
