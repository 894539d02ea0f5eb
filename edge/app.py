"""FastAPI application factory for the Llumos edge functions."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from edge.auth.dependencies import INTERNAL_SECRET_HEADER, init_auth
from edge.config import EdgeConfig
from edge.responses import json_error
from edge.routers import catalog, cms, health, local_authority, onboarding
from llumos import __version__
from llumos.backends.base import AuthProvider, Backend
from llumos.backends.jwt_auth import JwtAuthProvider
from llumos.observability.redaction import configure_logging

logger = logging.getLogger(__name__)


def _wire(config: EdgeConfig, backend: Backend, auth: AuthProvider | None) -> None:
    """Inject the backend and auth provider into each router."""
    if auth is None:
        if config.supabase_jwt_secret:
            auth = JwtAuthProvider(config.supabase_jwt_secret)
        elif isinstance(backend, AuthProvider):
            auth = backend
        else:
            raise ValueError(
                "No auth provider: set supabase_jwt_secret or use a backend "
                "that verifies tokens"
            )
    init_auth(auth, config.internal_secret)
    local_authority.init_router(backend)
    onboarding.init_router(backend)


def create_app(
    config: EdgeConfig | None = None,
    backend: Backend | None = None,
    auth: AuthProvider | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    When *backend* is None a Supabase backend is connected on startup from
    *config* (or env defaults) and injected into each router via its
    ``init_router()`` function.
    """
    if config is None:
        config = EdgeConfig.from_env()

    configure_logging(config.log_level)
    cms.init_router(config.cms_encryption_key)

    lifespan = None
    if backend is None:

        @asynccontextmanager
        async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
            from llumos.backends.supabase_backend import SupabaseBackend

            supabase = await SupabaseBackend.connect(
                config.supabase_url, config.supabase_service_role_key,
            )
            _wire(config, supabase, auth)
            logger.info("Connected to Supabase at %s", config.supabase_url)
            yield

    else:
        _wire(config, backend, auth)

    app = FastAPI(
        title="Llumos Edge Functions",
        version=__version__,
        docs_url="/docs" if config.dev_mode else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=[
            "authorization", "x-client-info", "apikey", "content-type",
            INTERNAL_SECRET_HEADER,
        ],
    )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return json_error(str(exc.detail), exc.status_code)

    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(cms.router)
    app.include_router(local_authority.router)
    app.include_router(onboarding.router)

    return app
