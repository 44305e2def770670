from __future__ import annotations

import logging
import os
import time
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from publishelf_core import __version__
from publishelf_core.api.auth import router as auth_router
from publishelf_core.api.models import fail
from publishelf_core.api.system import router as system_router
from publishelf_core.config import Settings, load_settings
from publishelf_core.cookies import get_cookie_options

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        logger.info(f"Worker {os.getpid()} started server")
        try:
            yield
        finally:
            logger.info(f"Worker {os.getpid()} shutting down")

    app = FastAPI(title="Publishelf Core", version=__version__, lifespan=_lifespan)
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.cookie_options = get_cookie_options(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.network.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=fail("Request validation failed", {"errors": exc.errors()}).model_dump(
                mode="json"
            ),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(str(exc.detail)).model_dump(mode="json"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(exc.detail if isinstance(exc.detail, str) else "HTTP error").model_dump(
                mode="json"
            ),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        client = request.client.host if request.client else None
        logger.error(
            f"Unhandled error on {request.method} {request.url.path} from {client}: {exc}",
            exc_info=exc,
        )

        content = fail("Internal Server Error").model_dump(mode="json")
        # Stack traces are only exposed outside production.
        if not settings.is_production:
            content["stack"] = "".join(traceback.format_exception(exc))
        return JSONResponse(status_code=500, content=content)

    app.include_router(system_router)
    app.include_router(auth_router)

    return app
