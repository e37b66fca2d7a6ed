"""
FastAPI application factory.

``create_app`` wires logging, the error handlers and the routers. Errors are
rendered as ``{"error": "<message>"}`` with the status of the raised
:class:`~umshado.exceptions.UmshadoError`.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_pagination import add_pagination

from umshado.config import get_settings
from umshado.db import DatabaseManager
from umshado.exceptions import UmshadoError
from umshado.infra.logging_config import LoggingConfig, get_logger
from umshado.routers import (
    invites_router,
    messages_router,
    notifications_router,
    quotes_router,
    system,
    vendors_router,
)

logger = get_logger("main")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"Invalid {field}: {first.get('msg')}" if field else first.get("msg")


def create_app(
    testing: bool = False, db_manager: Optional[DatabaseManager] = None
) -> FastAPI:
    """
    Build the application.

    The store client is created from settings at startup and disposed at
    shutdown unless ``db_manager`` is supplied, in which case the caller owns it.
    """
    settings = get_settings()
    LoggingConfig(level="DEBUG" if testing else settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        manager = db_manager or DatabaseManager.from_settings(settings)
        app.state.db_manager = manager
        try:
            yield
        finally:
            if db_manager is None:
                manager.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UmshadoError)
    async def umshado_error_handler(request: Request, exc: UmshadoError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400, content={"error": _validation_message(exc)}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Server error"})

    app.include_router(system.router)
    app.include_router(quotes_router.router)
    app.include_router(messages_router.router)
    app.include_router(notifications_router.router)
    app.include_router(vendors_router.router)
    app.include_router(invites_router.router)

    add_pagination(app)
    return app


app = create_app()
