"""FastAPI application factory.

Run with ``uvicorn whitelist_api.main:create_app --factory`` or ``whitelist-api serve``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from whitelist_api.api.router import build_api_router
from whitelist_api.config import Settings, get_settings
from whitelist_api.db.engine import build_engine, build_session_factory, create_tables
from whitelist_api.errors import ApiError
from whitelist_api.services.credentials import CredentialStore, build_credential_store

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; script-src 'self' 'unsafe-inline' 'unsafe-eval'; "
    "style-src 'self' 'unsafe-inline'; img-src 'self' data: https:; font-src 'self' data:; "
    "connect-src 'self' https://*.supabase.co;"
)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-XSS-Protection", "1; mode=block")
        return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Renders any exception no route handled as a JSON 500."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"error": "Erro interno do servidor"})


async def _api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    error = "Rota não encontrada" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": error}, headers=exc.headers)


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"error": "Requisição inválida", "message": ", ".join(f for f in fields if f)},
    )


def create_app(
    settings: Settings | None = None,
    *,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    credential_store: CredentialStore | None = None,
) -> FastAPI:
    """Build the app. Collaborators not passed in are built from settings and owned by the app."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = None
    if session_factory is None:
        engine = build_engine(settings)
        session_factory = build_session_factory(engine)

    owns_store = credential_store is None
    if owns_store:
        credential_store = build_credential_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            await create_tables(engine)
        logger.info("Serving technician whitelist on %s", settings.api_prefix or "/")
        yield
        if owns_store:
            await credential_store.aclose()
        if engine is not None:
            await engine.dispose()
            logger.info("Database connections closed")

    app = FastAPI(
        title="Technician Whitelist API",
        description="Whitelist of technicians allowed to use the chatbot.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None if settings.environment == "production" else "/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.credential_store = credential_store

    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(build_api_router(debug=settings.debug), prefix=settings.api_prefix)
    return app
