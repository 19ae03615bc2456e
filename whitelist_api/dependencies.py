"""FastAPI dependency providers: record-store sessions, credential store, bearer guard."""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from whitelist_api.config import Settings
from whitelist_api.errors import InvalidToken, MissingToken
from whitelist_api.services.credentials import CredentialStore, CredentialStoreError

logger = logging.getLogger(__name__)


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncSession:
    """Yield an async session from the factory the app was built with."""
    factory = request.app.state.session_factory
    async with factory() as session:
        yield session


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def bearer_token(request: Request) -> str | None:
    """Token part of ``Authorization: Bearer <token>``, or None."""
    header = request.headers.get("Authorization")
    if not header:
        return None
    parts = header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        return None
    return parts[1].strip()


async def require_user(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
) -> dict:
    """Guard for protected routes. 401 when no token is sent, 403 when it is rejected."""
    token = bearer_token(request)
    if not token:
        raise MissingToken("Token de acesso requerido")

    try:
        user = await store.get_user(token)
    except CredentialStoreError as e:
        logger.warning("Token lookup failed: %s", e)
        raise InvalidToken("Token inválido")

    if not user:
        logger.warning("Rejected bearer token on %s %s", request.method, request.url.path)
        raise InvalidToken("Token inválido")
    return user
