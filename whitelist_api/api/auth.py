"""Auth API: login, logout and current user, delegated to the credential store."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from whitelist_api.dependencies import bearer_token, get_credential_store, require_user
from whitelist_api.errors import AuthenticationFailed, InternalError, ValidationFailed
from whitelist_api.schemas import LoginRequest
from whitelist_api.services.credentials import (
    CredentialStore, CredentialStoreError, InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest | None = None,
    store: CredentialStore = Depends(get_credential_store),
):
    if not body or not body.email or not body.password:
        raise ValidationFailed("Email e senha são obrigatórios")

    try:
        data = await store.sign_in(body.email, body.password)
    except InvalidCredentialsError:
        logger.info("Login rejected for %s", body.email)
        raise AuthenticationFailed("Credenciais inválidas")
    except CredentialStoreError:
        logger.exception("Login failed for %s", body.email)
        raise InternalError("Erro interno do servidor")

    return {
        "user": data["user"],
        "session": data["session"],
        "message": "Login realizado com sucesso",
    }


@router.post("/logout")
async def logout(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
):
    try:
        await store.sign_out(bearer_token(request))
    except CredentialStoreError:
        logger.exception("Logout failed")
        raise InternalError("Erro ao fazer logout")
    return {"message": "Logout realizado com sucesso"}


@router.get("/me")
async def me(user: dict = Depends(require_user)):
    return {"user": user}
