"""Static roles list plus liveness and configuration checks."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from whitelist_api.config import Settings
from whitelist_api.dependencies import get_settings_dep
from whitelist_api.schemas import Role

router = APIRouter(tags=["meta"])

# Informational only; nothing enforces these roles
ROLES = [
    Role(nome="admin", descricao="Administrador do sistema - acesso total"),
    Role(nome="tecnico", descricao="Técnico autorizado - acesso ao chatbot"),
    Role(nome="supervisor", descricao="Supervisor de técnicos - pode gerenciar técnicos"),
]


@router.get("/roles")
async def list_roles():
    return [r.model_dump() for r in ROLES]


@router.get("/test")
async def liveness(request: Request):
    return {
        "message": "API funcionando!",
        "method": request.method,
        "url": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


debug_router = APIRouter(tags=["meta"])


@debug_router.get("/env-test")
async def env_test(settings: Settings = Depends(get_settings_dep)):
    """Report which credential-store settings are present without echoing them."""
    return {
        "message": "Teste de variáveis de ambiente",
        "hasSupabaseUrl": bool(settings.supabase_url),
        "hasSupabaseKey": bool(settings.supabase_anon_key),
        "supabaseUrlLength": len(settings.supabase_url),
        "supabaseKeyLength": len(settings.supabase_anon_key),
        "environment": settings.environment,
    }
