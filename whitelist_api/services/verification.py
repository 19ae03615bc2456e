"""Chatbot authorization check: is this phone an active whitelisted technician?"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from whitelist_api.db import crud
from whitelist_api.schemas import TechnicianSummary

DENIED_MESSAGE = (
    "❌ Acesso negado! Seu número não está cadastrado ou está inativo no sistema. "
    "Entre em contato com o administrador."
)
FAILURE_MESSAGE = "⚠️ Erro temporário no sistema. Tente novamente em alguns instantes."


@dataclass
class VerificationResult:
    authorized: bool
    message: str
    technician: TechnicianSummary | None = None


async def check_technician(db: AsyncSession, telefone: str) -> VerificationResult:
    """Look up an active record for ``telefone``. Store errors propagate."""
    tech = await crud.find_active_by_phone(db, telefone)
    if tech is None:
        return VerificationResult(authorized=False, message=DENIED_MESSAGE)

    return VerificationResult(
        authorized=True,
        message=f"✅ Acesso liberado! Olá {tech.nome}, você está autorizado a usar o chatbot.",
        technician=TechnicianSummary.model_validate(tech),
    )
