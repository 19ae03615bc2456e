"""CRUD operations for technician records."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from whitelist_api.errors import DuplicatePhoneError
from whitelist_api.models import Technician
from whitelist_api.models.technician import PHONE_CONSTRAINT

_UNIQUE_VIOLATION = "23505"


def _is_phone_conflict(exc: IntegrityError) -> bool:
    """True when the integrity error comes from the telefone unique constraint."""
    orig = exc.orig
    text = str(orig)
    if PHONE_CONSTRAINT in text:
        return True
    if getattr(orig, "pgcode", None) == _UNIQUE_VIOLATION and "telefone" in text:
        return True
    # SQLite: "UNIQUE constraint failed: tecnicos.telefone"
    return "UNIQUE constraint failed" in text and "tecnicos.telefone" in text


async def list_technicians(db: AsyncSession) -> list[Technician]:
    result = await db.execute(
        select(Technician).order_by(Technician.data_criacao.desc())
    )
    return list(result.scalars().all())


async def get_technician(db: AsyncSession, tech_id: str) -> Technician | None:
    return await db.get(Technician, tech_id)


async def find_active_by_phone(db: AsyncSession, telefone: str) -> Technician | None:
    """First active technician registered under ``telefone``, if any."""
    result = await db.execute(
        select(Technician).where(
            Technician.telefone == telefone,
            Technician.ativo == True,
        )
    )
    return result.scalars().first()


async def create_technician(db: AsyncSession, nome: str, telefone: str) -> Technician:
    tech = Technician(nome=nome, telefone=telefone, ativo=True)
    db.add(tech)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if _is_phone_conflict(e):
            raise DuplicatePhoneError(telefone) from e
        raise
    await db.refresh(tech)
    return tech


async def update_technician(
    db: AsyncSession, tech: Technician, nome: str, telefone: str, ativo: bool = True,
) -> Technician:
    """Full replace of the mutable fields."""
    tech.nome = nome
    tech.telefone = telefone
    tech.ativo = ativo
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if _is_phone_conflict(e):
            raise DuplicatePhoneError(telefone) from e
        raise
    await db.refresh(tech)
    return tech


async def delete_technician(db: AsyncSession, tech_id: str) -> bool:
    """Physically remove a record. Returns False when nothing matched."""
    result = await db.execute(delete(Technician).where(Technician.id == tech_id))
    await db.commit()
    return result.rowcount > 0
