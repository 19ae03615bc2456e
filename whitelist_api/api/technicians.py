"""Technician whitelist API. Reads are public; mutations need a bearer token."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from whitelist_api.db import crud
from whitelist_api.dependencies import get_db, require_user
from whitelist_api.errors import (
    STORE_ERRORS, Conflict, DuplicatePhoneError, InternalError, NotFound, ValidationFailed,
)
from whitelist_api.schemas import TechnicianPayload, TechnicianRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tecnicos", tags=["tecnicos"])

_REQUIRED = "Nome e telefone são obrigatórios"
_NOT_FOUND = "Técnico não encontrado"
_DUPLICATE = "Telefone já cadastrado"


def _required_fields(body: TechnicianPayload | None) -> tuple[str, str]:
    nome = (body.nome if body else "").strip()
    telefone = (body.telefone if body else "").strip()
    if not nome or not telefone:
        raise ValidationFailed(_REQUIRED)
    return nome, telefone


def _serialize(tech) -> dict:
    return TechnicianRead.model_validate(tech).model_dump(mode="json")


@router.get("")
async def list_technicians(db: AsyncSession = Depends(get_db)):
    try:
        techs = await crud.list_technicians(db)
    except STORE_ERRORS:
        logger.exception("Failed to list technicians")
        raise InternalError("Erro ao buscar técnicos")
    return [_serialize(t) for t in techs]


@router.get("/{tech_id}")
async def get_technician(tech_id: str, db: AsyncSession = Depends(get_db)):
    try:
        tech = await crud.get_technician(db, tech_id)
    except STORE_ERRORS:
        logger.exception("Failed to load technician %s", tech_id)
        raise InternalError("Erro ao buscar técnico")
    if not tech:
        raise NotFound(_NOT_FOUND)
    return _serialize(tech)


@router.post("", status_code=201)
async def create_technician(
    body: TechnicianPayload | None = None,
    user: dict = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    nome, telefone = _required_fields(body)

    try:
        tech = await crud.create_technician(db, nome=nome, telefone=telefone)
    except DuplicatePhoneError:
        raise Conflict(_DUPLICATE)
    except STORE_ERRORS:
        logger.exception("Failed to create technician")
        raise InternalError("Erro ao criar técnico")

    logger.info("Technician %s created by %s", tech.id, user.get("email", "?"))
    return {**_serialize(tech), "message": "Técnico criado com sucesso"}


@router.put("/{tech_id}")
async def update_technician(
    tech_id: str,
    body: TechnicianPayload | None = None,
    user: dict = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    nome, telefone = _required_fields(body)
    ativo = body.ativo if body.ativo is not None else True

    try:
        tech = await crud.get_technician(db, tech_id)
        if not tech:
            raise NotFound(_NOT_FOUND)
        await crud.update_technician(db, tech, nome=nome, telefone=telefone, ativo=ativo)
    except DuplicatePhoneError:
        raise Conflict(_DUPLICATE)
    except STORE_ERRORS:
        logger.exception("Failed to update technician %s", tech_id)
        raise InternalError("Erro ao atualizar técnico")

    logger.info("Technician %s updated by %s (ativo=%s)", tech_id, user.get("email", "?"), ativo)
    return {"message": "Técnico atualizado com sucesso"}


@router.delete("/{tech_id}")
async def delete_technician(
    tech_id: str,
    user: dict = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        deleted = await crud.delete_technician(db, tech_id)
    except STORE_ERRORS:
        logger.exception("Failed to delete technician %s", tech_id)
        raise InternalError("Erro ao deletar técnico")
    if not deleted:
        raise NotFound(_NOT_FOUND)

    logger.info("Technician %s deleted by %s", tech_id, user.get("email", "?"))
    return {"message": "Técnico deletado com sucesso"}
