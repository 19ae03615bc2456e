"""Public chatbot check: may this phone number use the chatbot?"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from whitelist_api.config import Settings
from whitelist_api.dependencies import get_db, get_settings_dep
from whitelist_api.errors import STORE_ERRORS
from whitelist_api.services.verification import FAILURE_MESSAGE, check_technician

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verificacao"])


@router.get("/verificar-tecnico/{telefone}")
async def verificar_tecnico(
    telefone: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    try:
        result = await check_technician(db, telefone)
    except STORE_ERRORS:
        logger.exception("Technician check failed")
        return JSONResponse(status_code=500, content={
            "error": "Erro interno do servidor",
            "message": FAILURE_MESSAGE,
            "status": 500,
        })

    if result.authorized:
        return JSONResponse(status_code=200, content={
            "autorizado": True,
            "tecnico": result.technician.model_dump(),
            "message": result.message,
            "status": 200,
        })

    status = settings.not_authorized_status
    return JSONResponse(status_code=status, content={
        "autorizado": False,
        "message": result.message,
        "status": status,
    })
