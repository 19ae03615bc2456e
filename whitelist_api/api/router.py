"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from whitelist_api.api.auth import router as auth_router
from whitelist_api.api.meta import debug_router
from whitelist_api.api.meta import router as meta_router
from whitelist_api.api.technicians import router as technicians_router
from whitelist_api.api.verification import router as verification_router


def build_api_router(debug: bool = False) -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(verification_router)
    api_router.include_router(technicians_router)
    api_router.include_router(auth_router)
    api_router.include_router(meta_router)
    if debug:
        api_router.include_router(debug_router)
    return api_router
