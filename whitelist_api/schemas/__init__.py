"""Pydantic request/response schemas."""

from whitelist_api.schemas.technician import TechnicianPayload, TechnicianRead, TechnicianSummary
from whitelist_api.schemas.auth import LoginRequest, Role

__all__ = [
    "TechnicianPayload", "TechnicianRead", "TechnicianSummary",
    "LoginRequest", "Role",
]
