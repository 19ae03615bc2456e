"""SQLAlchemy ORM models for the record store."""

from whitelist_api.models.base import Base
from whitelist_api.models.technician import Technician

__all__ = ["Base", "Technician"]
