"""Technician model: a phone number whitelisted for the chatbot."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from ulid import ULID

from whitelist_api.models.base import Base

PHONE_CONSTRAINT = "tecnicos_telefone_key"


class Technician(Base):
    __tablename__ = "tecnicos"
    __table_args__ = (UniqueConstraint("telefone", name=PHONE_CONSTRAINT),)

    # Assigned on insert, never rewritten by updates
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=lambda: str(ULID()))
    nome: Mapped[str] = mapped_column(String(200))
    telefone: Mapped[str] = mapped_column(String(50))
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)
    data_criacao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
    )
