from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel


class TechnicianPayload(BaseModel):
    nome: str = ""
    telefone: str = ""
    ativo: bool | None = None  # update only; absent means active


class TechnicianRead(BaseModel):
    id: str
    nome: str
    telefone: str
    ativo: bool
    data_criacao: datetime

    model_config = {"from_attributes": True}


class TechnicianSummary(BaseModel):
    nome: str
    telefone: str

    model_config = {"from_attributes": True}
