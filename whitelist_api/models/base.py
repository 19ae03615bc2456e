"""Declarative base shared by the record-store models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
