"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import os

import yaml
from dotenv import dotenv_values
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml(path: Path = _CONFIG_PATH) -> dict:
    if path.exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}
    return {}


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/tecnicos.db"
    database_ssl: bool = False
    supabase_url: str = ""
    supabase_anon_key: str = ""
    store_timeout_seconds: float = 10.0
    api_prefix: str = "/api"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    # 205 is what the chatbot integration expects for a denied number
    not_authorized_status: int = 205
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def _externally_set() -> set[str]:
    """Lower-cased setting names provided by the environment or the .env file."""
    keys = {k.lower() for k in os.environ}
    env_file = Settings.model_config.get("env_file")
    if env_file and Path(env_file).exists():
        keys |= {k.lower() for k in dotenv_values(env_file)}
    return keys


def get_settings(path: Path = _CONFIG_PATH) -> Settings:
    """Build Settings by merging YAML defaults with env overrides.

    Environment variables and .env win over YAML: pydantic-settings gives init
    kwargs priority, so YAML keys that are also set externally are dropped.
    """
    y = _load_yaml(path)
    external = _externally_set()
    overrides = {
        k: v for k, v in y.items()
        if k in Settings.model_fields and k.lower() not in external
    }
    return Settings(**overrides)
