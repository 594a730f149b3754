from pydantic import BaseModel
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


_ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(_ROOT_DIR / ".env")
load_dotenv()  # fallback to current working directory


def _normalize_env(value: Optional[str], default: str) -> str:
    if value is None:
        return default
    cleaned = value.strip().lower()
    return cleaned or default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _resolve_log_level() -> str:
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    # Nombres desconocidos vuelven a INFO
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    return "INFO"


class Settings(BaseModel):
    app_name: str = "Taskboard"
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./data.db")
    debug: bool = _env_bool("DEBUG", False)
    environment: str = _normalize_env(os.getenv("APP_ENV") or os.getenv("ENVIRONMENT"), "dev")
    log_level: str = _resolve_log_level()

    @property
    def is_production(self) -> bool:
        return self.environment in {"prod", "production"}


settings = Settings()
