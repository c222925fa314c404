# mhsurvey/core/config.py
from __future__ import annotations

from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_DIR = Path(__file__).resolve().parents[2]  # raíz del repo
ENV_FILE = PROJECT_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # App
    APP_NAME: str = "Saúde Mental Corporativa API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # JWT
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # CORS (coma separada, vacío = todos)
    CORS_ORIGINS: str = ""

    # Latencia simulada de los servicios mock (ms)
    MOCK_DELAY_MS: int = 500
    MOCK_IMPORT_DELAY_MS: int = 1000
    REPORT_GENERATION_DELAY_MS: int = 2000

    # Paginación
    DEFAULT_PAGE_LIMIT: int = 10

    @property
    def cors_list(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


# Objeto listo para importar: from mhsurvey.core.config import settings
settings = get_settings()
