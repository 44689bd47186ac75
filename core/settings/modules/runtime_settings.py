from __future__ import annotations

from typing import List

from pydantic import Field

from core.settings.base_settings import BackoBaseSettings


class RuntimeSettings(BackoBaseSettings):
    """
    Process-level settings.
    Loaded from .env file with exact variable name matching.
    """

    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_allow_origins: str = Field("*", alias="CORS_ALLOW_ORIGINS")  # comma-separated

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]
