# ngsi2/core/config.py
"""
Central configuration for the NGSI v2 server.

Environment variables override defaults; a ``.env`` file is honoured.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    log_json: bool = Field(
        default=True,
        description="Emit JSON log records (plain text when false)",
    )

    api_prefix: str = Field(default="/v2", description="Mount point of the NGSI v2 API")

    # Config file paths (glob patterns)
    store_config_paths: list[str] = Field(
        default_factory=lambda: ["config/store.yaml"]
    )


settings = Settings()
