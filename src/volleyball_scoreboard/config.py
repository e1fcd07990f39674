"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    operator_token: str
    vmix_host: str = "localhost"
    vmix_port: int = 8088
    vmix_timeout_seconds: float = 5.0
    overlay_enabled: bool = True
    overlay_disabled_inputs: str | None = None
    log_level: str = "INFO"
    logo_base_url: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_disabled_inputs(raw: str | None) -> set[str]:
    """Parse a comma-separated list of overlay input keys to skip."""
    if raw is None:
        return set()
    return {chunk.strip() for chunk in raw.split(",") if chunk.strip()}
