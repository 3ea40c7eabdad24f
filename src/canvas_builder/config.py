"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    max_sessions: int | None = 1000
    session_ttl_seconds: int | None = None
    image_fetch_timeout_seconds: float = 10.0
    render_previews: bool = True
    pdf_compress: bool = True
    pdf_invariant: bool = False
    debug_endpoint_enabled: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("max_sessions", "session_ttl_seconds", mode="before")
    @classmethod
    def _parse_limit(cls, value: object) -> object:
        return parse_optional_limit(value)


def parse_optional_limit(raw: object) -> object:
    """Treat empty, zero and "none" limits from env as unbounded."""
    if raw is None:
        return None
    if isinstance(raw, str):
        cleaned = raw.strip().lower()
        if cleaned in {"", "0", "none", "unlimited"}:
            return None
        return cleaned
    if isinstance(raw, int) and raw <= 0:
        return None
    return raw
