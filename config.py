"""
Centralised settings loader.

Values come from the environment (or a local `.env` file) through
pydantic-settings.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / storage ───────────────────────────────────────────
    env_name: str = "local"
    database_url: str = "sqlite+aiosqlite:///./mealplan.db"
    log_level: str = "INFO"

    # ─── Gemini ─────────────────────────────────────────────────────
    # operator-supplied key; a key saved through /settings wins over it
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = Field(0.7, ge=0.0, le=2.0)

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
