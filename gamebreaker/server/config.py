# gamebreaker/server/config.py
"""Telemetry server configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings, overridable via environment variables."""

    HOST: str = "127.0.0.1"
    PORT: int = 8091
    # Game log served by /api/episodes; None disables the route.
    GAMELOG_PATH: Path | None = Path("results/gamelog.txt")
    EPISODES_LIMIT_MAX: int = 500

    model_config = SettingsConfigDict(env_prefix="GAMEBREAKER_", env_file=".env", extra="ignore")


settings = Settings()
