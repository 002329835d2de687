# app/config.py
import logging
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_PORT = 9000
DEFAULT_SCRAPE_URL = "https://www.basketball-reference.com/leagues/NBA_2025_per_game.html"


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./nba_players.db"
    host: str = "0.0.0.0"
    backend_port: int = DEFAULT_BACKEND_PORT
    cors_enabled: bool = True
    log_level: str = "INFO"
    access_log: bool = True
    sql_echo: bool = False
    seed_on_startup: bool = True

    # Scraper settings
    scrape_url: str = DEFAULT_SCRAPE_URL
    scrape_timeout: float = 30.0
    scrape_user_agent: str = "nba-player-api-scraper/0.1"

    @field_validator("backend_port", mode="before")
    @classmethod
    def fallback_port(cls, v: Any) -> int:
        """Bad port config is not fatal; fall back to the default port."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_BACKEND_PORT
        try:
            port = int(v)
        except (TypeError, ValueError):
            logger.warning(f"Invalid BACKEND_PORT {v!r}; using {DEFAULT_BACKEND_PORT}")
            return DEFAULT_BACKEND_PORT
        if not 0 < port < 65536:
            logger.warning(f"BACKEND_PORT {port} out of range; using {DEFAULT_BACKEND_PORT}")
            return DEFAULT_BACKEND_PORT
        return port

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
