"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of local_places/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./local_places.db"
    gemini_api_key: str = ""  # GEMINI_API_KEY in .env
    ai_model: str = "gemini-2.5-flash"
    # Upper bound on model <-> tool round-trips within one chat turn
    max_tool_rounds: int = 10
    # In-memory chat sessions: idle expiry, capacity, prune job interval
    session_ttl_seconds: int = 3600
    session_max_count: int = 1000
    session_prune_interval_seconds: int = 300
    # Comma-separated; "*" allows any origin
    cors_origins: str = "*"
    auto_create_tables: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("gemini_api_key", "database_url", mode="after")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]


settings = Settings()
