"""
Webforge Configuration

Environment-based configuration for the project builder backend.
"""
from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./webforge.db"

    # Debug mode (verbose low-level logging)
    debug: bool = False

    # Follow-through mode (structured step-by-step execution tracing)
    follow_through: bool = False

    # Anonymous sessions expire this many hours after creation
    session_ttl_hours: int = 24

    # Live preview URLs are <preview_base_url>/<project id>
    preview_base_url: str = "https://preview.dev"

    # Assistant model used when a chat request names none
    default_chat_model: Literal["gpt-4", "claude-3", "gemini-pro", "custom"] = "gpt-4"

    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("preview_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Preview URLs are joined with a single slash."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("session_ttl_hours")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        """Ensure sessions live for a positive amount of time."""
        if v <= 0:
            raise ValueError("SESSION_TTL_HOURS must be a positive number of hours")
        return v


# Global settings instance
settings = Settings()
