"""
Fire Survey Backend: Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default; deployments override the paths
    and the generation service location.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path to database file>
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/fire.db",
        description="Async SQLAlchemy URL of the file-backed survey database",
    )

    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Database Export ───────────────────────────────────────────────────
    # Unset means "serve the database file itself".
    export_path: Optional[str] = Field(default=None)
    export_filename: Optional[str] = Field(default=None)
    export_media_type: str = Field(default="application/vnd.sqlite3")

    # ── Text Generation (Ollama) ──────────────────────────────────────────
    generation_url: str = Field(
        default="http://localhost:11434/api/generate",
        description="Endpoint that receives {model, prompt, stream} generation requests",
    )
    generation_model: str = Field(default="llama3")
    # Seconds; applies to connect, read, write and pool acquisition.
    generation_timeout: float = Field(default=120.0, gt=0, le=3600)

    @field_validator("generation_url")
    @classmethod
    def validate_generation_url(cls, v: str) -> str:
        """Only plain HTTP(S) endpoints can be proxied to."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid generation_url '{v}'. Must start with http:// or https://")
        return v

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin.
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def database_file(self) -> Optional[Path]:
        """
        Filesystem path of the SQLite database, or None for in-memory URLs.

        Relative paths are resolved against the current working directory,
        the same way the SQLite driver resolves them.
        """
        database = make_url(self.database_url).database
        if not database or database == ":memory:":
            return None
        return Path(database).resolve()

    @property
    def export_file(self) -> Optional[Path]:
        """File served by GET /downloadAccess."""
        if self.export_path:
            return Path(self.export_path).resolve()
        return self.database_file


# Singleton instance: imported throughout the application
settings = Settings()
