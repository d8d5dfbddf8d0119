"""Configuration Management."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Editor core settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PAGECRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # History
    history_limit: int = Field(
        default=100, ge=0, description="Max undo steps kept (0 = unbounded)"
    )

    # Layout
    grid_size: int = Field(default=20, gt=0, description="Canvas grid size in px")
    base_width: float = Field(default=1920.0, gt=0, description="Design-time canvas width")

    # Acceleration
    native_module: str = Field(
        default="pagecraft_native", description="Import name of the native accelerator"
    )
    enable_native: bool = Field(default=True, description="Try the native accelerator first")
    breaker_fail_max: int = Field(default=5, gt=0, description="Native failures before opening breaker")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Breaker reset timeout (seconds)")

    # Documents
    max_document_size: int = Field(
        default=5 * 1024 * 1024, gt=0, description="Max import size in bytes"
    )
    max_document_depth: int = Field(default=64, gt=0, description="Max JSON nesting depth")
    library_dir: Path = Field(
        default=Path(".pagecraft/projects"), description="Project library directory"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
