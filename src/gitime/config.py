"""Configuration management for gitime."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# gitime config directory
GITIME_DIR = Path.home() / ".gitime"
GITIME_ENV_FILE = GITIME_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GITIME_",
        # Only the user-level file: a .env inside a scanned checkout must not
        # pick the git binary.
        env_file=str(GITIME_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Repository settings
    repo_path: Path = Field(
        default=Path("."),
        description="Directory inside the git repository to scan",
    )
    rev: str | None = Field(
        default=None,
        description="Revision or range to scan (e.g., main..feature). Defaults to the checked out branch",
    )
    git_executable: str = Field(
        default="git",
        description="Name or path of the git binary",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Log level when --verbose is not given (DEBUG, INFO, WARNING, ERROR)",
    )


# Global settings instance
settings = Settings()
