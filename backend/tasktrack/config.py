"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - tasks_path is always data_directory / tasks_file

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box for local runs
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    data_directory: Path = Path("./data")
    tasks_file: str = "tasks.json"

    @field_validator("tasks_file")
    @classmethod
    def reject_nested_file(cls, v: str) -> str:
        """tasks_file is a bare file name; the directory comes from data_directory."""
        if not v or Path(v).name != v:
            raise ValueError("tasks_file must be a plain file name")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def tasks_path(self) -> Path:
        return self.data_directory / self.tasks_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
