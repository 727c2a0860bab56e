from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


DEFAULT_BASE_DIR = str(Path.home() / "Documents" / "Ideas - Kidpreneur")


class Settings(BaseSettings):
    """Configuration settings for the application."""

    log_level: Optional[str] = None
    log_file: Optional[str] = None
    logging_config: str = "config.yml"
    base_dir: str = DEFAULT_BASE_DIR
    host: str = "0.0.0.0"
    port: int = 8000
    max_body_bytes: int = 50 * 1024 * 1024
    strict_parts: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


config = Settings()

__all__ = ["Settings", "config", "DEFAULT_BASE_DIR"]
