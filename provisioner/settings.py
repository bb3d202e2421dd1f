"""Runtime configuration for the provisioner."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from provisioner.domain.constants import (
    ADDITIONAL_LIB_CONFIG,
    ADDITIONAL_LIB_FOLDER,
    CONF_FOLDER,
    CONNECT_TIMEOUT,
    REPO1,
    TEMP_DIR,
)


def _default_m2_home() -> Path:
    return Path.home() / ".m2" / "repository"


class Settings(BaseSettings):
    """Configuration values mapped from ``PROVISIONER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROVISIONER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Process layout
    base_dir: Path = Field(default_factory=Path.cwd)
    cache_folder: str = TEMP_DIR
    extraction_folder: str = TEMP_DIR
    conf_folder: str = CONF_FOLDER
    config_file_name: str = ADDITIONAL_LIB_CONFIG
    additional_lib_folder: str = ADDITIONAL_LIB_FOLDER

    # Repositories
    m2_home: Path = Field(default_factory=_default_m2_home)
    default_repository_url: str = REPO1

    # Network; "DIRECT" in the proxy list means no proxy
    proxies: List[str] = Field(default_factory=list)
    connect_timeout: float = CONNECT_TIMEOUT

    max_resolution_depth: int = 3
    log_level: str = "INFO"

    @property
    def cache_root(self) -> Path:
        return self.base_dir / self.cache_folder

    @property
    def extraction_root(self) -> Path:
        return self.base_dir / self.extraction_folder

    @property
    def config_file(self) -> Path:
        return self.base_dir / self.conf_folder / self.config_file_name

    @property
    def additional_lib_dir(self) -> Path:
        return self.base_dir / self.additional_lib_folder


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
