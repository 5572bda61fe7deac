"""Centralized configuration via pydantic-settings. Credentials from .env or the environment."""

from __future__ import annotations

import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = Path(__file__).resolve().parent

# Resolves a credential name (e.g. "ALCHEMY_API_KEY") to its value, or None when unset
CredentialLookup = Callable[[str], str | None]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # "production" disables the local developer chains
    node_env: str = "development"
    log_level: str = "INFO"

    # Data paths
    catalog_path: Path = Field(default_factory=lambda: PROJECT_ROOT / "data" / "chains.json")
    extensions_path: Path = Field(default_factory=lambda: PACKAGE_DIR / "data" / "extensions.json")

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"

    def credential_lookup(self) -> CredentialLookup:
        """Lookup over the .env file overlaid by the process environment."""
        env_file = self.model_config.get("env_file")
        values: dict[str, str | None] = {}
        if env_file and Path(env_file).exists():
            values.update(dotenv_values(env_file))
        values.update(os.environ)
        return mapping_lookup(values)


def mapping_lookup(values: dict[str, str | None]) -> CredentialLookup:
    """Wrap a plain mapping as a credential lookup. Empty values count as unset."""

    def lookup(name: str) -> str | None:
        return values.get(name) or None

    return lookup


@lru_cache
def get_settings() -> Settings:
    return Settings()
