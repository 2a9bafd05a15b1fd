"""Centralised configuration handling for Ledgerlite."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import streamlit as st
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORAGE_KEY = "ledgerlite-transactions"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    storage_dir: Path = Path(".ledgerlite")
    storage_key: str = DEFAULT_STORAGE_KEY
    persist: bool = True
    page_size: int = 25
    amount_columns: tuple[str, ...] = ("amount",)
    date_columns: tuple[str, ...] = ("date",)
    filter_columns: tuple[str, ...] = ("type",)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="LEDGERLITE_", extra="ignore")

    @property
    def snapshot_path(self) -> Path | None:
        if not self.persist:
            return None
        return self.storage_dir / f"{self.storage_key}.json"


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("ledgerlite")
    if secrets_section:
        overrides = {
            "storage_dir": secrets_section.get("storage_dir"),
            "storage_key": secrets_section.get("storage_key"),
            "persist": secrets_section.get("persist"),
            "page_size": secrets_section.get("page_size"),
            "amount_columns": secrets_section.get("amount_columns"),
            "date_columns": secrets_section.get("date_columns"),
            "filter_columns": secrets_section.get("filter_columns"),
            "log_level": secrets_section.get("log_level"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
