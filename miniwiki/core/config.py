#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from miniwiki._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "MiniWiki"
    app_version: str = _pkg_version
    debug: bool = False
    environment: Literal["development", "testing", "production"] = "development"
    log_level: str = "INFO"

    # ── Wiki ───────────────────────────────────────────────────────────────

    site_name: str = "MiniWiki"
    page_route_prefix: str = "/page"       # also the href prefix of [[links]]

    # ── Rendering ──────────────────────────────────────────────────────────

    render_engine: Literal["stages", "tree"] = "stages"
    escape_html: bool = False

    # ── Page store ─────────────────────────────────────────────────────────

    pages_dir: Optional[Path] = None       # None → in-memory store
    home_page: str = "Main Page"
    fallback_page: Optional[str] = None    # page served for unknown titles

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:8080",
    ]

    @field_validator("page_route_prefix")
    @classmethod
    def prefix_has_leading_slash(cls, v: str) -> str:
        v = "/" + v.strip("/")
        if v == "/":
            raise ValueError("page_route_prefix must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_upper(cls, v: str) -> str:
        return v.upper()

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
