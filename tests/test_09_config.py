#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for application settings."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from pydantic import ValidationError

from miniwiki import _version
from miniwiki.core.config import Settings, get_settings


def test_defaults():
    settings = get_settings()
    assert settings.is_testing
    assert settings.page_route_prefix == "/page"
    assert settings.render_engine == "stages"
    assert settings.escape_html is False
    assert settings.pages_dir is None
    assert settings.fallback_page is None


def test_settings_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize("raw, expected", [
    ("wiki", "/wiki"),
    ("/wiki/", "/wiki"),
    ("/a/b", "/a/b"),
])
def test_route_prefix_normalised(raw, expected):
    assert Settings(page_route_prefix=raw).page_route_prefix == expected


def test_route_prefix_must_not_be_root():
    with pytest.raises(ValidationError):
        Settings(page_route_prefix="/")


def test_log_level_upper_cased():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RENDER_ENGINE", "tree")
    monkeypatch.setenv("ESCAPE_HTML", "1")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.render_engine == "tree"
    assert settings.escape_html is True


def test_unknown_engine_rejected(monkeypatch):
    monkeypatch.setenv("RENDER_ENGINE", "regex")
    with pytest.raises(ValidationError):
        Settings()



# =============================================================================
# Version
# =============================================================================

def test_app_version_is_package_version():
    assert get_settings().app_version == _version.__version__
    assert _version.__version__ != "0.0.0"


def test_version_from_pyproject():
    assert _version._from_pyproject() == "0.1.0"


def test_version_without_pyproject(monkeypatch, tmp_path):
    monkeypatch.setattr(_version, "_PYPROJECT", tmp_path / "pyproject.toml")
    assert _version._from_pyproject() == "0.0.0"


# -----------------------------------------------------------------------------
