#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for MiniWiki tests.
Uses an in-memory page store so no files or external services are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from miniwiki.core.config import get_settings
from miniwiki.main import create_app
from miniwiki.services.pages import (
    WELCOME_CONTENT, WELCOME_TITLE, MemoryPageStore, get_page_store,
)


# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings in the testing environment."""
    monkeypatch.setenv("ENVIRONMENT", "testing")
    get_settings.cache_clear()
    get_page_store.cache_clear()
    yield
    get_settings.cache_clear()
    get_page_store.cache_clear()


@pytest.fixture
def page_store():
    return MemoryPageStore({
        WELCOME_TITLE: WELCOME_CONTENT,
        "Golang": "== Go ==\nA language with '''goroutines''' and ''channels''.",
        "Unsafe": "<script>alert(1)</script> ''hi''",
    })


@pytest.fixture
def make_client(monkeypatch, page_store):
    """Factory: ``async with make_client(PAGE_ROUTE_PREFIX="/wiki") as client``.

    Keyword arguments are set as environment variables before the app is
    built, so settings read at app creation (route prefixes) pick them up.
    """
    @asynccontextmanager
    async def _make(**env: str):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()

        app = create_app()
        app.dependency_overrides[get_page_store] = lambda: page_store

        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac

    return _make


@pytest_asyncio.fixture(scope="function")
async def client(make_client):
    """HTTP test client wired to the in-memory page store."""
    async with make_client() as ac:
        yield ac


# -----------------------------------------------------------------------------
