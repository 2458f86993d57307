#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Page service
============
Content lookup for the page view, keyed by page title.

Stores:
  MemoryPageStore     dict-backed, seeded with the welcome page
  DirectoryPageStore  one UTF-8 file per page: <pages_dir>/<title>.wiki

The view depends on ``get_page_store()`` so tests (or another deployment)
can swap the store through FastAPI's dependency overrides.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol

import aiofiles
from fastapi import HTTPException, status

from miniwiki.core.config import get_settings

log = logging.getLogger(__name__)


WELCOME_TITLE = "Main Page"
WELCOME_CONTENT = (
    "= Welcome to the Wiki =\n"
    "This is a simple page about ''Golang''. Visit the '''Golang Page''' "
    "by clicking [[Golang]]. \n"
    "To learn more, visit [https://golang.org]."
)


# -----------------------------------------------------------------------------
# Stores
# -----------------------------------------------------------------------------

class PageStore(Protocol):
    async def get(self, title: str) -> Optional[str]: ...

    async def titles(self) -> list[str]: ...


class MemoryPageStore:

    def __init__(self, pages: Optional[dict[str, str]] = None) -> None:
        self._pages = dict(pages) if pages is not None else {WELCOME_TITLE: WELCOME_CONTENT}

    async def get(self, title: str) -> Optional[str]:
        return self._pages.get(title)

    async def titles(self) -> list[str]:
        return sorted(self._pages, key=str.lower)

    def put(self, title: str, content: str) -> None:
        self._pages[title] = content


class DirectoryPageStore:
    """Pages read from ``<root>/<title>.wiki``."""

    suffix = ".wiki"

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, title: str) -> Optional[Path]:
        """Return the file for *title*, or None for titles that could leave *root*."""
        if not title or title.startswith(".") or any(c in title for c in ("/", "\\", "\x00")):
            return None
        return self.root / f"{title}{self.suffix}"

    async def get(self, title: str) -> Optional[str]:
        path = self.path_for(title)
        if path is None or not path.is_file():
            return None
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()

    async def titles(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(
            (p.stem for p in self.root.glob(f"*{self.suffix}") if p.is_file()),
            key=str.lower,
        )


# -----------------------------------------------------------------------------
# Dependency + lookup
# -----------------------------------------------------------------------------

@lru_cache
def get_page_store() -> PageStore:
    settings = get_settings()
    if settings.pages_dir is not None:
        log.info("Serving pages from %s", settings.pages_dir)
        return DirectoryPageStore(settings.pages_dir)
    return MemoryPageStore()


async def get_page(store: PageStore, title: str, fallback: Optional[str] = None) -> str:
    """Return the markup for *title*.

    When *title* is unknown and *fallback* names a page, that page's content is
    returned instead; otherwise a 404 is raised.
    """
    content = await store.get(title)
    if content is not None:
        return content

    if fallback and fallback != title:
        content = await store.get(fallback)
        if content is not None:
            log.info("Page %r not found, serving fallback %r", title, fallback)
            return content

    log.info("Page %r not found", title)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Page '{title}' not found")


# -----------------------------------------------------------------------------
