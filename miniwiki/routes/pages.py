#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pages router
============
GET /api/v1/pages            — list page titles
GET /api/v1/pages/{title}    — raw content plus rendered fragment
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends, Query

from miniwiki.core.config import get_settings
from miniwiki.schemas import PageResponse, PageSummary
from miniwiki.services import pages as page_svc
from miniwiki.services.pages import PageStore, get_page_store
from miniwiki.services.renderer import render


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/pages", tags=["pages"])


# ── List ─────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[PageSummary])
async def list_pages(store: PageStore = Depends(get_page_store)):
    prefix = get_settings().page_route_prefix
    return [
        PageSummary(title=t, url=f"{prefix}/{quote(t)}")
        for t in await store.titles()
    ]


# ── Read ──────────────────────────────────────────────────────────────────────

@router.get("/{title}", response_model=PageResponse)
async def get_page(
    title: str,
    render_html: bool = Query(True, alias="render"),
    store: PageStore  = Depends(get_page_store),
):
    settings = get_settings()
    content = await page_svc.get_page(store, title, fallback=settings.fallback_page)

    html = None
    if render_html:
        html = render(
            content,
            settings.render_engine,
            link_prefix=settings.page_route_prefix,
            escape=settings.escape_html,
        )
    return PageResponse(title=title, content=content, html=html)


# -----------------------------------------------------------------------------
