#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Jinja2 UI views (server-rendered HTML pages)
============================================
GET  /                  — redirect to the home page
GET  /page/{title}      — view a page (prefix from settings.page_route_prefix)
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from miniwiki.core.config import get_settings
from miniwiki.services import pages as page_svc
from miniwiki.services.pages import PageStore, get_page_store
from miniwiki.services.renderer import render as render_markup


TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


# -----------------------------------------------------------------------------

@lru_cache
def get_templates() -> Jinja2Templates:
    """Document template collaborator — wraps a rendered fragment in a full page."""
    return Jinja2Templates(directory=str(TEMPLATE_DIR))


# -----------------------------------------------------------------------------

router = APIRouter(tags=["ui"])
home_router = APIRouter(tags=["ui"])


# -----------------------------------------------------------------------------

@home_router.get("/", include_in_schema=False)
async def home():
    settings = get_settings()
    return RedirectResponse(f"{settings.page_route_prefix}/{quote(settings.home_page)}", status_code=302)


@router.get("/{title}", response_class=HTMLResponse)
async def view_page(
    request: Request,
    title: str,
    store: PageStore            = Depends(get_page_store),
    templates: Jinja2Templates  = Depends(get_templates),
):
    settings = get_settings()
    content = await page_svc.get_page(store, title, fallback=settings.fallback_page)
    html = render_markup(
        content,
        settings.render_engine,
        link_prefix=settings.page_route_prefix,
        escape=settings.escape_html,
    )
    return templates.TemplateResponse(
        request,
        "page.html",
        {"title": title, "content": html, "site_name": settings.site_name},
    )


# -----------------------------------------------------------------------------
