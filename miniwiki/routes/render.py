#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render endpoint — live preview.

GET  /api/v1/render?content=...&engine=stages
POST /api/v1/render   {"content": "...", "engine": "tree", "escape": true}
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from miniwiki.core.config import get_settings
from miniwiki.schemas import MAX_CONTENT_CHARS, RenderEngine, RenderRequest, RenderResponse
from miniwiki.services.renderer import render


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/render", tags=["render"])


# -----------------------------------------------------------------------------

def _render(content: str, engine: Optional[str], escape: Optional[bool]) -> RenderResponse:
    settings = get_settings()
    engine = engine or settings.render_engine
    html = render(
        content,
        engine,
        link_prefix=settings.page_route_prefix,
        escape=settings.escape_html if escape is None else escape,
    )
    return RenderResponse(html=html, engine=engine)


@router.get("", response_model=RenderResponse)
async def render_preview(
    content: str                    = Query(default="", max_length=MAX_CONTENT_CHARS),
    engine:  Optional[RenderEngine] = Query(default=None),
    escape:  Optional[bool]         = Query(default=None),
):
    """Return the HTML fragment for a snippet of wiki markup."""
    return _render(content, engine, escape)


@router.post("", response_model=RenderResponse)
async def render_body(data: RenderRequest):
    """Same as the GET form, for content too large for a query string."""
    return _render(data.content, data.engine, data.escape)


# -----------------------------------------------------------------------------
