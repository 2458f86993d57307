#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


RenderEngine = Literal["stages", "tree"]

MAX_CONTENT_CHARS = 1_000_000


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Render
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderRequest(BaseModel):
    content: str = Field(default="", max_length=MAX_CONTENT_CHARS)
    engine: Optional[RenderEngine] = None     # None → configured engine
    escape: Optional[bool] = None             # None → configured policy


# -----------------------------------------------------------------------------

class RenderResponse(BaseModel):
    html: str
    engine: RenderEngine


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PageSummary(BaseModel):
    title: str
    url: str


# -----------------------------------------------------------------------------

class PageResponse(BaseModel):
    title: str
    content: str
    html: Optional[str] = None
