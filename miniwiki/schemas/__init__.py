from miniwiki.schemas.schemas import (
    RenderRequest, RenderResponse,
    PageSummary, PageResponse,
    RenderEngine, MAX_CONTENT_CHARS,
)

__all__ = [
    "RenderRequest", "RenderResponse",
    "PageSummary", "PageResponse",
    "RenderEngine", "MAX_CONTENT_CHARS",
]
