#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markup renderer
===============
Renders wiki page content to an HTML fragment.

The default engine is an ordered rewrite pipeline.  Each stage is a pure
text-to-text transform, and the output of one stage is the verbatim input of
the next:

  1. headings        = H1 =  /  == H2 ==  / ... / ====== H6 ======
  2. bold            '''bold'''
  3. italic          ''italic''
  4. internal links  [[Page Name]]           → <a href="/page/Page Name">
  5. external links  [https://example.com]   → <a href="https://example.com">

Bold must run before italic: ''' contains '' so an italic pass that ran
first would eat two of the three quotes and leave a stray one behind.

Captured text is emitted as-is unless escaping is requested, in which case
``& < >`` in the source and ``"`` inside href attributes are escaped.

The alternative ``tree`` engine lives in ``miniwiki.services.wikiparser``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable

log = logging.getLogger(__name__)


DEFAULT_LINK_PREFIX = "/page"
ENGINES = ("stages", "tree")

# Stage names, in pipeline order
HEADINGS       = "headings"
BOLD           = "bold"
ITALIC         = "italic"
INTERNAL_LINKS = "internal_links"
EXTERNAL_LINKS = "external_links"


# -----------------------------------------------------------------------------
# Recognition patterns
# -----------------------------------------------------------------------------

# Same marker count on both sides; (?!=) / (?<!=) stop a longer run from
# being split into a shorter marker plus interior text.
HEADING_RE        = re.compile(r"^(={1,6})(?!=)(.*?)(?<!=)\1$", re.MULTILINE)
BOLD_RE           = re.compile(r"'''(.*?)'''")
ITALIC_RE         = re.compile(r"''(.*?)''")

# The second branch swallows an opener whose run never reaches its closing
# bracket.  Every opener inside that run would stop at the same character,
# so scanning resumes after it instead of retrying from the next position.
# Such matches leave group 1 unset and are kept as literal text.
INTERNAL_LINK_RE  = re.compile(r"\[\[([^\]]+)\]\]|\[\[[^\]]*")
EXTERNAL_LINK_RE  = re.compile(r"\[(https?://[^\s\]]+)\]|\[https?://[^\s\]]*")


# -----------------------------------------------------------------------------
# HTML production helpers (shared with the tree engine)
# -----------------------------------------------------------------------------

def attr_value(value: str, escape: bool = False) -> str:
    """Return *value* ready for a double-quoted attribute."""
    return value.replace('"', "&quot;") if escape else value


def heading_tag(level: int, inner: str) -> str:
    return f"<h{level}>{inner}</h{level}>"


def internal_anchor(prefix: str, page: str, escape: bool = False) -> str:
    """Anchor for an internal page.  *page* is placed in the href verbatim."""
    return f'<a href="{prefix}/{attr_value(page, escape)}">{page}</a>'


def external_anchor(url: str, escape: bool = False) -> str:
    return f'<a href="{attr_value(url, escape)}">{url}</a>'


# -----------------------------------------------------------------------------
# Rules and stages
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RewriteRule:
    """A recognition pattern plus the function producing HTML for a match.

    A match whose first group did not take part is passed through unchanged
    and not counted.
    """

    pattern: re.Pattern
    produce: Callable[[re.Match], str]

    def run(self, text: str) -> tuple[str, int]:
        count = 0

        def replace(m: re.Match) -> str:
            nonlocal count
            if m.group(1) is None:
                return m.group(0)
            count += 1
            return self.produce(m)

        return self.pattern.sub(replace, text), count


@dataclass(frozen=True)
class Stage:
    """Ordered application of one or more rules over a whole text.

    Matching is left-to-right and non-overlapping: once a span is consumed
    scanning resumes after it.
    """

    name: str
    rules: tuple[RewriteRule, ...]

    def run(self, text: str) -> tuple[str, int]:
        total = 0
        for rule in self.rules:
            text, count = rule.run(text)
            total += count
        return text, total

    def apply(self, text: str) -> str:
        return self.run(text)[0]


Pipeline = tuple[Stage, ...]


def _heading(m: re.Match) -> str:
    return heading_tag(len(m.group(1)), m.group(2).strip())


HEADING_STAGE = Stage(HEADINGS, (RewriteRule(HEADING_RE, _heading),))
BOLD_STAGE    = Stage(BOLD,     (RewriteRule(BOLD_RE,   lambda m: f"<b>{m.group(1)}</b>"),))
ITALIC_STAGE  = Stage(ITALIC,   (RewriteRule(ITALIC_RE, lambda m: f"<i>{m.group(1)}</i>"),))


def internal_link_stage(prefix: str = DEFAULT_LINK_PREFIX, escape: bool = False) -> Stage:
    prefix = prefix.rstrip("/")
    return Stage(INTERNAL_LINKS, (
        RewriteRule(INTERNAL_LINK_RE, lambda m: internal_anchor(prefix, m.group(1), escape)),
    ))


def external_link_stage(escape: bool = False) -> Stage:
    return Stage(EXTERNAL_LINKS, (
        RewriteRule(EXTERNAL_LINK_RE, lambda m: external_anchor(m.group(1), escape)),
    ))


# -----------------------------------------------------------------------------
# Pipeline assembly
# -----------------------------------------------------------------------------

def compose(*stages: Stage) -> Pipeline:
    """Build a pipeline from *stages*, refusing italic ahead of bold."""
    names = [s.name for s in stages]
    if BOLD in names and ITALIC in names and names.index(ITALIC) < names.index(BOLD):
        raise ValueError("the bold stage must run before the italic stage")
    return tuple(stages)


@lru_cache
def build_pipeline(link_prefix: str = DEFAULT_LINK_PREFIX, escape: bool = False) -> Pipeline:
    """Return the five-stage pipeline for *link_prefix*; built once per argument set."""
    return compose(
        HEADING_STAGE,
        BOLD_STAGE,
        ITALIC_STAGE,
        internal_link_stage(link_prefix, escape),
        external_link_stage(escape),
    )


def apply_pipeline(pipeline: Pipeline, text: str) -> str:
    for stage in pipeline:
        text = stage.apply(text)
    return text


def trace_pipeline(pipeline: Pipeline, text: str) -> list[tuple[str, int]]:
    """Run *pipeline* over *text* and return (stage name, match count) per stage."""
    counts: list[tuple[str, int]] = []
    for stage in pipeline:
        text, count = stage.run(text)
        counts.append((stage.name, count))
    return counts


# -----------------------------------------------------------------------------
# Single-stage helpers
# -----------------------------------------------------------------------------

def render_headings(text: str) -> str:
    return HEADING_STAGE.apply(text)


def render_bold(text: str) -> str:
    return BOLD_STAGE.apply(text)


def render_italic(text: str) -> str:
    return ITALIC_STAGE.apply(text)


def render_internal_links(text: str, prefix: str = DEFAULT_LINK_PREFIX) -> str:
    return internal_link_stage(prefix).apply(text)


def render_external_links(text: str) -> str:
    return external_link_stage().apply(text)


# -----------------------------------------------------------------------------
# Public render function
# -----------------------------------------------------------------------------

def render(
    content: str,
    engine: str = "stages",
    link_prefix: str = DEFAULT_LINK_PREFIX,
    escape: bool = False,
) -> str:
    """
    Render *content* to an HTML fragment.

    Parameters
    ----------
    content     : raw wiki markup
    engine      : "stages" (ordered rewrite pipeline) or "tree" (lexer/parser)
    link_prefix : route prefix for [[internal links]]
    escape      : escape ``& < >`` in the source and ``"`` in href values
    """
    if engine == "stages":
        text = _html.escape(content, quote=False) if escape else content
        html = apply_pipeline(build_pipeline(link_prefix, escape), text)
    elif engine == "tree":
        from miniwiki.services.wikiparser import parse, render_tree
        html = render_tree(parse(content), link_prefix=link_prefix, escape=escape)
    else:
        raise ValueError(f"Unknown render engine {engine!r}; expected one of {ENGINES}")

    log.debug("Rendered %d chars → %d chars (engine=%s)", len(content), len(html), engine)
    return html


# -----------------------------------------------------------------------------
