#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for pipeline assembly, end-to-end rendering and the escape policy."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor

import pytest

from miniwiki.services.pages import WELCOME_CONTENT
from miniwiki.services.renderer import (
    BOLD, BOLD_STAGE, EXTERNAL_LINKS, HEADING_STAGE, HEADINGS, INTERNAL_LINKS,
    ITALIC, ITALIC_STAGE,
    apply_pipeline, build_pipeline, compose, render, trace_pipeline,
)


WELCOME_HTML = (
    "<h1>Welcome to the Wiki</h1>\n"
    "This is a simple page about <i>Golang</i>. Visit the <b>Golang Page</b> "
    'by clicking <a href="/page/Golang">Golang</a>. \n'
    'To learn more, visit <a href="https://golang.org">https://golang.org</a>.'
)


# =============================================================================
# Assembly
# =============================================================================

def test_stage_order():
    names = [stage.name for stage in build_pipeline()]
    assert names == [HEADINGS, BOLD, ITALIC, INTERNAL_LINKS, EXTERNAL_LINKS]


def test_italic_before_bold_is_refused():
    with pytest.raises(ValueError):
        compose(HEADING_STAGE, ITALIC_STAGE, BOLD_STAGE)


def test_compose_accepts_bold_before_italic():
    pipeline = compose(BOLD_STAGE, ITALIC_STAGE)
    assert apply_pipeline(pipeline, "'''''x'''''") == "<b><i>x</b></i>"


def test_pipeline_built_once_per_arguments():
    assert build_pipeline() is build_pipeline()
    assert build_pipeline("/wiki") is not build_pipeline()


def test_rules_and_stages_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        BOLD_STAGE.name = "other"
    with pytest.raises(dataclasses.FrozenInstanceError):
        BOLD_STAGE.rules[0].pattern = None


# =============================================================================
# End to end
# =============================================================================

def test_welcome_page():
    assert render(WELCOME_CONTENT) == WELCOME_HTML


def test_welcome_page_fires_every_stage_once():
    counts = trace_pipeline(build_pipeline(), WELCOME_CONTENT)
    assert counts == [
        (HEADINGS, 1), (BOLD, 1), (ITALIC, 1), (INTERNAL_LINKS, 1), (EXTERNAL_LINKS, 1),
    ]


def test_emitted_tags_are_not_rewritten():
    assert render(WELCOME_HTML) == WELCOME_HTML
    counts = trace_pipeline(build_pipeline(), WELCOME_HTML)
    assert all(count == 0 for _, count in counts)


def test_empty_input():
    assert render("") == ""


def test_custom_link_prefix():
    assert render("[[Home]]", link_prefix="/wiki") == '<a href="/wiki/Home">Home</a>'


def test_unknown_engine():
    with pytest.raises(ValueError):
        render("x", engine="regex")


def test_concurrent_renders_are_independent():
    sources = [WELCOME_CONTENT, "'''a'''", "[[B]]", "== C =="] * 25
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(render, sources))
    assert results == [render(s) for s in sources]


# =============================================================================
# Escape policy
# =============================================================================

def test_no_escaping_by_default():
    assert render("<em>raw</em> & more") == "<em>raw</em> & more"


def test_escape_neutralises_markup_in_text():
    html = render("<script>alert(1)</script> '''x'''", escape=True)
    assert html == "&lt;script&gt;alert(1)&lt;/script&gt; <b>x</b>"


def test_escape_quotes_in_link_targets():
    html = render('[[a"b]]', escape=True)
    assert html == '<a href="/page/a&quot;b">a"b</a>'


def test_escape_keeps_every_rule_working():
    assert render(WELCOME_CONTENT, escape=True) == WELCOME_HTML


# -----------------------------------------------------------------------------
