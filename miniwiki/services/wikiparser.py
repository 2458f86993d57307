#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tree renderer
=============
Two-phase alternative to the rewrite stages in ``renderer``:

  lex     each line becomes a heading block or an inline token stream
          (internal link, external link, apostrophe run, plain text)
  parse   apostrophe runs open and close Bold / Italic nodes on a stack,
          so nesting is explicit
  render  one pass over the tree

Because formatting is tracked on a stack rather than by regex order,
'''''both''''' closes in the right order (<b><i>both</i></b>) and adding
another marker length does not require re-deriving a stage order.

Apostrophe runs:
  ''       toggle italic
  '''      toggle bold
  ''''     a literal ' then toggle bold
  '''''    toggle both (opens bold then italic, closes the innermost first)
  longer   the excess is literal, the last five are handled as above

Formatting still open at the end of a line falls back to its literal marker.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
import re
from dataclasses import dataclass, field
from typing import Union

from miniwiki.services.renderer import (
    DEFAULT_LINK_PREFIX,
    HEADING_RE,
    external_anchor,
    heading_tag,
    internal_anchor,
)


# -----------------------------------------------------------------------------
# Tokens
# -----------------------------------------------------------------------------

TEXT     = "text"
QUOTES   = "quotes"
INTERNAL = "internal"
EXTERNAL = "external"


@dataclass(frozen=True)
class Token:
    kind: str
    value: str


_OPENER_RE        = re.compile(r"\[|'{2,}")
_INTERNAL_RUN_RE  = re.compile(r"\[\[([^\]]*)")
_EXTERNAL_RUN_RE  = re.compile(r"\[(https?://)([^\s\]]*)")


def tokenize(line: str) -> list[Token]:
    """Split a single line into inline tokens.

    A link opener is read up to the character that ends its run; only a
    closing bracket there makes it a link.  When it is not, every opener of
    the same kind inside the run ends at that same character, so they are
    not tried again.
    """
    tokens: list[Token] = []
    text_from = pos = 0
    internal_from = external_from = 0      # earliest start worth trying

    while True:
        m = _OPENER_RE.search(line, pos)
        if m is None:
            break
        start, end = m.start(), m.end()
        token = None

        if m.group() != "[":
            token = Token(QUOTES, m.group())
        else:
            if start >= internal_from:
                run = _INTERNAL_RUN_RE.match(line, start)
                if run:
                    if run.group(1) and line.startswith("]]", run.end()):
                        token, end = Token(INTERNAL, run.group(1)), run.end() + 2
                    else:
                        internal_from = run.end()
            if token is None and start >= external_from:
                run = _EXTERNAL_RUN_RE.match(line, start)
                if run:
                    if run.group(2) and line.startswith("]", run.end()):
                        token, end = Token(EXTERNAL, run.group(1) + run.group(2)), run.end() + 1
                    else:
                        external_from = run.end()

        if token is not None:
            if start > text_from:
                tokens.append(Token(TEXT, line[text_from:start]))
            tokens.append(token)
            text_from = end
        pos = end

    if text_from < len(line):
        tokens.append(Token(TEXT, line[text_from:]))
    return tokens


# -----------------------------------------------------------------------------
# Tree nodes
# -----------------------------------------------------------------------------

@dataclass
class Text:
    value: str


@dataclass
class InternalLink:
    page: str


@dataclass
class ExternalLink:
    url: str


@dataclass
class Bold:
    children: list["Inline"] = field(default_factory=list)
    marker: str = "'''"     # literal text restored if never closed


@dataclass
class Italic:
    children: list["Inline"] = field(default_factory=list)
    marker: str = "''"


Inline = Union[Text, InternalLink, ExternalLink, Bold, Italic]


@dataclass
class Heading:
    level: int
    children: list[Inline]


@dataclass
class Line:
    children: list[Inline]


@dataclass
class Document:
    blocks: list[Union[Heading, Line]]


# -----------------------------------------------------------------------------
# Parser
# -----------------------------------------------------------------------------

class _InlineParser:
    """Builds the inline tree for one line from its tokens."""

    def __init__(self) -> None:
        self.root: list[Inline] = []
        self.stack: list[Union[Bold, Italic]] = []

    def _children(self) -> list[Inline]:
        return self.stack[-1].children if self.stack else self.root

    def _append(self, node: Inline) -> None:
        children = self._children()
        if isinstance(node, Text) and children and isinstance(children[-1], Text):
            children[-1] = Text(children[-1].value + node.value)
        else:
            children.append(node)

    def _is_open(self, kind: type) -> bool:
        return any(isinstance(n, kind) for n in self.stack)

    def _open(self, kind: type, marker: str) -> None:
        node = kind(marker=marker)
        self._children().append(node)
        self.stack.append(node)

    def _pop(self) -> Union[Bold, Italic]:
        node = self.stack.pop()
        # drop reopened formatting that never received content
        if not node.children and not node.marker:
            self._children().pop()
        return node

    def _close(self, kind: type) -> None:
        interrupted: list[type] = []
        while True:
            node = self._pop()
            if isinstance(node, kind):
                break
            interrupted.append(type(node))
        for inner in reversed(interrupted):
            self._open(inner, marker="")

    def _toggle(self, kind: type, marker: str) -> None:
        if self._is_open(kind):
            self._close(kind)
        else:
            self._open(kind, marker)

    def quotes(self, run: str) -> None:
        n = len(run)
        if n == 4:
            self._append(Text("'"))
            n = 3
        elif n > 5:
            self._append(Text("'" * (n - 5)))
            n = 5

        if n == 2:
            self._toggle(Italic, "''")
        elif n == 3:
            self._toggle(Bold, "'''")
        else:
            bold_open, italic_open = self._is_open(Bold), self._is_open(Italic)
            if bold_open and italic_open:
                inner = type(self.stack[-1])
                self._close(inner)
                self._close(Italic if inner is Bold else Bold)
            elif bold_open:
                self._close(Bold)
                self._open(Italic, "''")
            elif italic_open:
                self._close(Italic)
                self._open(Bold, "'''")
            else:
                self._open(Bold, "'''")
                self._open(Italic, "''")

    def feed(self, token: Token) -> None:
        if token.kind == QUOTES:
            self.quotes(token.value)
        elif token.kind == INTERNAL:
            self._append(InternalLink(token.value))
        elif token.kind == EXTERNAL:
            self._append(ExternalLink(token.value))
        else:
            self._append(Text(token.value))

    def finish(self) -> list[Inline]:
        """Unwind unclosed formatting back into literal text."""
        while self.stack:
            node = self.stack.pop()
            self._children().pop()          # an open node is always the last child
            if node.marker:
                self._append(Text(node.marker))
            for child in node.children:
                self._append(child)
        return self.root


def parse_inline(text: str) -> list[Inline]:
    parser = _InlineParser()
    for token in tokenize(text):
        parser.feed(token)
    return parser.finish()


def parse(text: str) -> Document:
    """Parse wiki markup into a :class:`Document`, one block per source line."""
    blocks: list[Union[Heading, Line]] = []
    for line in text.split("\n"):
        m = HEADING_RE.match(line)
        if m:
            blocks.append(Heading(len(m.group(1)), parse_inline(m.group(2).strip())))
        else:
            blocks.append(Line(parse_inline(line)))
    return Document(blocks)


# -----------------------------------------------------------------------------
# Renderer
# -----------------------------------------------------------------------------

def _render_inline(nodes: list[Inline], prefix: str, escape: bool) -> str:
    esc = (lambda s: _html.escape(s, quote=False)) if escape else (lambda s: s)
    out: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            out.append(esc(node.value))
        elif isinstance(node, Bold):
            out.append(f"<b>{_render_inline(node.children, prefix, escape)}</b>")
        elif isinstance(node, Italic):
            out.append(f"<i>{_render_inline(node.children, prefix, escape)}</i>")
        elif isinstance(node, InternalLink):
            out.append(internal_anchor(prefix, esc(node.page), escape))
        elif isinstance(node, ExternalLink):
            out.append(external_anchor(esc(node.url), escape))
    return "".join(out)


def render_tree(
    document: Document,
    link_prefix: str = DEFAULT_LINK_PREFIX,
    escape: bool = False,
) -> str:
    """Render a parsed document to an HTML fragment; lines are joined with ``\\n``."""
    prefix = link_prefix.rstrip("/")
    lines: list[str] = []
    for block in document.blocks:
        inner = _render_inline(block.children, prefix, escape)
        if isinstance(block, Heading):
            lines.append(heading_tag(block.level, inner))
        else:
            lines.append(inner)
    return "\n".join(lines)


# -----------------------------------------------------------------------------
