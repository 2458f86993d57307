#!/usr/bin/env python
"""
Render a wiki markup file to HTML.

Usage:
    .venv/bin/python scripts/render_page.py [FILE] [options]

Options:
    --engine E       stages (default) or tree
    --prefix P       route prefix for [[internal links]] (default: /page)
    --escape         escape & < > in the source and " in link targets
    --document       wrap the fragment in the page template
    --title T        page title used with --document (default: file stem)

Reads standard input when FILE is omitted or "-".

Example:
    .venv/bin/python scripts/render_page.py pages/Main\\ Page.wiki --document
    echo "'''bold''' and [[Home]]" | .venv/bin/python scripts/render_page.py --engine tree
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure miniwiki package is importable when run from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from miniwiki.services.renderer import DEFAULT_LINK_PREFIX, ENGINES, render
from miniwiki.ui.views import get_templates


def render_document(title: str, fragment: str) -> str:
    template = get_templates().get_template("page.html")
    return template.render(title=title, content=fragment)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render wiki markup to an HTML fragment or document",
    )
    parser.add_argument("file", nargs="?", default="-",
                        help="Markup file to render (default: stdin)")
    parser.add_argument("--engine", choices=ENGINES, default="stages",
                        help="Render engine (default: stages)")
    parser.add_argument("--prefix", default=DEFAULT_LINK_PREFIX, metavar="P",
                        help=f"Internal link prefix (default: {DEFAULT_LINK_PREFIX})")
    parser.add_argument("--escape", action="store_true",
                        help="Escape HTML-reserved characters in the source")
    parser.add_argument("--document", action="store_true",
                        help="Emit a full HTML document instead of a fragment")
    parser.add_argument("--title", default=None, metavar="T",
                        help="Document title (default: file stem)")
    args = parser.parse_args()

    if args.file == "-":
        content = sys.stdin.read()
        title = args.title or "Untitled"
    else:
        path = Path(args.file).expanduser()
        if not path.is_file():
            print(f"Error: file not found: {path}", file=sys.stderr)
            sys.exit(1)
        content = path.read_text(encoding="utf-8")
        title = args.title or path.stem

    fragment = render(content, args.engine, link_prefix=args.prefix, escape=args.escape)
    print(render_document(title, fragment) if args.document else fragment)


if __name__ == "__main__":
    main()
