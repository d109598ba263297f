"""Small helpers shared by every stage that works on an HTML tree.

All stages parse with the stdlib ``html.parser`` builder so output is the
same whether or not lxml happens to be installed.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

PARSER = "html.parser"


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment into a new, detached tree."""
    return BeautifulSoup(html, PARSER)


def set_font_family(tag: Tag, font_family: str) -> None:
    """Set ``font-family`` in a tag's inline style, keeping other declarations."""
    declarations = [
        part.strip()
        for part in tag.get("style", "").split(";")
        if part.strip() and part.split(":", 1)[0].strip().lower() != "font-family"
    ]
    declarations.append(f"font-family: {font_family}")
    tag["style"] = "; ".join(declarations)
