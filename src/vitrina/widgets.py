"""Read-only code editor widgets for live previews.

A widget is a ``<code-editor>`` element placed in a detached preview tree.
The host application upgrades it to its real editor component; Vitrina only
fills in text, grammar and display attributes.

Freshly constructed editors come with a cursor-line decoration, the same
way host editor components do. A read-only preview has no cursor, so callers
tear those decorations down before use.
"""

from __future__ import annotations

from typing import Protocol

from bs4 import BeautifulSoup, Tag

from vitrina.fences import Grammar
from vitrina.highlighting import EDITOR_COLORS_CLASS, get_highlighter
from vitrina.utils.html import parse_fragment

WIDGET_TAG = "code-editor"


class CursorLineDecoration:
    """Highlight of the line holding the cursor."""

    __slots__ = ("_element",)

    def __init__(self, element: Tag) -> None:
        self._element = element

    @property
    def destroyed(self) -> bool:
        return self._element.parent is None

    def destroy(self) -> None:
        if not self.destroyed:
            self._element.decompose()


class EditorWidget:
    """A read-only editor bound to one ``<code-editor>`` element."""

    __slots__ = ("_cursor_line_decorations", "_grammar", "_text", "_tree", "element")

    def __init__(self, tree: BeautifulSoup, element: Tag) -> None:
        self._tree = tree
        self.element = element
        self._text = ""
        self._grammar: Grammar | None = None
        self._cursor_line_decorations: list[CursorLineDecoration] = []

    @property
    def text(self) -> str:
        return self._text

    @property
    def grammar(self) -> Grammar | None:
        return self._grammar

    @property
    def cursor_line_decorations(self) -> list[CursorLineDecoration]:
        """Decorations still attached to the widget."""
        return [d for d in self._cursor_line_decorations if not d.destroyed]

    def add_cursor_line_decoration(self) -> CursorLineDecoration:
        marker = self._tree.new_tag("div", attrs={"class": "cursor-line"})
        self.element.insert(0, marker)
        decoration = CursorLineDecoration(marker)
        self._cursor_line_decorations.append(decoration)
        return decoration

    def set_text(self, text: str) -> None:
        self._text = text
        self._refresh()

    def set_grammar(self, grammar: Grammar) -> None:
        self._grammar = grammar
        self._refresh()

    def _refresh(self) -> None:
        for child in self.element.find_all("pre", class_="lines", recursive=False):
            child.decompose()
        scope_name = self._grammar.scope_name if self._grammar else None
        markup = get_highlighter().highlight(
            self._text, scope_name, css_class=f"lines {EDITOR_COLORS_CLASS}"
        )
        for node in list(parse_fragment(markup).contents):
            self.element.append(node)


class WidgetFactory(Protocol):
    """Builds editor widgets inside a given tree."""

    def create(self, tree: BeautifulSoup) -> EditorWidget: ...


class EditorWidgetFactory:
    """Default factory producing ``<code-editor>`` elements."""

    def create(self, tree: BeautifulSoup) -> EditorWidget:
        element = tree.new_tag(WIDGET_TAG)
        element["gutter-hidden"] = ""
        element["readonly"] = ""
        element["tabindex"] = "-1"
        widget = EditorWidget(tree, element)
        widget.add_cursor_line_decoration()
        return widget


__all__ = [
    "WIDGET_TAG",
    "CursorLineDecoration",
    "EditorWidget",
    "EditorWidgetFactory",
    "WidgetFactory",
]
