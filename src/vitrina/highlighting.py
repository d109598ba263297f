"""Static syntax highlighting for code blocks.

Code blocks are colorized with Pygments by default. Hosts that already own
a highlighter can inject it with set_highlighter().

Output Shape:
    A single ``<pre>`` element carrying the given CSS class, containing
    Pygments token spans (``<span class="k">def</span>`` ...). Stylesheets
    are the host's concern.

Usage:
    from vitrina.highlighting import set_highlighter

    class MyHighlighter:
        def highlight(self, code, scope_name, *, css_class="editor-colors"):
            return f'<pre class="{css_class}">{escape(code)}</pre>'

    set_highlighter(MyHighlighter())
"""

from __future__ import annotations

from html import escape
from typing import Protocol

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from vitrina.fences import lexer_name_for_scope

EDITOR_COLORS_CLASS = "editor-colors"

# Pygments strips leading/trailing blank lines and appends a newline by default
_LITERAL_TEXT = {"stripnl": False, "ensurenl": False}


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Contract:
        - MUST return a single ``pre`` element as HTML
        - MUST escape HTML entities in code
        - MUST NOT raise for unknown or missing scopes (plain text instead)
    """

    def highlight(
        self,
        code: str,
        scope_name: str | None,
        *,
        css_class: str = EDITOR_COLORS_CLASS,
    ) -> str:
        """Highlight code with syntax colors.

        Args:
            code: Literal text content of the code block
            scope_name: Scope selecting the grammar (None for plain text)
            css_class: Class attribute for the wrapping ``pre``

        Returns:
            HTML markup with highlighting
        """
        ...


class PygmentsHighlighter:
    """Pygments-based highlighter implementing the Highlighter protocol."""

    __slots__ = ("_formatter",)

    def __init__(self) -> None:
        self._formatter = HtmlFormatter(nowrap=True)

    def lexer_for(self, scope_name: str | None) -> Lexer:
        """Lexer for a scope that keeps the code text byte-for-byte."""
        if not scope_name:
            return TextLexer(**_LITERAL_TEXT)
        try:
            return get_lexer_by_name(lexer_name_for_scope(scope_name), **_LITERAL_TEXT)
        except ClassNotFound:
            return TextLexer(**_LITERAL_TEXT)

    def highlight(
        self,
        code: str,
        scope_name: str | None,
        *,
        css_class: str = EDITOR_COLORS_CLASS,
    ) -> str:
        body = pygments_highlight(code, self.lexer_for(scope_name), self._formatter)
        return f'<pre class="{escape(css_class)}">{body}</pre>'


_highlighter: Highlighter = PygmentsHighlighter()


def set_highlighter(highlighter: Highlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A Highlighter protocol implementation. Pass None to
            restore the Pygments default.
    """
    global _highlighter
    _highlighter = highlighter if highlighter is not None else PygmentsHighlighter()


def get_highlighter() -> Highlighter:
    """Get the current highlighter instance."""
    return _highlighter


def highlight(
    code: str,
    scope_name: str | None,
    *,
    css_class: str = EDITOR_COLORS_CLASS,
) -> str:
    """Highlight code using the configured highlighter."""
    return _highlighter.highlight(code, scope_name, css_class=css_class)


__all__ = [
    "EDITOR_COLORS_CLASS",
    "Highlighter",
    "PygmentsHighlighter",
    "get_highlighter",
    "highlight",
    "set_highlighter",
]
