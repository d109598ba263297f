"""Tests for static syntax highlighting."""

import pytest

from vitrina.highlighting import (
    PygmentsHighlighter,
    get_highlighter,
    highlight,
    set_highlighter,
)
from vitrina.utils.html import parse_fragment


@pytest.fixture
def restore_highlighter():
    yield
    set_highlighter(None)


class TestPygmentsHighlighter:
    def test_wraps_output_in_pre_with_class(self) -> None:
        html = PygmentsHighlighter().highlight(
            "def f(): pass", "source.python", css_class="editor-colors lang-python"
        )
        tree = parse_fragment(html)
        assert len(tree.contents) == 1
        assert tree.pre["class"] == ["editor-colors", "lang-python"]

    def test_emits_token_spans(self) -> None:
        html = PygmentsHighlighter().highlight("def f(): pass", "source.python")
        assert '<span class="k">def</span>' in html

    def test_escapes_code(self) -> None:
        html = PygmentsHighlighter().highlight("<script>x</script>", "text.plain")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_unknown_scope_is_plain_text(self) -> None:
        html = PygmentsHighlighter().highlight("a < b", "source.nope")
        assert parse_fragment(html).pre.get_text() == "a < b"

    def test_missing_scope_is_plain_text(self) -> None:
        html = PygmentsHighlighter().highlight("x = 1", None)
        assert "<span" not in html

    def test_blank_lines_are_kept(self) -> None:
        html = PygmentsHighlighter().highlight("\n\nx = 1\n", "source.python")
        assert parse_fragment(html).pre.get_text() == "\n\nx = 1\n"

    def test_no_newline_is_added(self) -> None:
        html = PygmentsHighlighter().highlight("x = 1", "source.python")
        assert parse_fragment(html).pre.get_text() == "x = 1"


class TestGlobalHighlighter:
    def test_default_is_pygments(self) -> None:
        assert isinstance(get_highlighter(), PygmentsHighlighter)

    def test_set_highlighter(self, restore_highlighter) -> None:
        class Upper:
            def highlight(self, code, scope_name, *, css_class="editor-colors"):
                return f'<pre class="{css_class}">{code.upper()}</pre>'

        set_highlighter(Upper())
        assert highlight("abc", None) == '<pre class="editor-colors">ABC</pre>'

    def test_none_restores_default(self) -> None:
        set_highlighter(None)
        assert isinstance(get_highlighter(), PygmentsHighlighter)
