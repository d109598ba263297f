"""Tests for read-only editor widgets."""

from vitrina.fences import Grammar
from vitrina.utils.html import parse_fragment
from vitrina.widgets import WIDGET_TAG, EditorWidgetFactory


class TestEditorWidgetFactory:
    def test_creates_detached_editor_element(self) -> None:
        tree = parse_fragment("")
        widget = EditorWidgetFactory().create(tree)
        assert widget.element.name == WIDGET_TAG
        assert widget.element.parent is None

    def test_new_widget_has_cursor_line_decoration(self) -> None:
        widget = EditorWidgetFactory().create(parse_fragment(""))
        assert len(widget.cursor_line_decorations) == 1
        assert widget.element.find("div", class_="cursor-line") is not None


class TestEditorWidget:
    def test_destroy_decoration(self) -> None:
        widget = EditorWidgetFactory().create(parse_fragment(""))
        decoration = widget.cursor_line_decorations[0]
        decoration.destroy()
        assert decoration.destroyed
        assert widget.cursor_line_decorations == []
        # Destroying twice is harmless
        decoration.destroy()

    def test_set_text_renders_lines(self) -> None:
        widget = EditorWidgetFactory().create(parse_fragment(""))
        widget.set_text("a < b")
        lines = widget.element.find("pre", class_="lines")
        assert widget.text == "a < b"
        assert lines.get_text() == "a < b"

    def test_set_text_replaces_previous_lines(self) -> None:
        widget = EditorWidgetFactory().create(parse_fragment(""))
        widget.set_text("one")
        widget.set_text("two")
        assert len(widget.element.find_all("pre", class_="lines")) == 1
        assert "two" in widget.element.get_text()

    def test_set_grammar_highlights(self) -> None:
        widget = EditorWidgetFactory().create(parse_fragment(""))
        widget.set_text("def f(): pass")
        widget.set_grammar(Grammar(scope_name="source.python", name="Python"))
        assert widget.grammar.name == "Python"
        assert widget.element.find("span", class_="k") is not None
