"""Code block post-processing.

Runs last in the pipeline, on sanitized and path-resolved markup. Two
strategies share fence-name extraction (see vitrina.fences):

- tokenize_code_blocks: replace each ``pre`` with static highlighted markup
- convert_code_blocks_to_widgets: replace each ``pre`` with a read-only
  editor widget in a detached tree

Both apply the configured editor font family to ``code`` elements first.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from vitrina.config import get_render_config
from vitrina.fences import (
    DEFAULT_FENCE_NAME,
    code_block_for,
    grammar_for_scope,
    scope_for_fence_name,
)
from vitrina.highlighting import EDITOR_COLORS_CLASS, Highlighter, get_highlighter
from vitrina.utils.html import parse_fragment, set_font_family
from vitrina.widgets import EditorWidgetFactory, WidgetFactory


def _apply_font_family(tree: BeautifulSoup, font_family: str | None) -> None:
    if font_family is None:
        font_family = get_render_config().editor_font_family
    if font_family:
        for code in tree.find_all("code"):
            set_font_family(code, font_family)


def tokenize_code_blocks(
    html: str,
    default_language: str = DEFAULT_FENCE_NAME,
    *,
    font_family: str | None = None,
    highlighter: Highlighter | None = None,
) -> str:
    """Replace every ``pre`` element with statically highlighted markup.

    Args:
        html: Sanitized, path-resolved HTML
        default_language: Fence name for blocks without a language class
        font_family: Font for ``code`` elements (defaults to the active
            RenderConfig.editor_font_family)
        highlighter: Highlighter to use (defaults to the global one)

    Returns:
        HTML with code blocks highlighted.
    """
    tree = parse_fragment(html)
    _apply_font_family(tree, font_family)
    highlighter = highlighter or get_highlighter()

    for pre in tree.find_all("pre"):
        block = code_block_for(pre, default_language)
        highlighted = highlighter.highlight(
            block.content,
            scope_for_fence_name(block.fence_name),
            css_class=f"{EDITOR_COLORS_CLASS} lang-{block.fence_name}",
        )
        replacement = parse_fragment(highlighted)
        pre.replace_with(*replacement.contents)

    return str(tree)


def convert_code_blocks_to_widgets(
    fragment: BeautifulSoup,
    default_language: str = DEFAULT_FENCE_NAME,
    *,
    font_family: str | None = None,
    factory: WidgetFactory | None = None,
) -> BeautifulSoup:
    """Replace every ``pre`` element of a detached tree with an editor widget.

    The tree is mutated in place and returned.

    Args:
        fragment: Detached tree from Renderer.render_to_fragment
        default_language: Fence name for blocks without a language class
        font_family: Font for pre-existing ``code`` elements (defaults to
            the active RenderConfig.editor_font_family)
        factory: Widget factory (defaults to EditorWidgetFactory)

    Returns:
        The same tree.
    """
    _apply_font_family(fragment, font_family)
    factory = factory or EditorWidgetFactory()

    for pre in fragment.find_all("pre"):
        block = code_block_for(pre, default_language)

        widget = factory.create(fragment)
        if "tabindex" in widget.element.attrs:
            del widget.element["tabindex"]
        pre.replace_with(widget.element)

        for decoration in widget.cursor_line_decorations:
            decoration.destroy()

        text = block.content[:-1] if block.content.endswith("\n") else block.content
        widget.set_text(text)

        grammar = grammar_for_scope(scope_for_fence_name(block.fence_name))
        if grammar is not None:
            widget.set_grammar(grammar)
            widget.element["data-grammar"] = grammar.scope_name.replace(".", " ")

    return fragment


__all__ = [
    "convert_code_blocks_to_widgets",
    "tokenize_code_blocks",
]
