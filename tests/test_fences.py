"""Tests for fence name extraction and scope mapping."""

import pytest

from vitrina.fences import (
    CodeBlock,
    Grammar,
    code_block_for,
    fence_name_for,
    grammar_for_scope,
    lexer_name_for_scope,
    scope_for_fence_name,
)
from vitrina.utils.html import parse_fragment


def pre(html: str):
    return parse_fragment(html).pre


class TestFenceNameFor:
    def test_markdown_it_class(self) -> None:
        assert fence_name_for(pre('<pre><code class="lang-rust">fn x() {}</code></pre>')) == "rust"

    def test_pandoc_class(self) -> None:
        html = '<pre class="sourceCode rust"><code class="sourceCode rust">x</code></pre>'
        assert fence_name_for(pre(html)) == "rust"

    def test_no_class_uses_default(self) -> None:
        assert fence_name_for(pre("<pre><code>x</code></pre>")) == "text"

    def test_supplied_default(self) -> None:
        assert fence_name_for(pre("<pre><code>x</code></pre>"), "coffee") == "coffee"

    def test_pre_without_child_element(self) -> None:
        assert fence_name_for(pre('<pre class="lang-go">package main</pre>')) == "go"

    def test_unprefixed_class_is_kept(self) -> None:
        assert fence_name_for(pre('<pre><code class="python">x</code></pre>')) == "python"

    def test_bare_marker_uses_default(self) -> None:
        assert fence_name_for(pre('<pre><code class="lang-">x</code></pre>')) == "text"

    def test_only_leading_marker_is_removed(self) -> None:
        assert fence_name_for(pre('<pre><code class="lang-lang-x">x</code></pre>')) == "lang-x"


class TestCodeBlockFor:
    def test_content_is_literal_text(self) -> None:
        block = code_block_for(pre('<pre><code class="lang-html">&lt;b&gt;\n</code></pre>'))
        assert block == CodeBlock(fence_name="html", content="<b>\n")

    def test_content_of_bare_pre(self) -> None:
        assert code_block_for(pre("<pre>plain</pre>")).content == "plain"


class TestScopes:
    @pytest.mark.parametrize(
        ("fence", "scope"),
        [
            ("py", "source.python"),
            ("Python", "source.python"),
            ("sh", "source.shell"),
            ("html", "text.html.basic"),
            ("text", "text.plain"),
            ("rust", "source.rust"),
        ],
    )
    def test_known_fence_names(self, fence: str, scope: str) -> None:
        assert scope_for_fence_name(fence) == scope

    def test_any_pygments_language(self) -> None:
        assert scope_for_fence_name("lua") == "source.lua"

    def test_unknown_fence_name(self) -> None:
        assert scope_for_fence_name("definitely-not-a-language") is None

    def test_empty_fence_name(self) -> None:
        assert scope_for_fence_name("") is None

    @pytest.mark.parametrize(
        ("scope", "lexer"),
        [
            ("source.python", "python"),
            ("source.shell", "bash"),
            ("text.plain", "text"),
            ("text.html.basic", "html"),
            ("source.css.scss", "scss"),
        ],
    )
    def test_lexer_names(self, scope: str, lexer: str) -> None:
        assert lexer_name_for_scope(scope) == lexer

    def test_grammar_for_scope(self) -> None:
        assert grammar_for_scope("source.python") == Grammar(scope_name="source.python", name="Python")

    def test_no_grammar_for_unknown_scope(self) -> None:
        assert grammar_for_scope("source.definitely-not-a-language") is None
        assert grammar_for_scope(None) is None

    def test_every_table_scope_has_a_grammar(self) -> None:
        from vitrina.fences import _SCOPES_BY_FENCE_NAME

        for fence, scope in _SCOPES_BY_FENCE_NAME.items():
            assert grammar_for_scope(scope) is not None, fence
