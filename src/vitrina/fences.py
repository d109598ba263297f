"""Fence names, highlighting scopes and grammars for code blocks.

A compiled code block is a ``pre`` element, usually wrapping a ``code``
element whose class carries the fence name: markdown-it writes
``class="lang-rust"``, pandoc writes ``class="sourceCode rust"``.

Scope names are opaque grammar keys in TextMate style (``source.python``,
``text.html.basic``). They are resolved to Pygments lexers for highlighting.

Example:
    >>> scope_for_fence_name("py")
    'source.python'
    >>> lexer_name_for_scope("source.shell")
    'bash'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import Tag
from pygments.lexers import find_lexer_class_by_name
from pygments.util import ClassNotFound

from vitrina.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FENCE_NAME = "text"

_FENCE_CLASS_PREFIX = re.compile(r"^(lang-|sourceCode )")

_SCOPES_BY_FENCE_NAME: dict[str, str] = {
    "bash": "source.shell",
    "c": "source.c",
    "c++": "source.cpp",
    "coffee": "source.coffee",
    "coffeescript": "source.coffee",
    "cpp": "source.cpp",
    "cs": "source.cs",
    "csharp": "source.cs",
    "css": "source.css",
    "go": "source.go",
    "golang": "source.go",
    "haskell": "source.haskell",
    "hs": "source.haskell",
    "html": "text.html.basic",
    "java": "source.java",
    "javascript": "source.js",
    "js": "source.js",
    "json": "source.json",
    "less": "source.css.less",
    "markdown": "source.gfm",
    "md": "source.gfm",
    "objc": "source.objc",
    "php": "text.html.php",
    "py": "source.python",
    "python": "source.python",
    "rb": "source.ruby",
    "ruby": "source.ruby",
    "rs": "source.rust",
    "rust": "source.rust",
    "scss": "source.css.scss",
    "sh": "source.shell",
    "shell": "source.shell",
    "sql": "source.sql",
    "text": "text.plain",
    "toml": "source.toml",
    "ts": "source.ts",
    "typescript": "source.ts",
    "xml": "text.xml",
    "yaml": "source.yaml",
    "yml": "source.yaml",
    "zsh": "source.shell",
}

# Scopes whose last component is not a Pygments lexer alias
_LEXERS_BY_SCOPE: dict[str, str] = {
    "source.cs": "csharp",
    "source.gfm": "markdown",
    "source.shell": "bash",
    "text.html.basic": "html",
    "text.html.php": "php",
    "text.plain": "text",
    "text.xml": "xml",
}


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """The code carried by one ``pre`` element."""

    fence_name: str
    content: str


@dataclass(frozen=True, slots=True)
class Grammar:
    """A resolvable highlighting grammar.

    Attributes:
        scope_name: Scope the grammar was resolved from
        name: Human-readable language name
    """

    scope_name: str
    name: str


def code_element_for(pre: Tag) -> Tag:
    """Return the element holding a block's code: first child element, else the pre."""
    child = pre.find(True, recursive=False)
    return child if child is not None else pre


def fence_name_for(pre: Tag, default: str = DEFAULT_FENCE_NAME) -> str:
    """Extract the fence name of a ``pre`` element.

    Args:
        pre: A ``pre`` element from a compiled document
        default: Fence name when the code element has no class

    Returns:
        Fence name with a leading ``lang-`` or ``sourceCode `` marker removed.
    """
    class_name = " ".join(code_element_for(pre).get("class") or ())
    # A bare "lang-" marker also falls back to the default
    return _FENCE_CLASS_PREFIX.sub("", class_name) or default


def code_block_for(pre: Tag, default: str = DEFAULT_FENCE_NAME) -> CodeBlock:
    return CodeBlock(
        fence_name=fence_name_for(pre, default),
        content=code_element_for(pre).get_text(),
    )


def _lexer_exists(name: str) -> bool:
    try:
        find_lexer_class_by_name(name)
    except ClassNotFound:
        return False
    return True


def scope_for_fence_name(fence_name: str) -> str | None:
    """Map a fence name to a scope name.

    Returns:
        The scope name, or None when no grammar is known for the fence.
    """
    name = fence_name.strip().lower()
    scope = _SCOPES_BY_FENCE_NAME.get(name)
    if scope is not None:
        return scope
    if name and _lexer_exists(name):
        return f"source.{name}"
    logger.debug("No scope for fence name %r", fence_name)
    return None


def lexer_name_for_scope(scope_name: str) -> str:
    """Return the Pygments lexer alias for a scope name."""
    return _LEXERS_BY_SCOPE.get(scope_name) or scope_name.rsplit(".", 1)[-1]


def grammar_for_scope(scope_name: str | None) -> Grammar | None:
    """Resolve a scope name to a grammar, or None if no lexer handles it."""
    if not scope_name:
        return None
    try:
        lexer_class = find_lexer_class_by_name(lexer_name_for_scope(scope_name))
    except ClassNotFound:
        return None
    return Grammar(scope_name=scope_name, name=lexer_class.name)


__all__ = [
    "DEFAULT_FENCE_NAME",
    "CodeBlock",
    "Grammar",
    "code_block_for",
    "code_element_for",
    "fence_name_for",
    "grammar_for_scope",
    "lexer_name_for_scope",
    "scope_for_fence_name",
]
