"""In-process markdown compiler built on markdown-it-py.

Raw HTML in the source is passed through (the pipeline sanitizes it
afterwards). Fenced code gets ``class="lang-<fence>"``. With math enabled,
``$...$`` and ``$$...$$`` become ``<script type="math/tex">`` payloads the
host can typeset.
"""

from __future__ import annotations

import re
from typing import Any

import mdurl
from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin

LANG_PREFIX = "lang-"

_SCRIPT_CLOSE = re.compile(r"</(script)", re.IGNORECASE)


def _math_script(content: str, options: dict[str, Any]) -> str:
    """Wrap TeX in a ``math/tex`` script.

    The TeX is passed through unchanged except for a literal ``</script``
    (any case), which is written as ``<\\/script`` so it cannot close the
    element early.
    """
    mode = "; mode=display" if options.get("display_mode") else ""
    content = _SCRIPT_CLOSE.sub(r"<\\/\1", content)
    return f'<script type="math/tex{mode}">{content}</script>'


def create_markdown_it(render_math: bool = False) -> MarkdownIt:
    """Build the MarkdownIt instance used for one math setting."""
    md = MarkdownIt("commonmark", {"html": True, "langPrefix": LANG_PREFIX})
    md.enable(["table", "strikethrough"])
    if render_math:
        md.use(dollarmath_plugin, renderer=_math_script)
    return md


class MarkdownItCompiler:
    """DocumentCompiler backed by markdown-it-py.

    Instances are cached per math setting and reused across renders.
    """

    name = "markdown-it"

    __slots__ = ("_instances",)

    def __init__(self) -> None:
        self._instances: dict[bool, MarkdownIt] = {}

    def _markdown_it(self, render_math: bool) -> MarkdownIt:
        md = self._instances.get(render_math)
        if md is None:
            md = self._instances[render_math] = create_markdown_it(render_math)
        return md

    def render(self, text: str, render_math: bool = False) -> str:
        """Compile synchronously."""
        return self._markdown_it(render_math).render(text)

    async def compile(
        self,
        text: str,
        source_path: str | None,
        render_math: bool = False,
    ) -> str:
        return self.render(text, render_math)

    @staticmethod
    def decode(src: str) -> str:
        """URL-decode a link destination the way markdown-it encoded it."""
        return mdurl.decode(src)


__all__ = [
    "LANG_PREFIX",
    "MarkdownItCompiler",
    "create_markdown_it",
]
