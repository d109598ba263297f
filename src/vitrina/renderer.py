"""The document render pipeline.

    source ─▶ compiler ─▶ sanitize ─▶ resolve images ─▶ [highlight code] ─▶ HTML

Sanitization always precedes image resolution, and code block processing
always comes last, on sanitized and resolved markup. The tree is handed from
stage to stage; no two stages hold it at once.

Example:
    >>> renderer = Renderer(host_paths=HostPaths.detect())
    >>> html = await renderer.render_to_string("# Hi", "/notes/doc.md")
    >>> html
    '<h1>Hi</h1>'

Errors:
    CompilerError from the backend propagates to the caller; nothing after
    compilation runs. Image resolution never raises.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable

from bs4 import BeautifulSoup

from vitrina.codeblocks import tokenize_code_blocks
from vitrina.compilers.markdown import MarkdownItCompiler
from vitrina.compilers.pandoc import PandocCompiler
from vitrina.compilers.protocol import DocumentCompiler
from vitrina.config import HostPaths, RenderConfig, get_render_config
from vitrina.documents import Document, RenderOptions, RenderResult, RenderTarget
from vitrina.fences import DEFAULT_FENCE_NAME
from vitrina.highlighting import Highlighter
from vitrina.images import ImagePathResolver
from vitrina.project import ProjectResolver
from vitrina.sanitize import sanitize_tree
from vitrina.utils.html import parse_fragment
from vitrina.utils.logger import get_logger
from vitrina.versions import VersionLookup

logger = get_logger(__name__)

# Compilers escape a leading doctype instead of dropping it
_DOCTYPE = re.compile(r"^\s*<!doctype(\s+.*)?>\s*", re.IGNORECASE)

# Literate grammars: prose documents whose code blocks default to a language
DEFAULT_LANGUAGES_BY_GRAMMAR: dict[str, str] = {
    "source.litcoffee": "coffee",
    "text.tex.latex.haskell": "haskell",
}


def normalize_source(text: str | None) -> str:
    """Treat None as empty and strip a leading doctype declaration."""
    if not text:
        return ""
    return _DOCTYPE.sub("", text, count=1)


def default_language_for(grammar_hint: str | None) -> str:
    """Fence name assumed for unlabeled code blocks of a document."""
    if grammar_hint is None:
        return DEFAULT_FENCE_NAME
    return DEFAULT_LANGUAGES_BY_GRAMMAR.get(grammar_hint, DEFAULT_FENCE_NAME)


class Renderer:
    """Renders documents to sanitized, link-resolved HTML.

    Build one per host at startup; it is safe to share between concurrent
    renders on one event loop.

    Args:
        host_paths: Trusted roots (detected when omitted)
        project: Project root resolver for root-relative image paths
        versions: Image version lookup
        markdown: In-process compiler
        pandoc: External compiler
        highlighter: Highlighter for static code highlighting (global one
            when omitted)
        file_exists: Existence check used for absolute image paths
    """

    __slots__ = ("highlighter", "host_paths", "images", "markdown", "pandoc")

    def __init__(
        self,
        *,
        host_paths: HostPaths | None = None,
        project: ProjectResolver | None = None,
        versions: VersionLookup | None = None,
        markdown: DocumentCompiler | None = None,
        pandoc: DocumentCompiler | None = None,
        highlighter: Highlighter | None = None,
        file_exists: Callable[[str], bool] = os.path.isfile,
    ) -> None:
        self.host_paths = host_paths or HostPaths.detect()
        self.markdown = markdown or MarkdownItCompiler()
        self.pandoc = pandoc or PandocCompiler()
        self.highlighter = highlighter
        self.images = ImagePathResolver(
            self.host_paths,
            project=project,
            versions=versions,
            file_exists=file_exists,
        )

    def _uses_external(self, options: RenderOptions, config: RenderConfig) -> bool:
        if options.use_external_compiler is not None:
            return options.use_external_compiler
        return config.external_backend_enabled

    async def _render(
        self,
        text: str | None,
        source_path: str | None,
        options: RenderOptions,
        external: bool,
    ) -> str:
        compiler = self.pandoc if external else self.markdown
        logger.debug("Rendering %s with %s", source_path or "<unsaved>", compiler.name)

        html = await compiler.compile(normalize_source(text), source_path, options.render_math)

        tree = sanitize_tree(parse_fragment(html))
        await self.images.resolve_tree(
            tree,
            source_path,
            copy_mode=options.copy_mode,
            decode=not external,
        )
        return str(tree).strip()

    def _highlight_code_blocks(
        self,
        html: str,
        grammar_hint: str | None,
        config: RenderConfig,
        external: bool,
    ) -> str:
        if external and config.native_code_styling:
            return html
        return tokenize_code_blocks(
            html,
            default_language_for(grammar_hint),
            font_family=config.editor_font_family,
            highlighter=self.highlighter,
        )

    async def render_to_string(
        self,
        text: str | None,
        source_path: str | None = None,
        *,
        render_math: bool = False,
        copy_mode: bool = False,
    ) -> str:
        """Render a document to an HTML string.

        Args:
            text: Document source (None or empty renders an empty document)
            source_path: Backing file, anchors relative image paths
            render_math: Keep math as ``math/tex`` scripts
            copy_mode: Skip image version suffixes (standalone output)

        Returns:
            Trimmed HTML.

        Raises:
            CompilerError: The backend failed.
        """
        options = RenderOptions(render_math=render_math, copy_mode=copy_mode)
        return await self._render(
            text, source_path, options, self._uses_external(options, get_render_config())
        )

    async def render_to_fragment(
        self,
        text: str | None,
        source_path: str | None = None,
        *,
        render_math: bool = False,
    ) -> BeautifulSoup:
        """Render a document into a detached tree owned by the caller.

        Image versions are always requested (never copy mode).
        """
        html = await self.render_to_string(text, source_path, render_math=render_math)
        return parse_fragment(html)

    async def render_to_highlighted_string(
        self,
        text: str | None,
        source_path: str | None = None,
        grammar_hint: str | None = None,
        *,
        render_math: bool = False,
        copy_mode: bool = False,
    ) -> str:
        """Render a document to HTML with statically highlighted code blocks.

        Highlighting is skipped when pandoc renders with its native code
        styles. Unlabeled code blocks of literate documents (see
        DEFAULT_LANGUAGES_BY_GRAMMAR) default to the document's language.

        Args:
            text: Document source
            source_path: Backing file
            grammar_hint: Scope name of the document's grammar
            render_math: Keep math as ``math/tex`` scripts
            copy_mode: Skip image version suffixes

        Raises:
            CompilerError: The backend failed.
        """
        config = get_render_config()
        options = RenderOptions(render_math=render_math, copy_mode=copy_mode)
        external = self._uses_external(options, config)
        html = await self._render(text, source_path, options, external)
        return self._highlight_code_blocks(html, grammar_hint, config, external)

    async def render(
        self,
        document: Document,
        options: RenderOptions | None = None,
        *,
        target: RenderTarget = RenderTarget.STRING,
        grammar_hint: str | None = None,
    ) -> RenderResult:
        """Render a Document through the entry point named by ``target``.

        ``options.use_external_compiler`` overrides the configured backend
        for this call. FRAGMENT ignores ``copy_mode``.
        """
        options = options or RenderOptions()
        config = get_render_config()
        external = self._uses_external(options, config)
        text, source_path = document.source_text, document.source_path

        if target is RenderTarget.FRAGMENT:
            fragment_options = RenderOptions(
                render_math=options.render_math,
                use_external_compiler=options.use_external_compiler,
            )
            html = await self._render(text, source_path, fragment_options, external)
            return RenderResult(target=target, html=html, fragment=parse_fragment(html))

        html = await self._render(text, source_path, options, external)
        if target is RenderTarget.HIGHLIGHTED:
            html = self._highlight_code_blocks(html, grammar_hint, config, external)
        return RenderResult(target=target, html=html)


_default_renderer: Renderer | None = None


def get_default_renderer() -> Renderer:
    """Return the module-level Renderer, creating it on first use."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = Renderer()
    return _default_renderer


async def render_to_string(
    text: str | None,
    source_path: str | None = None,
    *,
    render_math: bool = False,
    copy_mode: bool = False,
) -> str:
    """Render with the default Renderer. See Renderer.render_to_string."""
    return await get_default_renderer().render_to_string(
        text, source_path, render_math=render_math, copy_mode=copy_mode
    )


async def render_to_fragment(
    text: str | None,
    source_path: str | None = None,
    *,
    render_math: bool = False,
) -> BeautifulSoup:
    """Render with the default Renderer. See Renderer.render_to_fragment."""
    return await get_default_renderer().render_to_fragment(
        text, source_path, render_math=render_math
    )


async def render_to_highlighted_string(
    text: str | None,
    source_path: str | None = None,
    grammar_hint: str | None = None,
    *,
    render_math: bool = False,
    copy_mode: bool = False,
) -> str:
    """Render with the default Renderer. See Renderer.render_to_highlighted_string."""
    return await get_default_renderer().render_to_highlighted_string(
        text,
        source_path,
        grammar_hint,
        render_math=render_math,
        copy_mode=copy_mode,
    )


__all__ = [
    "DEFAULT_LANGUAGES_BY_GRAMMAR",
    "Renderer",
    "default_language_for",
    "get_default_renderer",
    "normalize_source",
    "render_to_fragment",
    "render_to_highlighted_string",
    "render_to_string",
]
