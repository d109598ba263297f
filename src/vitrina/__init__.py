"""
Vitrina — Safe HTML previews of markdown documents

Compiles markdown (with markdown-it-py in process, or pandoc) and turns the
result into HTML a host application can display: scripts and inline event
handlers removed, image paths resolved and version-tagged, and code blocks
highlighted or converted into read-only editor widgets.

Quick Start:
    >>> import asyncio
    >>> from vitrina import Renderer
    >>> renderer = Renderer()
    >>> asyncio.run(renderer.render_to_string("# Hi", "/notes/doc.md"))
    '<h1>Hi</h1>'

Live Previews:
    >>> from vitrina import convert_code_blocks_to_widgets
    >>> fragment = asyncio.run(renderer.render_to_fragment(text, path))
    >>> convert_code_blocks_to_widgets(fragment)

Configuration:
    >>> from vitrina import RenderConfig, render_config_context
    >>> with render_config_context(RenderConfig(external_backend_enabled=True)):
    ...     html = asyncio.run(renderer.render_to_string(text, path))
"""

from vitrina.codeblocks import convert_code_blocks_to_widgets, tokenize_code_blocks
from vitrina.compilers import DocumentCompiler, MarkdownItCompiler, PandocCompiler
from vitrina.config import (
    HostPaths,
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from vitrina.documents import Document, RenderOptions, RenderResult, RenderTarget
from vitrina.errors import CompilerError, VitrinaError
from vitrina.fences import (
    CodeBlock,
    Grammar,
    fence_name_for,
    grammar_for_scope,
    scope_for_fence_name,
)
from vitrina.highlighting import Highlighter, PygmentsHighlighter, set_highlighter
from vitrina.images import ImagePathResolver, ImageReference, resolve_image_paths
from vitrina.project import ProjectRoots
from vitrina.renderer import (
    Renderer,
    render_to_fragment,
    render_to_highlighted_string,
    render_to_string,
)
from vitrina.sanitize import sanitize
from vitrina.versions import ImageVersionTracker
from vitrina.widgets import EditorWidget, EditorWidgetFactory

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Pipeline
    "Renderer",
    "render_to_string",
    "render_to_fragment",
    "render_to_highlighted_string",
    # Value types
    "Document",
    "RenderOptions",
    "RenderResult",
    "RenderTarget",
    "ImageReference",
    "CodeBlock",
    "Grammar",
    # Stages
    "sanitize",
    "ImagePathResolver",
    "resolve_image_paths",
    "tokenize_code_blocks",
    "convert_code_blocks_to_widgets",
    # Compilers
    "DocumentCompiler",
    "MarkdownItCompiler",
    "PandocCompiler",
    # Collaborators
    "ImageVersionTracker",
    "ProjectRoots",
    "Highlighter",
    "PygmentsHighlighter",
    "set_highlighter",
    "EditorWidget",
    "EditorWidgetFactory",
    "fence_name_for",
    "scope_for_fence_name",
    "grammar_for_scope",
    # Configuration (ContextVar-based)
    "HostPaths",
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "VitrinaError",
    "CompilerError",
]
