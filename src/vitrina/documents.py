"""Value types passed into and out of the Renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bs4 import BeautifulSoup


@dataclass(frozen=True, slots=True)
class Document:
    """Document source and, when it has one, its backing file.

    Attributes:
        source_text: Markdown source (None is an empty document)
        source_path: Anchors relative image paths; None for unsaved buffers
    """

    source_text: str | None
    source_path: str | None = None


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Per-call render options.

    Attributes:
        render_math: Keep math markup as ``math/tex`` scripts
        copy_mode: Output will be embedded standalone; skip image versions
        use_external_compiler: Force the backend choice; None reads it from
            the active RenderConfig
    """

    render_math: bool = False
    copy_mode: bool = False
    use_external_compiler: bool | None = None


class RenderTarget(Enum):
    """Renderer entry point that produced a RenderResult."""

    STRING = "string"
    FRAGMENT = "fragment"
    HIGHLIGHTED = "highlighted"


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Output of Renderer.render, tagged by entry point.

    ``fragment`` is set only for RenderTarget.FRAGMENT; ``html`` is always
    the serialized output.
    """

    target: RenderTarget
    html: str
    fragment: BeautifulSoup | None = None


__all__ = [
    "Document",
    "RenderOptions",
    "RenderResult",
    "RenderTarget",
]
