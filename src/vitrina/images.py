"""Image path resolution for compiled documents.

Rewrites ``img`` sources so the host can load them regardless of where the
preview is displayed:

1. markdown-it output is URL-decoded first (pandoc output already is)
2. remote, data and host-virtual URIs are left alone
3. sources under the host resource root or the package root are left alone
4. absolute paths that do not exist are retried relative to the project root
5. relative paths are resolved against the document's directory
6. unless in copy mode, a ``?v=<token>`` version suffix is appended

Each image is resolved in its own task; a task only ever writes its own
element's ``src``. Resolution failures keep the original reference.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import mdurl
from bs4 import BeautifulSoup, Tag

from vitrina.config import HostPaths
from vitrina.project import ProjectResolver, ProjectRoots
from vitrina.utils.html import parse_fragment
from vitrina.utils.logger import get_logger
from vitrina.versions import ImageVersionTracker, VersionLookup

logger = get_logger(__name__)

REMOTE_SCHEMES = ("http", "https", "data")
DEFAULT_VIRTUAL_SCHEMES = ("vitrina",)


@dataclass(frozen=True, slots=True)
class ImageReference:
    """One image source before and after resolution."""

    raw_src: str
    resolved_src: str
    version: str | None = None

    @property
    def src(self) -> str:
        """Final ``src`` value, with the version suffix when there is one."""
        if self.version:
            return f"{self.resolved_src}?v={self.version}"
        return self.resolved_src


class ImagePathResolver:
    """Resolves ``img`` sources of compiled HTML.

    Args:
        host_paths: Trusted roots computed at startup
        project: Maps documents to project roots
        versions: Version lookup for cache busting
        file_exists: Synchronous existence check for absolute paths
        virtual_schemes: Host URI schemes served without the filesystem
    """

    __slots__ = ("_file_exists", "_host_paths", "_passthrough", "_project", "_versions")

    def __init__(
        self,
        host_paths: HostPaths | None = None,
        project: ProjectResolver | None = None,
        versions: VersionLookup | None = None,
        file_exists: Callable[[str], bool] = os.path.isfile,
        virtual_schemes: Iterable[str] = DEFAULT_VIRTUAL_SCHEMES,
    ) -> None:
        self._host_paths = host_paths or HostPaths()
        self._project = project or ProjectRoots()
        self._versions = versions or ImageVersionTracker()
        self._file_exists = file_exists
        self._passthrough = tuple(
            f"{scheme}:" for scheme in (*REMOTE_SCHEMES, *virtual_schemes)
        )

    def is_passthrough(self, src: str) -> bool:
        """True for sources that are never rewritten."""
        if src.lower().startswith(self._passthrough):
            return True
        return any(src.startswith(root) for root in self._host_paths.trusted_roots)

    def reinterpret_absolute(self, src: str, project_root: str | None) -> str | None:
        """Read a missing absolute path as project-root-relative.

        The joined path is not checked for existence.

        Returns:
            The reinterpreted path, or None to keep ``src``.
        """
        if project_root is None or self._file_exists(src):
            return None
        return os.path.join(project_root, src[1:])

    async def _lookup_version(self, src: str, source_path: str | None) -> str | None:
        try:
            return await self._versions.get_version(src, source_path) or None
        except Exception:
            logger.debug("Version lookup failed for %s", src, exc_info=True)
            return None

    async def resolve_reference(
        self,
        raw_src: str,
        source_path: str | None,
        project_root: str | None,
        *,
        copy_mode: bool = False,
        decode: bool = True,
    ) -> ImageReference | None:
        """Resolve a single image source.

        Args:
            raw_src: The ``src`` attribute as compiled
            source_path: Path of the document, if it has one
            project_root: Project root of the document, if any
            copy_mode: Skip version lookup
            decode: URL-decode ``raw_src`` first (markdown-it output)

        Returns:
            The resolved reference, or None when the source is left as is.
        """
        src = mdurl.decode(raw_src) if decode else raw_src

        if self.is_passthrough(src):
            return None

        if src.startswith("/"):
            reinterpreted = self.reinterpret_absolute(src, project_root)
            if reinterpreted is not None:
                src = reinterpreted
        elif source_path:
            src = os.path.abspath(os.path.join(os.path.dirname(source_path), src))

        version = None
        if not copy_mode:
            version = await self._lookup_version(src, source_path)

        return ImageReference(raw_src=raw_src, resolved_src=src, version=version)

    async def _resolve_element(
        self,
        img: Tag,
        source_path: str | None,
        project_root: str | None,
        copy_mode: bool,
        decode: bool,
    ) -> None:
        raw_src = img.get("src")
        if not raw_src:
            return
        reference = await self.resolve_reference(
            raw_src, source_path, project_root, copy_mode=copy_mode, decode=decode
        )
        if reference is not None:
            img["src"] = reference.src

    async def resolve_tree(
        self,
        tree: BeautifulSoup,
        source_path: str | None,
        *,
        copy_mode: bool = False,
        decode: bool = True,
    ) -> BeautifulSoup:
        """Resolve every image of a tree in place and return the tree."""
        project_root, _ = self._project.relativize(source_path or "")
        if project_root is None and source_path:
            logger.debug("No project root for %s", source_path)

        await asyncio.gather(
            *(
                self._resolve_element(img, source_path, project_root, copy_mode, decode)
                for img in tree.find_all("img")
            )
        )
        return tree

    async def resolve(
        self,
        html: str,
        source_path: str | None,
        *,
        copy_mode: bool = False,
        decode: bool = True,
    ) -> str:
        """Resolve every image source in an HTML fragment.

        Args:
            html: Sanitized HTML
            source_path: Path of the document, if it has one
            copy_mode: Skip version lookup (standalone output)
            decode: URL-decode sources first (markdown-it output)

        Returns:
            HTML with rewritten ``img`` sources.
        """
        tree = parse_fragment(html)
        await self.resolve_tree(tree, source_path, copy_mode=copy_mode, decode=decode)
        return str(tree)


_default_resolver: ImagePathResolver | None = None


def get_default_resolver() -> ImagePathResolver:
    """Return the module-level resolver, creating it on first use.

    Shared so its version tracker sees every lookup and can bump tokens.
    """
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = ImagePathResolver(HostPaths.detect())
    return _default_resolver


async def resolve_image_paths(
    html: str,
    source_path: str | None,
    copy_mode: bool = False,
    *,
    decode: bool = True,
    resolver: ImagePathResolver | None = None,
) -> str:
    """Resolve image sources with ``resolver`` (the shared default if omitted)."""
    resolver = resolver or get_default_resolver()
    return await resolver.resolve(html, source_path, copy_mode=copy_mode, decode=decode)


__all__ = [
    "DEFAULT_VIRTUAL_SCHEMES",
    "REMOTE_SCHEMES",
    "ImagePathResolver",
    "ImageReference",
    "get_default_resolver",
    "resolve_image_paths",
]
