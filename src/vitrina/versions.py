"""Version tokens for images referenced by previews.

Appending ``?v=<token>`` to an image URL makes the host reload it after the
file changes. The token for an image starts at ``1`` and increases each time
a lookup observes a different modification time or size.

The tracker also remembers which documents reference each image, so a host
watching the filesystem can tell which previews to refresh.

Example:
    >>> tracker = ImageVersionTracker()
    >>> await tracker.get_version("/proj/fig.png", "/proj/doc.md")
    '1'
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from typing import Protocol

from vitrina.utils.logger import get_logger

logger = get_logger(__name__)


class VersionLookup(Protocol):
    """Supplies cache-busting version tokens for resolved image paths."""

    async def get_version(
        self, image_path: str, source_path: str | None = None
    ) -> str | None:
        """Return a version token, or None when none is available."""
        ...


@dataclass(slots=True)
class _ImageEntry:
    version: int = 0
    signature: tuple[int, int] | None = None
    documents: set[str] = field(default_factory=set)


def _stat_signature(path: str) -> tuple[int, int] | None:
    try:
        stat = os.stat(path)
    except OSError:
        return None
    return stat.st_mtime_ns, stat.st_size


class ImageVersionTracker:
    """In-memory VersionLookup keyed by image path.

    Single event loop only; no locking.
    """

    __slots__ = ("_images",)

    def __init__(self) -> None:
        self._images: dict[str, _ImageEntry] = {}

    async def get_version(
        self, image_path: str, source_path: str | None = None
    ) -> str | None:
        """Return the current version token for an image.

        Args:
            image_path: Resolved image path (no query string)
            source_path: Document referencing the image, recorded for
                documents_for()

        Returns:
            Version token, or None if the image cannot be stat'ed.
        """
        signature = await asyncio.to_thread(_stat_signature, image_path)
        entry = self._images.setdefault(image_path, _ImageEntry())
        if source_path:
            entry.documents.add(source_path)
        if signature is None:
            logger.debug("Image not found for versioning: %s", image_path)
            return None
        if signature != entry.signature:
            entry.signature = signature
            entry.version += 1
        return str(entry.version)

    def documents_for(self, image_path: str) -> frozenset[str]:
        """Documents that referenced ``image_path`` in a previous lookup."""
        entry = self._images.get(image_path)
        return frozenset(entry.documents) if entry else frozenset()

    def forget_document(self, source_path: str) -> None:
        """Drop a closed document, and images no open document references."""
        for image_path in list(self._images):
            entry = self._images[image_path]
            entry.documents.discard(source_path)
            if not entry.documents:
                del self._images[image_path]

    def clear(self) -> None:
        self._images.clear()


__all__ = [
    "ImageVersionTracker",
    "VersionLookup",
]
