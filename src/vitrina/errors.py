"""Exception classes for Vitrina.

Only compiler failures are fatal to a render. Image resolution and version
lookups degrade to the original reference instead of raising.
"""

from __future__ import annotations


class VitrinaError(Exception):
    """Base exception for all Vitrina errors.

    Subclass this for specific error categories.
    """

    pass


class CompilerError(VitrinaError):
    """A document compiler backend failed to produce HTML.

    The render pipeline aborts before sanitization and this error reaches
    the caller unchanged.
    """

    def __init__(
        self,
        backend: str,
        message: str,
        returncode: int | None = None,
    ) -> None:
        """Initialize compiler error.

        Args:
            backend: Name of the failing backend (e.g., "pandoc")
            message: Error output or description
            returncode: Process exit status for external backends (optional)
        """
        self.backend = backend
        self.message = message
        self.returncode = returncode

        suffix = f" (exit {returncode})" if returncode is not None else ""
        super().__init__(f"{backend}: {message}{suffix}")
