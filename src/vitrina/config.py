"""ContextVar-based render configuration for Vitrina.

The host application owns a configuration store; Vitrina only reads three
values from it. They are captured in an immutable RenderConfig and made
available through a ContextVar, so concurrent renders in different contexts
never see each other's settings.

Usage:
    from vitrina.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(external_backend_enabled=True)):
        html = await renderer.render_to_string(text, path)

Host paths are different: they are computed once at startup and passed to
the Renderer explicitly (see HostPaths).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path

RESOURCE_ROOT_ENV = "VITRINA_RESOURCE_ROOT"


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        external_backend_enabled: Compile with pandoc instead of markdown-it
        native_code_styling: Keep pandoc's own code markup instead of
            re-highlighting code blocks (only meaningful with pandoc)
        editor_font_family: Font family applied to code elements

    """

    external_backend_enabled: bool = False
    native_code_styling: bool = False
    editor_font_family: str | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> RenderConfig:
        """Create RenderConfig from a host configuration mapping.

        Only keys that are RenderConfig field names are used; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "external_backend_enabled": True,
            ...     "theme": "ignored",
            ... })
            >>> config.external_backend_enabled
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


@dataclass(frozen=True, slots=True)
class HostPaths:
    """Trusted, pre-resolved locations that image resolution never rewrites.

    Attributes:
        resource_root: The host application's bundled resource directory
        package_root: Directory the vitrina package is installed in

    """

    resource_root: str | None = None
    package_root: str | None = None

    @classmethod
    def detect(cls, resource_root: str | None = None) -> HostPaths:
        """Compute host paths for this process.

        Call once at startup and pass the result to every Renderer.

        Args:
            resource_root: Host resource directory. Falls back to the
                VITRINA_RESOURCE_ROOT environment variable.

        """
        if resource_root is None:
            resource_root = os.environ.get(RESOURCE_ROOT_ENV) or None
        return cls(
            resource_root=resource_root,
            package_root=str(Path(__file__).resolve().parent),
        )

    @property
    def trusted_roots(self) -> tuple[str, ...]:
        return tuple(root for root in (self.resource_root, self.package_root) if root)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get the render configuration active in this context."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for the current context.

    Args:
        config: RenderConfig instance to use for this context.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the default configuration (module-level singleton)."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: RenderConfig to use within the context.

    Example:
        >>> with render_config_context(RenderConfig(editor_font_family="Fira Code")):
        ...     get_render_config().editor_font_family
        'Fira Code'

    The previous config is restored even if an exception is raised.

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "HostPaths",
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
