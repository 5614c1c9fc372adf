"""ContextVar-based render configuration for svgstream.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A renderer constructed without an explicit config reads the active one at
render time.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Explicit config on the renderer
    renderer = SvgRenderer(config=RenderConfig(default_width=800))

    # Or scoped via the context manager
    with render_config_context(RenderConfig(id_prefix="preview")):
        markup = render(document)

"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        default_width: Width used when the document has no viewport width
        default_height: Height used when the document has no viewport height
        namespace: xmlns written on the outer <svg> element
        id_prefix: Prefix applied when a render call passes none
        invalid_element_log_level: Level for the log record emitted when an
            element is skipped because its props failed validation

    """

    default_width: int | float = 500
    default_height: int | float = 500
    namespace: str = SVG_NAMESPACE
    id_prefix: str | None = None
    invalid_element_log_level: int = logging.WARNING

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                RenderConfig attribute names.

        Returns:
            New RenderConfig instance with values from dict.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "default_width": 800,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.default_width
            800

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Args:
        config: RenderConfig instance to use for this context.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the module-level default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: RenderConfig to use within the context.

    Yields:
        None

    Example:
        >>> with render_config_context(RenderConfig(default_width=320)):
        ...     markup = render(document)
        >>> # Previous config restored here

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "SVG_NAMESPACE",
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
