"""Exception classes for svgstream.

Most failure modes in svgstream are expected outcomes of streaming from an
unreliable generator and are reported as results, not exceptions. The
classes here cover the few places that do raise.
"""

from __future__ import annotations


class SvgStreamError(Exception):
    """Base exception for all svgstream errors.
    
    Subclass this for specific error categories.
    """

    pass


class PatchError(SvgStreamError):
    """A line of the patch stream could not be read as a patch.

    Raised by ``parse_patch`` and ``PatchCompiler.apply``. The compiler
    catches it for stream lines and drops them, so it never escapes
    ``PatchCompiler.push``.
    """

    def __init__(self, message: str, line: str | None = None) -> None:
        """Initialize patch error.
        
        Args:
            message: What was wrong with the line
            line: The offending raw line (optional, truncated in the message)
        """
        self.line = line

        excerpt = ""
        if line is not None:
            shown = line if len(line) <= 60 else f"{line[:57]}..."
            excerpt = f": {shown!r}"
        super().__init__(f"{message}{excerpt}")


class CatalogError(SvgStreamError, ValueError):
    """Invalid catalog construction.

    Raised while building a catalog, e.g. when a kind is registered twice.
    A built catalog never raises this.
    """

    def __init__(self, kind: str, message: str) -> None:
        """Initialize catalog error.
        
        Args:
            kind: Element kind being registered
            message: Description of the problem
        """
        self.kind = kind
        super().__init__(f"Element kind '{kind}': {message}")
