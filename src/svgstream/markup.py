"""MarkupBuilder for O(n) SVG string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. Adds small helpers for writing tags so
every serializer quotes and closes elements the same way.

Thread Safety:
MarkupBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable

from svgstream.utils.text import escape_attr


def format_attrs(attrs: Iterable[tuple[str, str]]) -> str:
    """Format attribute pairs as `` name="value"`` with escaped values.

    Example:
        >>> format_attrs([("x", "0"), ("fill", "#fff")])
        ' x="0" fill="#fff"'
    """
    return "".join(f' {name}="{escape_attr(value)}"' for name, value in attrs)


class MarkupBuilder:
    """Efficient markup accumulator.

    Usage:
            >>> mb = MarkupBuilder()
            >>> mb.start_tag("g", [("fill", "red")])
            >>> mb.empty_tag("circle", [("r", "5")])
            >>> mb.end_tag("g")
            >>> mb.build()
            '<g fill="red"><circle r="5"/></g>'

    Thread Safety:
        Instance is local to each render() call.
        No shared mutable state.

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._parts: list[str] = []

    def append(self, s: str) -> MarkupBuilder:
        """Append raw markup (empty strings are skipped).

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def start_tag(self, tag: str, attrs: Iterable[tuple[str, str]] = ()) -> MarkupBuilder:
        """Append an opening tag."""
        self._parts.append(f"<{tag}{format_attrs(attrs)}>")
        return self

    def end_tag(self, tag: str) -> MarkupBuilder:
        """Append a closing tag."""
        self._parts.append(f"</{tag}>")
        return self

    def empty_tag(self, tag: str, attrs: Iterable[tuple[str, str]] = ()) -> MarkupBuilder:
        """Append a self-closing tag."""
        self._parts.append(f"<{tag}{format_attrs(attrs)}/>")
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)
