"""Text processing utilities for svgstream.

Canonical implementations of the small string transforms the renderer
applies to prop names and values.

Example:
    >>> from svgstream.utils.text import camel_to_kebab
    >>> camel_to_kebab("strokeWidth")
    'stroke-width'
"""

from __future__ import annotations

import html as html_module
import math
import re
from typing import Any

_UPPER = re.compile(r"[A-Z]")
_URL_REF = re.compile(r"url\(#([^)\s]+)\)")


def camel_to_kebab(name: str) -> str:
    """Convert a camelCase prop name to a hyphenated attribute name.

    Every uppercase letter becomes ``-`` plus its lowercase form.

    Examples:
        >>> camel_to_kebab("strokeDasharray")
        'stroke-dasharray'
        >>> camel_to_kebab("fill")
        'fill'
    """
    return _UPPER.sub(lambda m: f"-{m.group(0).lower()}", name)


def snake_to_camel(name: str) -> str:
    """Convert a snake_case field name to its camelCase wire name.

    A trailing underscore (used to dodge Python keywords) is dropped.

    Examples:
        >>> snake_to_camel("stroke_width")
        'strokeWidth'
        >>> snake_to_camel("in_")
        'in'
        >>> snake_to_camel("x1")
        'x1'
    """
    head, *rest = name.rstrip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def format_value(value: Any) -> str:
    """Convert a validated prop value to its markup string form.

    Integral floats drop the trailing ``.0`` and booleans are lowercased,
    so ``500.0`` and ``500`` serialize identically.

    Examples:
        >>> format_value(500.0)
        '500'
        >>> format_value(1.5)
        '1.5'
        >>> format_value(True)
        'true'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_attr(text: str) -> str:
    """Escape text for use inside a double-quoted attribute value.

    Examples:
        >>> escape_attr('a "b" & <c>')
        'a &quot;b&quot; &amp; &lt;c&gt;'
    """
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def escape_text(text: str) -> str:
    """Escape text for use as element content.

    Examples:
        >>> escape_text("1 < 2")
        '1 &lt; 2'
    """
    return html_module.escape(text, quote=False)


def prefix_id(value: str, prefix: str) -> str:
    """Scope an identifier with a prefix.

    Examples:
        >>> prefix_id("grad1", "a1")
        'a1-grad1'
    """
    return f"{prefix}-{value}"


def prefix_url_refs(value: str, prefix: str) -> str:
    """Scope every ``url(#ref)`` reference inside an attribute value.

    Examples:
        >>> prefix_url_refs("url(#grad1)", "a1")
        'url(#a1-grad1)'
        >>> prefix_url_refs("#ff0000", "a1")
        '#ff0000'
    """
    if "url(#" not in value:
        return value
    return _URL_REF.sub(lambda m: f"url(#{prefix_id(m.group(1), prefix)})", value)
