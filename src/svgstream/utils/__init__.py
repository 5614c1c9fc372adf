"""Utility modules for svgstream.

Provides:
- text: camel_to_kebab, escaping and id scoping helpers
- logger: get_logger for logging
"""

from svgstream.utils.logger import get_logger
from svgstream.utils.text import (
    camel_to_kebab,
    escape_attr,
    escape_text,
    format_value,
    prefix_id,
    prefix_url_refs,
    snake_to_camel,
)

__all__ = [
    "camel_to_kebab",
    "escape_attr",
    "escape_text",
    "format_value",
    "get_logger",
    "prefix_id",
    "prefix_url_refs",
    "snake_to_camel",
]
