"""Document serialization: JSON round-trip for svgstream documents.

Converts documents to/from JSON-compatible dicts using the wire field names
(``kind``, ``viewBox``, ``parentKey``), so a persisted document can be fed
back as ``/elements/<key>`` patch values. Useful for:
- Persisting a final, validated document
- Comparing snapshots in tests
- Debugging and inspection

All JSON output is deterministic (sorted keys).

Example:
    from svgstream import compile_text
    from svgstream.serialization import to_json, from_json

    doc = compile_text(raw_jsonl)
    restored = from_json(to_json(doc))
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import copy
import json
from typing import Any

from svgstream.document import Document, Element, Viewport


def element_to_dict(element: Element) -> dict[str, Any]:
    """Convert an element to its wire mapping."""
    result: dict[str, Any] = {
        "key": element.key,
        "kind": element.kind,
        "props": copy.deepcopy(element.props),
    }
    if element.children:
        result["children"] = list(element.children)
    if element.parent_key is not None:
        result["parentKey"] = element.parent_key
    return result


def viewport_to_dict(viewport: Viewport) -> dict[str, Any]:
    """Convert a viewport to its wire mapping, omitting absent fields."""
    result: dict[str, Any] = {}
    if viewport.width is not None:
        result["width"] = viewport.width
    if viewport.height is not None:
        result["height"] = viewport.height
    if viewport.view_box is not None:
        result["viewBox"] = viewport.view_box
    return result


def to_dict(doc: Document) -> dict[str, Any]:
    """Convert a document to a JSON-compatible dict.

    Absent ``root`` and ``viewport`` are omitted rather than written as null.

    Args:
        doc: Document to convert.

    Returns:
        Dict with ``elements`` and, when set, ``root`` and ``viewport``.

    """
    result: dict[str, Any] = {
        "elements": {key: element_to_dict(el) for key, el in doc.elements.items()},
    }
    if doc.root is not None:
        result["root"] = doc.root
    if doc.viewport is not None:
        result["viewport"] = viewport_to_dict(doc.viewport)
    return result


def from_dict(data: dict[str, Any]) -> Document:
    """Reconstruct a document from a dict.

    Tolerates the same shapes the compiler tolerates: missing sections and
    non-mapping element values are skipped, not rejected.

    Raises:
        ValueError: If data is not a mapping.

    """
    if not isinstance(data, dict):
        msg = f"Expected a mapping, got {type(data).__name__}"
        raise ValueError(msg)

    elements = data.get("elements")
    if not isinstance(elements, dict):
        elements = {}
    return Document.from_raw(
        data.get("root"),
        data.get("viewport"),
        copy.deepcopy(elements),
    )


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a document to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a document from a JSON string.

    Raises:
        ValueError: If the text is not JSON or not a JSON object.

    """
    return from_dict(json.loads(data))
