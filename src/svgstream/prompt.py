"""Generator instructions built from a catalog.

The catalog manifest tells a text generator which element kinds exist; this
module wraps it with the wire-format rules so the generator emits patch
lines the compiler can read. Sending the prompt anywhere is the caller's
business.

Example:
    >>> from svgstream import create_default_catalog
    >>> from svgstream.prompt import build_prompt
    >>> text = build_prompt(create_default_catalog(), custom_rules=["Use pastel colors."])

Thread Safety:
    ``build_prompt`` is a pure function.

"""

from collections.abc import Sequence

from svgstream.catalog.registry import Catalog

DEFAULT_SYSTEM_PROMPT = "You are an expert SVG designer. The user will ask you to draw something."

DEFAULT_CUSTOM_RULES: tuple[str, ...] = (
    "Use a 500x500 viewport by default.",
    "Group related elements using the Group kind.",
    "Always provide a root element.",
    "Do NOT use markdown code blocks. Output raw JSONL.",
)

WIRE_FORMAT = """\
You must output the drawing as a sequence of JSON objects, one per line (JSONL format). Each JSON object is a patch to the SVG document.
Do not include any markdown formatting or extra text. Output ONLY valid JSONL.

JSON schema for each line:
{"op": "add", "path": "/root", "value": "rootElementKey"}
{"op": "add", "path": "/viewport", "value": {"width": 500, "height": 500}}
{"op": "add", "path": "/elements/elementKey", "value": {"key": "elementKey", "kind": "ElementKind", "props": {...}, "children": ["childKey1"]}}
{"op": "replace", "path": "/elements/elementKey/props/fill", "value": "#ff0000"}"""

EXAMPLE = """\
{"op":"add","path":"/viewport","value":{"width":500,"height":500}}
{"op":"add","path":"/root","value":"group1"}
{"op":"add","path":"/elements/bg","value":{"key":"bg","kind":"Rect","props":{"x":0,"y":0,"width":500,"height":500,"fill":"#f0f0f0"}}}
{"op":"add","path":"/elements/circle1","value":{"key":"circle1","kind":"Circle","props":{"cx":250,"cy":250,"r":100,"fill":"#ff0000"}}}
{"op":"add","path":"/elements/group1","value":{"key":"group1","kind":"Group","props":{},"children":["bg","circle1"]}}"""


def build_prompt(
    catalog: Catalog,
    *,
    system: str | None = None,
    custom_rules: Sequence[str] | None = None,
) -> str:
    """Build generator instructions for a catalog.

    Args:
        catalog: Catalog whose manifest lists the allowed kinds
        system: Opening system line (DEFAULT_SYSTEM_PROMPT if None)
        custom_rules: Extra rules rendered as bullets (DEFAULT_CUSTOM_RULES
            if None; pass an empty sequence for none)

    Returns:
        The full prompt text. Deterministic for the same inputs.
    """
    rules = DEFAULT_CUSTOM_RULES if custom_rules is None else custom_rules
    sections = [system or DEFAULT_SYSTEM_PROMPT]
    if rules:
        sections.append("\n".join(f"- {rule}" for rule in rules))
    sections.append(f"Available elements:\n{catalog.describe()}")
    sections.append(WIRE_FORMAT)
    sections.append(f"Example:\n{EXAMPLE}")
    return "\n\n".join(sections)


__all__ = ["DEFAULT_CUSTOM_RULES", "DEFAULT_SYSTEM_PROMPT", "build_prompt"]
