"""Text-bearing kinds: Text, TSpan and Title.

Text and TSpan use generic serialization with ``text_bearing`` set, so
their ``text`` prop becomes element content rather than an attribute.
Title has a custom serializer: it only ever emits its text.

Example:
    {"kind": "Text", "props": {"x": 10, "y": 20, "text": "Hi", "fontSize": 14}}
    -> <text x="10" y="20" font-size="14">Hi</text>

"""

from __future__ import annotations

from dataclasses import dataclass

from svgstream.catalog.contracts import TSPAN_CONTRACT
from svgstream.catalog.definition import ElementDefinition
from svgstream.catalog.schema import Number, PropSchema
from svgstream.utils.text import escape_text


@dataclass(frozen=True, slots=True)
class TextProps(PropSchema):
    """Props for Text."""

    x: Number
    y: Number
    text: str
    font_size: Number | None = None
    fill: str | None = None
    font_family: str | None = None
    text_anchor: str | None = None
    """start, middle or end."""


@dataclass(frozen=True, slots=True)
class TSpanProps(PropSchema):
    """Props for TSpan. Position is optional and relative offsets allowed."""

    text: str
    x: Number | None = None
    y: Number | None = None
    dx: Number | None = None
    dy: Number | None = None
    font_size: Number | None = None
    font_weight: Number | None = None
    fill: str | None = None


@dataclass(frozen=True, slots=True)
class TitleProps(PropSchema):
    """Props for Title."""

    text: str


def render_title(props: TitleProps, children: str) -> str:
    """Render a Title element. Children are ignored."""
    return f"<title>{escape_text(props.text)}</title>"


TEXT = ElementDefinition(
    props_class=TextProps,
    description="Text",
    tag="text",
    has_children=True,
    text_bearing=True,
)

TSPAN = ElementDefinition(
    props_class=TSpanProps,
    description="Text span inside a Text element, for mixed styling",
    tag="tspan",
    text_bearing=True,
    contract=TSPAN_CONTRACT,
)

TITLE = ElementDefinition(
    props_class=TitleProps,
    description="Accessible title for the drawing or the enclosing element",
    tag="title",
    serializer=render_title,
)
