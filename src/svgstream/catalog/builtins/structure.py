"""Structural kinds: Group."""

from __future__ import annotations

from dataclasses import dataclass

from svgstream.catalog.definition import ElementDefinition
from svgstream.catalog.schema import Number, PropSchema


@dataclass(frozen=True, slots=True)
class GroupProps(PropSchema):
    """Props for Group. Paint props are inherited by children."""

    transform: str | None = None
    fill: str | None = None
    stroke: str | None = None
    stroke_width: Number | None = None
    opacity: Number | None = None
    filter: str | None = None
    """Filter reference, e.g. "url(#shadow)"."""


GROUP = ElementDefinition(
    props_class=GroupProps,
    description="Group container for multiple elements",
    tag="g",
    has_children=True,
)
