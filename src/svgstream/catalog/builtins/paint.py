"""Paint server kinds: LinearGradient, RadialGradient and Stop.

Gradients are definitions: they render once inside <defs> and shapes
reference them by id, e.g. ``"fill": "url(#sky)"``.

Markup Output:
<defs><linearGradient id="sky" x1="0%" y1="0%" x2="0%" y2="100%">
<stop offset="0%" stop-color="#87ceeb"/>
</linearGradient></defs>

"""

from __future__ import annotations

from dataclasses import dataclass

from svgstream.catalog.contracts import GRADIENT_CONTRACT, STOP_CONTRACT
from svgstream.catalog.definition import ElementDefinition
from svgstream.catalog.schema import Number, PropSchema


@dataclass(frozen=True, slots=True)
class LinearGradientProps(PropSchema):
    """Props for LinearGradient. Coordinates are strings such as "0%"."""

    id: str
    x1: str | None = None
    y1: str | None = None
    x2: str | None = None
    y2: str | None = None


@dataclass(frozen=True, slots=True)
class RadialGradientProps(PropSchema):
    """Props for RadialGradient."""

    id: str
    cx: str | None = None
    cy: str | None = None
    r: str | None = None
    fx: str | None = None
    fy: str | None = None


@dataclass(frozen=True, slots=True)
class StopProps(PropSchema):
    """Props for Stop."""

    offset: str
    stop_color: str
    stop_opacity: Number | None = None


LINEAR_GRADIENT = ElementDefinition(
    props_class=LinearGradientProps,
    description="Linear gradient definition. Must have an id. Children should be Stop elements",
    tag="linearGradient",
    has_children=True,
    is_definition=True,
    contract=GRADIENT_CONTRACT,
)

RADIAL_GRADIENT = ElementDefinition(
    props_class=RadialGradientProps,
    description="Radial gradient definition. Must have an id. Children should be Stop elements",
    tag="radialGradient",
    has_children=True,
    is_definition=True,
    contract=GRADIENT_CONTRACT,
)

STOP = ElementDefinition(
    props_class=StopProps,
    description="Gradient stop. Used inside LinearGradient or RadialGradient",
    tag="stop",
    contract=STOP_CONTRACT,
)
