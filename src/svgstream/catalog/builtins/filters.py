"""Filter kinds: Filter and its primitives.

A Filter is a definition referenced by id (``"filter": "url(#shadow)"``);
its children are primitives such as FeGaussianBlur.

"""

from __future__ import annotations

from dataclasses import dataclass

from svgstream.catalog.contracts import FILTER_CONTRACT, FILTER_PRIMITIVE_CONTRACT
from svgstream.catalog.definition import ElementDefinition
from svgstream.catalog.schema import Number, PropSchema


@dataclass(frozen=True, slots=True)
class FilterProps(PropSchema):
    """Props for Filter. Region bounds are strings such as "-10%"."""

    id: str
    x: str | None = None
    y: str | None = None
    width: str | None = None
    height: str | None = None


@dataclass(frozen=True, slots=True)
class GaussianBlurProps(PropSchema):
    """Props for FeGaussianBlur."""

    std_deviation: Number
    in_: str | None = None
    """Input, e.g. "SourceGraphic". Wire name ``in``."""

    result: str | None = None


@dataclass(frozen=True, slots=True)
class DropShadowProps(PropSchema):
    """Props for FeDropShadow. All optional."""

    dx: Number | None = None
    dy: Number | None = None
    std_deviation: Number | None = None
    flood_color: str | None = None
    flood_opacity: Number | None = None


FILTER = ElementDefinition(
    props_class=FilterProps,
    description="Filter definition. Must have an id. Children should be filter primitives like FeGaussianBlur",
    tag="filter",
    has_children=True,
    is_definition=True,
    contract=FILTER_CONTRACT,
)

FE_GAUSSIAN_BLUR = ElementDefinition(
    props_class=GaussianBlurProps,
    description="Gaussian blur filter primitive",
    tag="feGaussianBlur",
    contract=FILTER_PRIMITIVE_CONTRACT,
)

FE_DROP_SHADOW = ElementDefinition(
    props_class=DropShadowProps,
    description="Drop shadow filter primitive",
    tag="feDropShadow",
    contract=FILTER_PRIMITIVE_CONTRACT,
)
