"""Basic shape kinds: Rect, Circle, Ellipse, Line, Path, Polyline, Polygon.

Geometry props are required and accept numbers or numeric strings. Paint
props are optional strings, except stroke width which is numeric.

Markup Output:
<rect x="0" y="0" width="500" height="500" fill="#f0f0f0"/>

"""

from __future__ import annotations

from dataclasses import dataclass

from svgstream.catalog.definition import ElementDefinition
from svgstream.catalog.schema import Number, PropSchema


@dataclass(frozen=True, slots=True)
class RectProps(PropSchema):
    """Props for Rect."""

    x: Number
    y: Number
    width: Number
    height: Number
    fill: str | None = None
    stroke: str | None = None
    stroke_width: Number | None = None
    rx: Number | None = None
    """Corner radius along x."""

    ry: Number | None = None
    """Corner radius along y."""


@dataclass(frozen=True, slots=True)
class CircleProps(PropSchema):
    """Props for Circle."""

    cx: Number
    cy: Number
    r: Number
    fill: str | None = None
    stroke: str | None = None
    stroke_width: Number | None = None


@dataclass(frozen=True, slots=True)
class EllipseProps(PropSchema):
    """Props for Ellipse."""

    cx: Number
    cy: Number
    rx: Number
    ry: Number
    fill: str | None = None
    stroke: str | None = None
    stroke_width: Number | None = None


@dataclass(frozen=True, slots=True)
class LineProps(PropSchema):
    """Props for Line. Lines have no fill."""

    x1: Number
    y1: Number
    x2: Number
    y2: Number
    stroke: str | None = None
    stroke_width: Number | None = None
    stroke_dasharray: str | None = None


@dataclass(frozen=True, slots=True)
class PathProps(PropSchema):
    """Props for Path."""

    d: str
    """Path data, e.g. "M 10 10 L 90 90"."""

    fill: str | None = None
    stroke: str | None = None
    stroke_width: Number | None = None


@dataclass(frozen=True, slots=True)
class PointsProps(PropSchema):
    """Props shared by Polyline and Polygon."""

    points: str
    """Whitespace/comma separated coordinate pairs."""

    fill: str | None = None
    stroke: str | None = None
    stroke_width: Number | None = None


RECT = ElementDefinition(props_class=RectProps, description="Rectangle", tag="rect")
CIRCLE = ElementDefinition(props_class=CircleProps, description="Circle", tag="circle")
ELLIPSE = ElementDefinition(props_class=EllipseProps, description="Ellipse", tag="ellipse")
LINE = ElementDefinition(props_class=LineProps, description="Line", tag="line")
PATH = ElementDefinition(props_class=PathProps, description="Path", tag="path")
POLYLINE = ElementDefinition(props_class=PointsProps, description="Polyline", tag="polyline")
POLYGON = ElementDefinition(props_class=PointsProps, description="Polygon", tag="polygon")
