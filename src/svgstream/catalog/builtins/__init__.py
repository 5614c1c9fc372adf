"""Built-in element kinds.

Provides the SVG vocabulary out of the box:
- Shapes: Rect, Circle, Ellipse, Line, Path, Polyline, Polygon
- Text: Text, TSpan, Title
- Structure: Group
- Paint servers: LinearGradient, RadialGradient, Stop
- Filters: Filter, FeGaussianBlur, FeDropShadow

"""

from __future__ import annotations

from svgstream.catalog.builtins.filters import (
    FE_DROP_SHADOW,
    FE_GAUSSIAN_BLUR,
    FILTER,
    DropShadowProps,
    FilterProps,
    GaussianBlurProps,
)
from svgstream.catalog.builtins.paint import (
    LINEAR_GRADIENT,
    RADIAL_GRADIENT,
    STOP,
    LinearGradientProps,
    RadialGradientProps,
    StopProps,
)
from svgstream.catalog.builtins.shapes import (
    CIRCLE,
    ELLIPSE,
    LINE,
    PATH,
    POLYGON,
    POLYLINE,
    RECT,
    CircleProps,
    EllipseProps,
    LineProps,
    PathProps,
    PointsProps,
    RectProps,
)
from svgstream.catalog.builtins.structure import GROUP, GroupProps
from svgstream.catalog.builtins.text import (
    TEXT,
    TITLE,
    TSPAN,
    TextProps,
    TitleProps,
    TSpanProps,
)
from svgstream.catalog.definition import ElementDefinition

# Registration order is manifest order
BUILTIN_DEFINITIONS: dict[str, ElementDefinition] = {
    "Rect": RECT,
    "Circle": CIRCLE,
    "Ellipse": ELLIPSE,
    "Line": LINE,
    "Path": PATH,
    "Polyline": POLYLINE,
    "Polygon": POLYGON,
    "Text": TEXT,
    "TSpan": TSPAN,
    "Title": TITLE,
    "Group": GROUP,
    "LinearGradient": LINEAR_GRADIENT,
    "RadialGradient": RADIAL_GRADIENT,
    "Stop": STOP,
    "Filter": FILTER,
    "FeGaussianBlur": FE_GAUSSIAN_BLUR,
    "FeDropShadow": FE_DROP_SHADOW,
}

__all__ = [
    "BUILTIN_DEFINITIONS",
    # Shapes
    "CIRCLE",
    "ELLIPSE",
    "LINE",
    "PATH",
    "POLYGON",
    "POLYLINE",
    "RECT",
    "CircleProps",
    "EllipseProps",
    "LineProps",
    "PathProps",
    "PointsProps",
    "RectProps",
    # Text
    "TEXT",
    "TITLE",
    "TSPAN",
    "TextProps",
    "TitleProps",
    "TSpanProps",
    # Structure
    "GROUP",
    "GroupProps",
    # Paint servers
    "LINEAR_GRADIENT",
    "RADIAL_GRADIENT",
    "STOP",
    "LinearGradientProps",
    "RadialGradientProps",
    "StopProps",
    # Filters
    "FE_DROP_SHADOW",
    "FE_GAUSSIAN_BLUR",
    "FILTER",
    "DropShadowProps",
    "FilterProps",
    "GaussianBlurProps",
]
