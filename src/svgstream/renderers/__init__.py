"""svgstream renderers.

Renderers convert Document snapshots into output formats.

Available Renderers:
- SvgRenderer: Renders a Document to SVG markup using the MarkupBuilder pattern

Thread Safety:
All renderers use a MarkupBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from svgstream.renderers.protocol import DocumentRenderer
from svgstream.renderers.svg import RenderContext, RenderDiagnostic, SvgRenderer

__all__ = ["DocumentRenderer", "RenderContext", "RenderDiagnostic", "SvgRenderer"]
