"""DocumentRenderer protocol: stable interface for document renderers.

Any renderer that implements ``render(document) -> str`` conforms to this
protocol. The built-in ``SvgRenderer`` is the reference implementation.

Example:
    from svgstream.renderers.protocol import DocumentRenderer

    def preview(renderer: DocumentRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from svgstream.document import Document


class DocumentRenderer(Protocol):
    """Protocol for document renderers.

    Implementations must accept a Document and return a rendered string.

    """

    def render(self, document: Document) -> str:
        """Render a Document to a string.

        Args:
            document: The document snapshot to render.

        Returns:
            Rendered string output.

        """
        ...
