"""
svgstream: Streaming SVG patch compiler for generated graphics

Compiles a newline-delimited stream of JSON patches, as produced token by
token by a text generator, into a live document, and renders any snapshot of
that document to SVG. Malformed lines and invalid elements are dropped, never
raised, so every intermediate state renders. Zero runtime dependencies.

Quick Start:
    >>> from svgstream import PatchCompiler, render
    >>> compiler = PatchCompiler()
    >>> doc, patches = compiler.push('{"op":"add","path":"/root","value":"bg"}\\n')
    >>> doc, patches = compiler.push(
    ...     '{"op":"add","path":"/elements/bg","value":{"kind":"Rect",'
    ...     '"props":{"x":0,"y":0,"width":500,"height":500,"fill":"#f0f0f0"}}}\\n'
    ... )
    >>> print(render(doc))
    <svg xmlns="http://www.w3.org/2000/svg" width="500" height="500" viewBox="0 0 500 500"><rect x="0" y="0" width="500" height="500" fill="#f0f0f0"/></svg>

    >>> # Or use the high-level SvgStream class
    >>> from svgstream import SvgStream
    >>> stream = SvgStream()
    >>> for chunk in chunks:
    ...     preview = stream.feed(chunk)
    >>> final = stream.finish()

Custom Element Kinds:
    >>> from svgstream import SvgStream, create_catalog_with_defaults
    >>>
    >>> # Extend defaults with your own kinds
    >>> builder = create_catalog_with_defaults()
    >>> builder.register("Star", STAR)
    >>> stream = SvgStream(catalog=builder.build())

Generator Instructions:
    >>> from svgstream import build_prompt, create_default_catalog
    >>> prompt = build_prompt(create_default_catalog())

Installation:
    pip install svgstream            # Compiler, catalog and renderer (zero deps)
    pip install svgstream[test]      # + pytest and hypothesis for the test suite
"""

from svgstream.catalog import (
    Catalog,
    CatalogBuilder,
    ContainmentViolation,
    DocumentValidation,
    ElementContract,
    ElementDefinition,
    Number,
    PropSchema,
    PropValidation,
    create_catalog_with_defaults,
    create_default_catalog,
)
from svgstream.compiler import (
    CompileResult,
    Patch,
    PatchCompiler,
    compile_text,
    parse_patch,
    replay,
)
from svgstream.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from svgstream.document import Document, Element, Viewport
from svgstream.errors import CatalogError, PatchError, SvgStreamError
from svgstream.prompt import build_prompt
from svgstream.renderers.protocol import DocumentRenderer
from svgstream.renderers.svg import RenderDiagnostic, SvgRenderer
from svgstream.serialization import from_dict, from_json, to_dict, to_json

__version__ = "0.1.0"


def render(
    document: Document,
    catalog: Catalog | None = None,
    *,
    id_prefix: str | None = None,
) -> str:
    """Render a Document to SVG.

    Args:
        document: Document snapshot, possibly incomplete
        catalog: Element catalog (uses defaults if None)
        id_prefix: Scope for ids and ``url(#...)`` references

    Returns:
        SVG string

    Example:
        >>> doc = compile_text(raw_jsonl)
        >>> svg = render(doc, id_prefix="card-1")
    """
    renderer = SvgRenderer(catalog)
    return renderer.render(document, id_prefix=id_prefix)


class SvgStream:
    """High-level stream processor combining compiler and renderer.

    Usage:
        >>> stream = SvgStream(id_prefix="preview")
        >>> markup = stream.feed('{"op":"add","path":"/root","value":"g"}\\n')
        >>> markup = stream.feed(more_text)
        >>> final = stream.finish()
        >>> stream.document.root
        'g'
        >>> frames = list(replay(stream.raw_text))

    Thread Safety:
        One instance follows one stream. Use a separate instance per stream.

    """

    __slots__ = ("_chunks", "_compiler", "_document", "_id_prefix", "_renderer")

    def __init__(
        self,
        *,
        catalog: Catalog | None = None,
        id_prefix: str | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize stream processor.

        Args:
            catalog: Element catalog (uses defaults if None)
            id_prefix: Scope applied to every render of this stream
            config: Fixed render configuration (active ContextVar config if None)
        """
        self._compiler = PatchCompiler()
        self._renderer = SvgRenderer(catalog, config=config)
        self._id_prefix = id_prefix
        self._document = Document()
        self._chunks: list[str] = []

    def feed(self, chunk: str) -> str:
        """Push a chunk of stream text and return the fresh markup."""
        self._chunks.append(chunk)
        self._document = self._compiler.push(chunk).document
        return self.markup

    def finish(self) -> str:
        """Process the trailing unterminated line and return the final markup."""
        self._document = self._compiler.flush().document
        return self.markup

    def reset(self) -> None:
        """Start over with an empty document."""
        self._compiler.reset()
        self._document = Document()
        self._chunks = []

    @property
    def document(self) -> Document:
        """Latest document snapshot."""
        return self._document

    @property
    def raw_text(self) -> str:
        """Every chunk fed since creation or the last reset, for ``replay``."""
        return "".join(self._chunks)

    @property
    def markup(self) -> str:
        """SVG for the latest document snapshot."""
        return self._renderer.render(self._document, id_prefix=self._id_prefix)

    @property
    def diagnostics(self) -> list[RenderDiagnostic]:
        """Elements skipped by the most recent render."""
        return self._renderer.get_diagnostics()

    def validate(self, *, check_containment: bool = False) -> DocumentValidation:
        """Strictly validate the latest snapshot against the catalog."""
        return self._renderer.catalog.validate_document(
            self._document, check_containment=check_containment
        )


__all__ = [
    # Main API
    "SvgStream",
    "compile_text",
    "render",
    "replay",
    # Compiler
    "CompileResult",
    "Patch",
    "PatchCompiler",
    "parse_patch",
    # Document model
    "Document",
    "Element",
    "Viewport",
    # Catalog
    "Catalog",
    "CatalogBuilder",
    "ContainmentViolation",
    "DocumentValidation",
    "ElementContract",
    "ElementDefinition",
    "Number",
    "PropSchema",
    "PropValidation",
    "create_catalog_with_defaults",
    "create_default_catalog",
    # Prompt
    "build_prompt",
    # Renderers
    "DocumentRenderer",
    "RenderDiagnostic",
    "SvgRenderer",
    # Configuration
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Errors
    "CatalogError",
    "PatchError",
    "SvgStreamError",
]
