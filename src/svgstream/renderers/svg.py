"""SVG renderer using the MarkupBuilder pattern.

Renders a (possibly partial) Document to SVG markup, checking every element
against a Catalog.

Render passes:
1. Definitions: every element of a definition kind (gradients, filters) is
   rendered into <defs>, whether or not anything references it yet.
2. Visible tree: the declared root if it is present; otherwise every
   top-level non-definition element, so a live preview shows something
   before the root patch arrives.

Failure isolation:
An element whose props fail validation is skipped along with its subtree.
Siblings and ancestors render normally. Missing keys and unregistered kinds
render as nothing.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single SvgRenderer instance
and call render() concurrently without synchronization.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from svgstream.catalog.registry import create_default_catalog
from svgstream.config import RenderConfig, get_render_config
from svgstream.markup import MarkupBuilder
from svgstream.utils.logger import get_logger
from svgstream.utils.text import (
    camel_to_kebab,
    escape_text,
    format_value,
    prefix_id,
    prefix_url_refs,
)

if TYPE_CHECKING:
    from svgstream.catalog.definition import ElementDefinition
    from svgstream.catalog.registry import Catalog
    from svgstream.catalog.schema import PropSchema
    from svgstream.document import Document, Element

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderDiagnostic:
    """An element left out of the output, and why."""

    key: str
    kind: str
    reason: str


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    SvgRenderer instances across threads.
    """

    document: Document
    id_prefix: str | None
    log_level: int
    diagnostics: list[RenderDiagnostic] = field(default_factory=list)
    path: set[str] = field(default_factory=set)

    def skip(self, element: Element, reason: str, level: int) -> str:
        """Record why an element was left out. Returns empty markup."""
        self.diagnostics.append(RenderDiagnostic(element.key, element.kind, reason))
        logger.log(level, "[svg render] Skipping %s (%s): %s", element.kind, element.key, reason)
        return ""


class SvgRenderer:
    """Render a Document to SVG markup.

    Usage:
        >>> renderer = SvgRenderer(create_default_catalog())
        >>> svg = renderer.render(document)
        >>> scoped = renderer.render(document, id_prefix="card-3")

    Thread Safety:
        Each render() call creates an independent RenderContext.
        Only get_diagnostics() reads state left by the last call.
    """

    __slots__ = ("_catalog", "_config", "_last_context")

    def __init__(
        self,
        catalog: Catalog | None = None,
        *,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            catalog: Element catalog (the default catalog if None)
            config: Fixed configuration; if None the active ContextVar
                config is read on every render
        """
        self._catalog = catalog if catalog is not None else create_default_catalog()
        self._config = config
        self._last_context: RenderContext | None = None

    @property
    def catalog(self) -> Catalog:
        """The catalog elements are checked against."""
        return self._catalog

    def render(self, document: Document, *, id_prefix: str | None = None) -> str:
        """Render a document to an SVG string.

        Args:
            document: Document snapshot, possibly incomplete
            id_prefix: Scope for ``id`` attributes and ``url(#...)``
                references, so several renders on one page do not collide

        Returns:
            A single <svg> element
        """
        config = self._config or get_render_config()
        ctx = RenderContext(
            document=document,
            id_prefix=id_prefix if id_prefix is not None else config.id_prefix,
            log_level=config.invalid_element_log_level,
        )

        viewport = document.viewport
        width = (viewport and viewport.width) or config.default_width
        height = (viewport and viewport.height) or config.default_height
        view_box = (viewport and viewport.view_box) or (
            f"0 0 {format_value(width)} {format_value(height)}"
        )

        sb = MarkupBuilder()
        sb.start_tag(
            "svg",
            [
                ("xmlns", config.namespace),
                ("width", format_value(width)),
                ("height", format_value(height)),
                ("viewBox", view_box),
            ],
        )

        defs = self._render_definitions(ctx)
        if defs:
            sb.append("<defs>").append(defs).append("</defs>")

        sb.append(self._render_visible(ctx))
        sb.end_tag("svg")

        self._last_context = ctx
        return sb.build()

    def get_diagnostics(self) -> list[RenderDiagnostic]:
        """Elements skipped during the last render() call, in render order."""
        if self._last_context is None:
            return []
        return self._last_context.diagnostics.copy()

    # =========================================================================
    # Passes
    # =========================================================================

    def _render_definitions(self, ctx: RenderContext) -> str:
        parts = [
            self._render_element(key, ctx, defs_context=True)
            for key, element in ctx.document.elements.items()
            if self._is_definition(element.kind)
        ]
        return "".join(parts)

    def _render_visible(self, ctx: RenderContext) -> str:
        document = ctx.document
        if document.root and document.root in document.elements:
            return self._render_element(document.root, ctx, defs_context=False)

        # No usable root yet: show every top-level element
        return "".join(
            self._render_element(key, ctx, defs_context=False)
            for key in document.top_level_keys()
            if not self._is_definition(document.elements[key].kind)
        )

    def _is_definition(self, kind: str) -> bool:
        definition = self._catalog.lookup(kind)
        return definition is not None and definition.is_definition

    # =========================================================================
    # Elements
    # =========================================================================

    def _render_element(self, key: str, ctx: RenderContext, *, defs_context: bool) -> str:
        element = ctx.document.get(key)
        if element is None:
            return ""

        definition = self._catalog.lookup(element.kind)
        if definition is None:
            return ctx.skip(element, f"Unknown element kind: {element.kind!r}", logging.DEBUG)

        if definition.is_definition and not defs_context:
            # Already emitted inside <defs>
            return ""

        if key in ctx.path:
            return ctx.skip(element, "Element contains itself", ctx.log_level)

        validation = self._catalog.validate_props(element.kind, element.props)
        if not validation.ok or validation.props is None:
            return ctx.skip(element, f"Invalid props: {validation.reason}", ctx.log_level)

        ctx.path.add(key)
        try:
            children = "".join(
                self._render_element(child, ctx, defs_context=defs_context)
                for child in element.children
            )
        finally:
            ctx.path.discard(key)

        if definition.serializer is not None:
            return definition.serializer(validation.props, children)

        return self._serialize(element.kind, definition, validation.props, children, ctx)

    def _serialize(
        self,
        kind: str,
        definition: ElementDefinition,
        props: PropSchema,
        children: str,
        ctx: RenderContext,
    ) -> str:
        """Generic serialization: props become attributes."""
        attrs: list[tuple[str, str]] = []
        content = ""

        for name, value in props.items():
            if name == "text" and definition.text_bearing:
                content = escape_text(format_value(value))
                continue

            attr = camel_to_kebab(name)
            text = format_value(value)
            if ctx.id_prefix:
                if attr == "id":
                    text = prefix_id(text, ctx.id_prefix)
                else:
                    text = prefix_url_refs(text, ctx.id_prefix)
            attrs.append((attr, text))

        tag = definition.tag_for(kind)
        sb = MarkupBuilder()
        if content or children:
            sb.start_tag(tag, attrs).append(content).append(children).end_tag(tag)
        else:
            sb.empty_tag(tag, attrs)
        return sb.build()
