"""Element catalog: the closed registry of element kinds.

The catalog maps kind names to their definitions and owns every rule the
compiler's output is checked against: prop validation, strict document
validation and containment reporting. It also produces the manifest that
tells a generator which vocabulary it may emit.

Thread Safety:
Catalog is immutable after creation. Safe to share.
Use CatalogBuilder for mutable construction.

Example:
    >>> builder = CatalogBuilder()
    >>> builder.register("Rect", RECT)
    >>> builder.register("Group", GROUP)
    >>> catalog = builder.build()
    >>> catalog.lookup("Rect").tag
    'rect'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from svgstream.catalog.contracts import ContainmentViolation
from svgstream.catalog.schema import PropValidation
from svgstream.document import Document, Element
from svgstream.errors import CatalogError

if TYPE_CHECKING:
    from svgstream.catalog.definition import ElementDefinition


@dataclass(frozen=True, slots=True)
class DocumentValidation:
    """Tagged result of strict document validation.

    On failure ``reason`` names the first problem found and ``key`` the
    element it was found on, if any.

    """

    ok: bool
    document: Document | None = None
    reason: str | None = None
    key: str | None = None

    @classmethod
    def success(cls, document: Document) -> DocumentValidation:
        """Build a successful result."""
        return cls(ok=True, document=document)

    @classmethod
    def failure(cls, reason: str, key: str | None = None) -> DocumentValidation:
        """Build a failed result."""
        return cls(ok=False, reason=reason, key=key)

    def __bool__(self) -> bool:
        return self.ok


class Catalog:
    """Immutable registry of element definitions.

    Lookup of an unknown kind returns None; whether that is fatal is up to
    the caller.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_kinds", "_by_kind")

    def __init__(
        self,
        kinds: tuple[str, ...],
        by_kind: dict[str, ElementDefinition],
    ) -> None:
        """Initialize catalog with pre-built mappings.

        Use CatalogBuilder to create instances.
        """
        self._kinds = kinds
        self._by_kind = by_kind

    def lookup(self, kind: str) -> ElementDefinition | None:
        """Get the definition for a kind.

        Args:
            kind: Element kind name (e.g., "Rect")

        Returns:
            Definition if registered, None otherwise
        """
        return self._by_kind.get(kind)

    get = lookup

    def has(self, kind: str) -> bool:
        """Check if kind is registered."""
        return kind in self._by_kind

    def tag_for(self, kind: str) -> str | None:
        """Markup tag for a kind, None if unregistered."""
        definition = self._by_kind.get(kind)
        return definition.tag_for(kind) if definition else None

    @property
    def kinds(self) -> tuple[str, ...]:
        """Registered kinds in registration order."""
        return self._kinds

    def __contains__(self, kind: object) -> bool:
        """Support 'kind in catalog' syntax."""
        return kind in self._by_kind

    def __len__(self) -> int:
        """Number of registered kinds."""
        return len(self._kinds)

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_props(self, kind: str, raw_props: Any) -> PropValidation:
        """Validate a raw prop bag against a kind's schema.

        Never raises for bad payloads; failure is a normal result.

        Args:
            kind: Element kind name
            raw_props: Props as received from the stream

        Returns:
            PropValidation with coerced props, or the failure reason
        """
        definition = self._by_kind.get(kind)
        if definition is None:
            return PropValidation.failure(f"Unknown element kind: {kind!r}")
        try:
            props = definition.props_class.from_raw(raw_props)
        except (TypeError, ValueError) as e:
            return PropValidation.failure(str(e))
        return PropValidation.success(props)

    def validate_document(
        self,
        doc: Document | Mapping[str, Any],
        *,
        check_containment: bool = False,
    ) -> DocumentValidation:
        """Strictly validate a finished document.

        Used to gate acceptance of a final document, not during streaming.
        Fails on the first of: missing root, missing elements, an element
        of unregistered kind, an element whose props fail its schema, and
        (with check_containment) a containment violation.

        Args:
            doc: Document or raw mapping with ``root`` and ``elements``
            check_containment: Also fail on the first containment violation

        Returns:
            DocumentValidation carrying the document on success
        """
        document = _as_document(doc)
        if isinstance(document, DocumentValidation):
            return document

        if not document.root:
            return DocumentValidation.failure("Missing root")

        for key, element in document.elements.items():
            if element.kind not in self._by_kind:
                return DocumentValidation.failure(
                    f"Unknown element kind: {element.kind!r} at key: {key!r}", key
                )
            result = self.validate_props(element.kind, element.props)
            if not result.ok:
                return DocumentValidation.failure(
                    f"Invalid props for {element.kind} at key {key!r}: {result.reason}", key
                )

        if check_containment:
            violations = self.containment_violations(document)
            if violations:
                first = violations[0]
                return DocumentValidation.failure(first.message, first.key)

        return DocumentValidation.success(document)

    def containment_violations(self, doc: Document) -> list[ContainmentViolation]:
        """Report containment problems across a document.

        Dangling child keys and elements of unregistered kinds are skipped.

        Returns:
            Violations in element order (empty if none)
        """
        parent_kind: dict[str, str] = {}
        for element in doc.elements.values():
            for child in element.children:
                parent_kind.setdefault(child, element.kind)

        violations: list[ContainmentViolation] = []
        for key, element in doc.elements.items():
            definition = self._by_kind.get(element.kind)
            if definition is None:
                continue

            child_kinds = [
                doc.elements[child].kind for child in element.children if child in doc.elements
            ]
            if child_kinds and not definition.has_children:
                violations.append(
                    ContainmentViolation(
                        kind=element.kind,
                        violation_type="unexpected_children",
                        message=f"'{element.kind}' does not take children",
                        expected=None,
                        actual=tuple(child_kinds),
                        key=key,
                    )
                )

            contract = definition.contract
            if contract is None:
                continue
            parent = contract.validate_parent(element.kind, parent_kind.get(key))
            if parent is not None:
                violations.append(replace(parent, key=key))
            violations.extend(
                replace(v, key=key) for v in contract.validate_children(element.kind, child_kinds)
            )

        return violations

    # =========================================================================
    # Manifest
    # =========================================================================

    def describe(self) -> str:
        """Human-readable manifest of every kind, for prompt construction.

        One line per kind in registration order. Optional props carry a
        ``?`` suffix. Deterministic for a given catalog.

        Example:
            >>> print(catalog.describe())
            - Rect: Rectangle. Props: x, y, width, height, fill?, stroke?, ...
        """
        lines = []
        for kind in self._kinds:
            definition = self._by_kind[kind]
            required = definition.props_class.required_props()
            names = [
                name if name in required else f"{name}?"
                for name in definition.props_class.prop_names()
            ]
            line = f"- {kind}: {definition.description.rstrip('.')}. Props: {', '.join(names) or 'none'}"
            if definition.contract is not None and definition.contract.allows_children:
                line += f". Children: {', '.join(definition.contract.allows_children)}"
            if definition.is_definition:
                line += ". Rendered inside <defs>"
            lines.append(line)
        return "\n".join(lines)


def _as_document(doc: Document | Mapping[str, Any]) -> Document | DocumentValidation:
    """Coerce raw input to a Document, or a failure describing why not."""
    if isinstance(doc, Document):
        return doc
    if not isinstance(doc, Mapping):
        return DocumentValidation.failure(f"Expected a document, got {type(doc).__name__}")
    if not doc.get("root"):
        return DocumentValidation.failure("Missing root")
    elements = doc.get("elements")
    if not isinstance(elements, Mapping):
        return DocumentValidation.failure("Missing elements")
    for key, value in elements.items():
        if Element.from_raw(key, value) is None:
            return DocumentValidation.failure(f"Element at key {key!r} is not an object", key)
    return Document.from_raw(doc.get("root"), doc.get("viewport"), elements)


class CatalogBuilder:
    """Mutable builder for Catalog.

    Register definitions, then call build() to get an immutable catalog.

    Example:
        >>> builder = CatalogBuilder()
        >>> builder.register("Rect", RECT).register("Circle", CIRCLE)
        >>> catalog = builder.build()
    """

    __slots__ = ("_kinds", "_by_kind")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._kinds: list[str] = []
        self._by_kind: dict[str, ElementDefinition] = {}

    def register(self, kind: str, definition: ElementDefinition) -> CatalogBuilder:
        """Register an element definition under a kind name.

        Args:
            kind: Element kind name as it appears on the wire (e.g. "Rect")
            definition: The kind's definition

        Returns:
            Self for chaining

        Raises:
            CatalogError: If the kind is empty, already registered, or the
                definition lacks a props class
        """
        if not kind:
            raise CatalogError(kind, "kind name must be a non-empty string")

        if kind in self._by_kind:
            raise CatalogError(kind, "already registered")

        if not hasattr(definition, "props_class"):
            raise CatalogError(kind, f"{type(definition).__name__} missing 'props_class' attribute")

        self._kinds.append(kind)
        self._by_kind[kind] = definition
        return self

    def register_all(self, definitions: Mapping[str, ElementDefinition]) -> CatalogBuilder:
        """Register multiple definitions, in mapping order.

        Returns:
            Self for chaining
        """
        for kind, definition in definitions.items():
            self.register(kind, definition)
        return self

    def build(self) -> Catalog:
        """Build immutable catalog from registered definitions."""
        return Catalog(kinds=tuple(self._kinds), by_kind=dict(self._by_kind))

    def __len__(self) -> int:
        """Number of registered kinds."""
        return len(self._kinds)


# Cached singleton; Catalog is immutable
_DEFAULT_CATALOG: Catalog | None = None


def create_default_catalog() -> Catalog:
    """Get the default catalog (cached singleton).

    Returns:
        Catalog with the built-in SVG kinds:
        - Shapes: Rect, Circle, Ellipse, Line, Path, Polyline, Polygon
        - Text: Text, TSpan, Title
        - Structure: Group
        - Paint servers: LinearGradient, RadialGradient, Stop
        - Filters: Filter, FeGaussianBlur, FeDropShadow
    """
    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = create_catalog_with_defaults().build()
    return _DEFAULT_CATALOG


def create_catalog_with_defaults() -> CatalogBuilder:
    """Create a builder pre-populated with the built-in kinds.

    Use this to extend the default set:

        >>> builder = create_catalog_with_defaults()
        >>> builder.register("Star", STAR)
        >>> catalog = builder.build()
    """
    from svgstream.catalog.builtins import BUILTIN_DEFINITIONS

    return CatalogBuilder().register_all(BUILTIN_DEFINITIONS)
