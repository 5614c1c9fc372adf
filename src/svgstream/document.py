"""Document model for svgstream.

The document is the only contract between the patch compiler and the
renderer. It is a flat map of elements keyed by string, plus an optional
root key and viewport.

Structure:
Document
├── root: key of the top-level element (optional while streaming)
├── viewport: Viewport (optional)
└── elements: dict[key, Element]
    └── Element
        ├── kind: catalog entry name ("Rect", "Group", ...)
        ├── props: untyped mapping, validated lazily by the catalog
        └── children: keys, possibly not yet present

A document may be structurally incomplete at any time: ``root`` and
``children`` can name keys that have not streamed in yet. That is normal
during streaming and is never treated as an error here.

Thread Safety:
Documents handed out by the compiler are fresh copies. Nothing is shared
with the compiler's internal state.

"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Viewport:
    """Outer canvas size.

    Wire form: ``{"width": 500, "height": 500, "viewBox": "0 0 500 500"}``.
    Width and height may arrive as numbers or numeric strings.

    """

    width: int | float | str | None = None
    height: int | float | str | None = None
    view_box: str | None = None

    @classmethod
    def from_raw(cls, value: Any) -> "Viewport | None":
        """Build a viewport from its wire mapping, or None if not a mapping."""
        if not isinstance(value, Mapping):
            return None
        view_box = value.get("viewBox")
        return cls(
            width=_size(value.get("width")),
            height=_size(value.get("height")),
            view_box=view_box if isinstance(view_box, str) else None,
        )


def _size(value: Any) -> int | float | str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


@dataclass(frozen=True, slots=True)
class Element:
    """One node of the document.

    ``props`` is whatever the generator sent. It is only interpreted when the
    catalog validates it, so a malformed bag here is not an error.

    """

    key: str
    kind: str
    props: Any = field(default_factory=dict)
    children: tuple[str, ...] = ()
    parent_key: str | None = None

    @classmethod
    def from_raw(cls, key: str, value: Any) -> "Element | None":
        """Build an element from its wire mapping.

        The map key is authoritative; a ``key`` field inside the value is
        ignored. ``type`` is accepted as an alias for ``kind``.

        Returns:
            Element, or None when value is not a mapping
        """
        if not isinstance(value, Mapping):
            return None

        kind = value.get("kind")
        if kind is None:
            kind = value.get("type")

        props = value.get("props")
        if props is None:
            props = {}

        raw_children = value.get("children")
        children: tuple[str, ...] = ()
        if isinstance(raw_children, list | tuple):
            children = tuple(c for c in raw_children if isinstance(c, str))

        parent_key = value.get("parentKey")

        return cls(
            key=key,
            kind=kind if isinstance(kind, str) else "",
            props=props,
            children=children,
            parent_key=parent_key if isinstance(parent_key, str) else None,
        )


@dataclass(frozen=True, slots=True)
class Document:
    """The in-progress or final graphics document.

    Attributes:
        root: Key of the top-level element, None until declared
        elements: Element map; iteration order is insertion order
        viewport: Canvas size, None until declared

    """

    root: str | None = None
    elements: dict[str, Element] = field(default_factory=dict)
    viewport: Viewport | None = None

    @classmethod
    def from_raw(
        cls,
        root: Any,
        viewport: Any,
        elements: Mapping[str, Any],
    ) -> "Document":
        """Build a document from raw compiler state.

        Element slots whose value is not a mapping are left out.
        """
        built: dict[str, Element] = {}
        for key, value in elements.items():
            element = Element.from_raw(key, value)
            if element is not None:
                built[key] = element
        return cls(
            root=root if isinstance(root, str) else None,
            elements=built,
            viewport=Viewport.from_raw(viewport),
        )

    def get(self, key: str) -> Element | None:
        """Get element by key, or None if absent."""
        return self.elements.get(key)

    def referenced_keys(self) -> set[str]:
        """Keys listed in any element's children."""
        referenced: set[str] = set()
        for element in self.elements.values():
            referenced.update(element.children)
        return referenced

    def top_level_keys(self) -> list[str]:
        """Keys not listed as anyone's child, in insertion order."""
        referenced = self.referenced_keys()
        return [key for key in self.elements if key not in referenced]

    @property
    def is_empty(self) -> bool:
        """True if nothing has been declared yet."""
        return self.root is None and self.viewport is None and not self.elements

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements.values())

    def __len__(self) -> int:
        return len(self.elements)

    def __contains__(self, key: object) -> bool:
        return key in self.elements


__all__ = ["Document", "Element", "Viewport"]
