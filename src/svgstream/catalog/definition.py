"""Element definitions: the static description of one element kind.

A definition ties a kind name to its prop schema, display tag and
rendering capabilities. Rendering is either generic (attributes from
props) or delegated to a per-kind serializer function.

Thread Safety:
Definitions are frozen dataclasses. Serializers must be pure functions.

Example:
    >>> def render_title(props, children):
    ...     return f"<title>{props.text}</title>"
    ...
    >>> TITLE = ElementDefinition(
    ...     props_class=TitleProps,
    ...     description="Accessible title",
    ...     serializer=render_title,
    ... )
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svgstream.catalog.contracts import ElementContract
    from svgstream.catalog.schema import PropSchema

Serializer = Callable[["PropSchema", str], str]
"""Custom serializer: (validated props, rendered children markup) -> markup."""


@dataclass(frozen=True, slots=True)
class ElementDefinition:
    """Static description of an element kind.

    Attributes:
        props_class: PropSchema subclass validating this kind's props
        description: Human-readable summary, used in the catalog manifest
        tag: Markup tag name; None means the lower-cased kind name
        has_children: Whether containment is meaningful for this kind
        is_definition: Rendered only inside <defs>, referenced by id
        text_bearing: A ``text`` prop becomes inner text content
        serializer: Replaces generic attribute serialization when set
        contract: Optional containment rules
    """

    props_class: type[PropSchema]
    description: str
    tag: str | None = None
    has_children: bool = False
    is_definition: bool = False
    text_bearing: bool = False
    serializer: Serializer | None = None
    contract: ElementContract | None = None

    def tag_for(self, kind: str) -> str:
        """Resolve the markup tag for this definition under a kind name."""
        return self.tag or kind.lower()
