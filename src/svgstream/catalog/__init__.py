"""Element catalog for svgstream.

The catalog is the closed vocabulary a document may use. Each element kind
is described by an ElementDefinition:

    {"kind": "Circle", "props": {"cx": 250, "cy": 250, "r": 100}}
              │                  │
              │                  └─ validated by the kind's PropSchema
              └─ looked up in the Catalog

Key components:
- PropSchema: Base class for typed, coercing prop validation
- ElementDefinition: Tag, schema, containment and serialization per kind
- ElementContract: Advisory containment rules
- Catalog: Immutable registry, validation and manifest

Thread Safety:
All components are designed for thread-safety:
- Schemas and definitions are frozen dataclasses
- Contracts are frozen dataclasses
- Catalog is immutable after creation
- Custom serializers must be pure functions

Example:
    >>> from svgstream.catalog import CatalogBuilder, ElementDefinition, Number, PropSchema
    >>>
    >>> @dataclass(frozen=True, slots=True)
    ... class StarProps(PropSchema):
    ...     cx: Number
    ...     cy: Number
    ...     points: int = 5
    ...
    >>> builder = create_catalog_with_defaults()
    >>> builder.register("Star", ElementDefinition(StarProps, "Star", serializer=render_star))
    >>> catalog = builder.build()
"""

from __future__ import annotations

from svgstream.catalog.contracts import (
    FILTER_CONTRACT,
    FILTER_PRIMITIVE_CONTRACT,
    GRADIENT_CONTRACT,
    STOP_CONTRACT,
    TSPAN_CONTRACT,
    ContainmentViolation,
    ElementContract,
)
from svgstream.catalog.definition import ElementDefinition, Serializer
from svgstream.catalog.registry import (
    Catalog,
    CatalogBuilder,
    DocumentValidation,
    create_catalog_with_defaults,
    create_default_catalog,
)
from svgstream.catalog.schema import Number, PropSchema, PropValidation

__all__ = [
    # Schemas
    "Number",
    "PropSchema",
    "PropValidation",
    # Definitions
    "ElementDefinition",
    "Serializer",
    # Contracts
    "ContainmentViolation",
    "ElementContract",
    "FILTER_CONTRACT",
    "FILTER_PRIMITIVE_CONTRACT",
    "GRADIENT_CONTRACT",
    "STOP_CONTRACT",
    "TSPAN_CONTRACT",
    # Registry
    "Catalog",
    "CatalogBuilder",
    "DocumentValidation",
    "create_catalog_with_defaults",
    "create_default_catalog",
]
