"""Typed prop schemas for element kinds.

Each element kind declares its props as a frozen dataclass. Raw prop bags
from the stream are validated and coerced with ``from_raw``.

Type rules follow the field's hint:
- str: only strings are accepted
- Number (int | float | str): numbers or strings, since a generator may
  write ``"width": 500`` or ``"width": "500"``; booleans are rejected
- Fields without a default are required; null counts as missing
- Optional fields accept null as absent
- Unknown keys are dropped

Fields are snake_case; the wire name is the camelCase form
("stroke_width" reads "strokeWidth", "in_" reads "in"). Only the wire name
is read; a snake_case key is unknown and dropped.

Thread Safety:
All schema classes are frozen dataclasses (immutable).
Safe to share across threads.

Example:
    >>> @dataclass(frozen=True, slots=True)
    ... class CircleProps(PropSchema):
    ...     cx: Number
    ...     cy: Number
    ...     r: Number
    ...     fill: str | None = None
    ...
    >>> props = CircleProps.from_raw({"cx": 10, "cy": "20", "r": 5, "junk": 1})
    >>> list(props.items())
    [('cx', 10), ('cy', '20'), ('r', 5)]

"""

from __future__ import annotations

import types
import typing
from collections.abc import Iterator, Mapping
from dataclasses import MISSING, dataclass, fields
from functools import cache
from typing import Any, ClassVar, Self, Union, get_type_hints

from svgstream.utils.text import snake_to_camel

Number = int | float | str
"""A numeric prop: a JSON number or a numeric string."""


@dataclass(frozen=True, slots=True)
class PropSchema:
    """Base class for typed element props.

    Subclass this per element kind. Field order is the attribute order
    used by the generic serializer.

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    # Wire names that do not follow from the field name by camelCasing
    _aliases: ClassVar[dict[str, str]] = {}

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Self:
        """Validate and coerce a raw prop bag.

        Args:
            raw: Props as received from the stream

        Returns:
            Typed props instance

        Raises:
            ValueError: If raw is not a mapping, a required prop is missing,
                or a prop has the wrong type
        """
        if not isinstance(raw, Mapping):
            msg = f"props must be an object, got {type(raw).__name__}"
            raise ValueError(msg)

        hints = _hints(cls)
        kwargs: dict[str, Any] = {}

        for f in fields(cls):
            if f.name.startswith("_"):
                continue

            wire_name = cls.wire_name(f.name)
            value = raw.get(wire_name)

            if value is not None:
                kwargs[f.name] = _coerce(value, hints.get(f.name, str), wire_name)
            elif f.default is MISSING and f.default_factory is MISSING:
                msg = f"missing required prop '{wire_name}'"
                raise ValueError(msg)

        return cls(**kwargs)

    @classmethod
    def wire_name(cls, field_name: str) -> str:
        """Map a field name to its wire name.

        Examples: "stroke_width" -> "strokeWidth", "in_" -> "in".
        """
        for alias, target in cls._aliases.items():
            if target == field_name:
                return alias
        return snake_to_camel(field_name)

    @classmethod
    def prop_names(cls) -> tuple[str, ...]:
        """Wire names of all declared props, in declaration order."""
        return tuple(cls.wire_name(f.name) for f in fields(cls) if not f.name.startswith("_"))

    @classmethod
    def required_props(cls) -> frozenset[str]:
        """Wire names of props without a default."""
        return frozenset(
            cls.wire_name(f.name)
            for f in fields(cls)
            if not f.name.startswith("_")
            and f.default is MISSING
            and f.default_factory is MISSING
        )

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield (wire_name, value) for every present prop, in field order."""
        for f in fields(self):
            if f.name.startswith("_"):
                continue
            value = getattr(self, f.name)
            if value is not None:
                yield self.wire_name(f.name), value

    def to_dict(self) -> dict[str, Any]:
        """Present props as a plain dict keyed by wire name."""
        return dict(self.items())


@cache
def _hints(cls: type) -> dict[str, Any]:
    return get_type_hints(cls)


def _coerce(value: Any, target_type: Any, prop_name: str) -> Any:
    """Check a raw value against a field's type hint.

    Raises:
        ValueError: If the value does not fit the hint
    """
    origin = typing.get_origin(target_type)
    if origin is Union or origin is types.UnionType:
        allowed = tuple(a for a in typing.get_args(target_type) if a is not type(None))
    else:
        allowed = (target_type,)

    if isinstance(value, bool):
        if bool in allowed:
            return value
        msg = f"Invalid value for prop '{prop_name}': expected {_describe(allowed)}, got boolean"
        raise ValueError(msg)

    for candidate in allowed:
        if candidate is float and isinstance(value, int | float):
            return value
        if candidate is Any or (isinstance(candidate, type) and isinstance(value, candidate)):
            return value

    msg = (
        f"Invalid value for prop '{prop_name}': expected {_describe(allowed)}, "
        f"got {type(value).__name__}"
    )
    raise ValueError(msg)


def _describe(allowed: tuple[Any, ...]) -> str:
    names = {
        str: "string",
        int: "number",
        float: "number",
        bool: "boolean",
    }
    return " or ".join(dict.fromkeys(names.get(a, getattr(a, "__name__", str(a))) for a in allowed))


@dataclass(frozen=True, slots=True)
class PropValidation:
    """Tagged result of validating one prop bag.

    Validation failure is an expected outcome while streaming, so it is a
    value rather than an exception.

    """

    ok: bool
    props: PropSchema | None = None
    reason: str | None = None

    @classmethod
    def success(cls, props: PropSchema) -> PropValidation:
        """Build a successful result."""
        return cls(ok=True, props=props)

    @classmethod
    def failure(cls, reason: str) -> PropValidation:
        """Build a failed result."""
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


__all__ = ["Number", "PropSchema", "PropValidation"]
