"""Containment contracts for element kinds.

Contracts describe which kinds may contain which, e.g. "a gradient holds
Stop elements". They are advisory: violations are reported as records,
never raised, and never stop an element from rendering.

Thread Safety:
Contract is frozen (immutable). Safe to share across threads.

Example:
    >>> GRADIENT = ElementContract(allows_children=("Stop",))
    >>> GRADIENT.validate_children("LinearGradient", ["Stop", "Rect"])
    [ContainmentViolation(kind='LinearGradient', violation_type='forbidden_child', ...)]

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ElementContract:
    """Containment rules for one element kind.

    Attributes:
        allows_children: Only these child kinds are expected (None = any).
        allows_parent: This kind is expected inside one of these parents
            (None = anywhere).
    """

    allows_children: tuple[str, ...] | None = None
    """Only these child kinds are expected (None = any allowed)."""

    allows_parent: tuple[str, ...] | None = None
    """This kind is expected inside one of these parents (None = anywhere)."""

    def validate_parent(
        self,
        kind: str,
        parent_kind: str | None,
    ) -> ContainmentViolation | None:
        """Check the kind of the element's container.

        Args:
            kind: Kind of the element being checked
            parent_kind: Kind of its container (None at top level)

        Returns:
            ContainmentViolation if misplaced, None if fine
        """
        if self.allows_parent is None:
            return None
        if parent_kind is None:
            return ContainmentViolation(
                kind=kind,
                violation_type="missing_parent",
                message=f"'{kind}' is intended to be inside: {', '.join(self.allows_parent)}",
                expected=self.allows_parent,
                actual=None,
            )
        if parent_kind not in self.allows_parent:
            return ContainmentViolation(
                kind=kind,
                violation_type="wrong_parent",
                message=f"'{kind}' is intended to be inside {', '.join(self.allows_parent)}, not '{parent_kind}'",
                expected=self.allows_parent,
                actual=parent_kind,
            )
        return None

    def validate_children(
        self,
        kind: str,
        child_kinds: Sequence[str],
    ) -> list[ContainmentViolation]:
        """Check the kinds of an element's children.

        Args:
            kind: Kind of the containing element
            child_kinds: Kinds of the children that are present

        Returns:
            List of violations (empty if valid)
        """
        if self.allows_children is None:
            return []
        return [
            ContainmentViolation(
                kind=kind,
                violation_type="forbidden_child",
                message=f"'{child}' is not expected inside '{kind}'",
                expected=self.allows_children,
                actual=child,
            )
            for child in child_kinds
            if child not in self.allows_children
        ]


@dataclass(frozen=True, slots=True)
class ContainmentViolation:
    """Record of a containment problem.

    Attributes:
        kind: Kind of the element the problem was found on
        violation_type: missing_parent, wrong_parent, forbidden_child or
            unexpected_children
        message: Human-readable description
        expected: What the contract expected
        actual: What was found
    """

    kind: str
    violation_type: str
    message: str
    expected: tuple[str, ...] | None
    actual: str | tuple[str, ...] | None
    key: str | None = None

    @property
    def suggestion(self) -> str | None:
        """Generate a fix hint based on violation type."""
        if self.violation_type in ("missing_parent", "wrong_parent") and self.expected:
            return f"Add '{self.kind}' to the children of a {self.expected[0]}"
        if self.violation_type == "forbidden_child" and self.expected:
            return f"'{self.kind}' children should be {' or '.join(self.expected)} elements"
        return None


# =============================================================================
# Pre-defined contracts for the built-in kinds
# =============================================================================

# Gradients hold Stop elements
GRADIENT_CONTRACT = ElementContract(
    allows_children=("Stop",),
)

# Stops belong in a gradient
STOP_CONTRACT = ElementContract(
    allows_parent=("LinearGradient", "RadialGradient"),
)

# Filters hold filter primitives
FILTER_CONTRACT = ElementContract(
    allows_children=("FeGaussianBlur", "FeDropShadow"),
)

FILTER_PRIMITIVE_CONTRACT = ElementContract(
    allows_parent=("Filter",),
)

# TSpan lives inside Text
TSPAN_CONTRACT = ElementContract(
    allows_parent=("Text",),
)
