"""
Items: one attribute bound to one concrete value of a record.

Each item variant knows how far its value lies from a comparable raw value:

- ContinuousItem: |scale(a) - scale(b)| over the attribute's [min, max]
- DiscreteItem: 0 for equal values, 1 otherwise
"""

from dataclasses import dataclass
from typing import Any, Protocol, Union
import math

from .attributes import Attribute, ContinuousAttribute, DiscreteAttribute, is_number
from ..exceptions import InvalidArgumentError


class SupportsDistance(Protocol):
    """Anything that can measure its distance to a raw value."""

    def distance(self, other: Any) -> float:
        ...


@dataclass(frozen=True)
class ContinuousItem:
    """Numeric value of a continuous attribute."""

    attribute: ContinuousAttribute
    value: float

    def __post_init__(self):
        if not is_number(self.value) or not math.isfinite(self.value):
            raise InvalidArgumentError(
                f"Attribute '{self.attribute.name}' expects a finite numeric value, "
                f"got {self.value!r}")

    def distance(self, other: Any) -> float:
        """Normalised absolute difference between this value and ``other``.

        Args:
            other: Raw numeric value on the same attribute

        Returns:
            Distance in [0, 1] when both values lie within the attribute
            bounds, unbounded otherwise

        Raises:
            InvalidArgumentError: If ``other`` is not a number
        """
        if not is_number(other):
            raise InvalidArgumentError(f"Expected a numeric value, got {other!r}")
        return abs(self.attribute.scale(self.value) - self.attribute.scale(other))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DiscreteItem:
    """Categorical value of a discrete attribute."""

    attribute: DiscreteAttribute
    value: Any

    def __post_init__(self):
        # A value unequal to itself (NaN) would never match its own record
        if self.value != self.value:
            raise InvalidArgumentError(
                f"Attribute '{self.attribute.name}' got a value not equal to itself: "
                f"{self.value!r}")

    def distance(self, other: Any) -> float:
        """0.0 when ``other`` equals this value, 1.0 otherwise."""
        return 0.0 if self.value == other else 1.0

    def __str__(self) -> str:
        return str(self.value)


Item = Union[ContinuousItem, DiscreteItem]


def make_item(attribute: Attribute, value: Any) -> Item:
    """Bind ``value`` to ``attribute`` with the matching item variant."""
    if isinstance(attribute, ContinuousAttribute):
        return ContinuousItem(attribute, value)
    if isinstance(attribute, DiscreteAttribute):
        return DiscreteItem(attribute, value)
    raise InvalidArgumentError(f"Unsupported attribute type: {type(attribute).__name__}")
