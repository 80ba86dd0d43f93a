"""
Attribute schema for mixed-type record sets.

An attribute describes one column of a record set. Two variants exist:

- ContinuousAttribute: numeric column with observed [min, max] bounds,
  used to normalise distances to the unit interval
- DiscreteAttribute: categorical column with its ordered set of values

Both are immutable and share the ``name``/``index`` pair, where ``index``
is the column's position inside every record.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Sequence, Tuple, Union
import math
from numbers import Real

from ..exceptions import InvalidArgumentError


@dataclass(frozen=True)
class ContinuousAttribute:
    """Numeric attribute scaled to [0, 1] through its observed range."""

    name: str
    index: int
    min: float
    max: float

    def __post_init__(self):
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise InvalidArgumentError(
                f"Bounds of '{self.name}' must be finite, got [{self.min}, {self.max}]")
        if self.min >= self.max:
            raise InvalidArgumentError(
                f"Attribute '{self.name}' requires min < max, got [{self.min}, {self.max}]")

    def scale(self, value: float) -> float:
        """Map ``value`` linearly so that min -> 0 and max -> 1."""
        return (value - self.min) / (self.max - self.min)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DiscreteAttribute:
    """Categorical attribute over an ordered set of distinct values."""

    name: str
    index: int
    values: Tuple[Any, ...] = field(default=())

    def __post_init__(self):
        # Sorted and deduplicated so iteration follows the natural order
        object.__setattr__(self, 'values', tuple(sorted(set(self.values))))

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, value: Any) -> bool:
        return value in self.values

    def __str__(self) -> str:
        return self.name


Attribute = Union[ContinuousAttribute, DiscreteAttribute]


def validate_schema(schema: Sequence[Attribute]) -> Tuple[Attribute, ...]:
    """Check that attribute indices are exactly 0..k-1 in order.

    Args:
        schema: Attributes in positional order

    Returns:
        The schema as a tuple

    Raises:
        InvalidArgumentError: If an entry is not an attribute or an index
            does not match its position
    """
    schema = tuple(schema)
    for position, attribute in enumerate(schema):
        if not isinstance(attribute, (ContinuousAttribute, DiscreteAttribute)):
            raise InvalidArgumentError(
                f"Schema entry {position} is not an attribute: {attribute!r}")
        if attribute.index != position:
            raise InvalidArgumentError(
                f"Attribute '{attribute.name}' has index {attribute.index}, "
                f"expected {position}")
    return schema


def is_number(value: Any) -> bool:
    """Whether ``value`` can be compared on a continuous scale.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    return isinstance(value, Real) and not isinstance(value, bool)


def infer_attribute(name: str, index: int, column: Iterable[Any]) -> Attribute:
    """Build an attribute from the observed values of one column.

    A column made only of numbers becomes continuous with its observed
    min/max; anything else becomes categorical over the string form of its
    values. A numeric column holding a single value cannot satisfy
    min < max and is treated as categorical.
    """
    column = list(column)
    if column and all(is_number(v) for v in column):
        low, high = float(min(column)), float(max(column))
        if low < high:
            return ContinuousAttribute(name, index, low, high)
    return DiscreteAttribute(name, index, tuple(str(v) for v in column))
