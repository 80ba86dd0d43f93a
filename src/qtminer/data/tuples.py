"""
Item tuples: the distance-capable view of one record.
"""

from typing import TYPE_CHECKING, Any, Iterable, Iterator, List, Sequence

from .items import Item
from ..exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .record_set import RecordSet


class ItemTuple:
    """Fixed-length sequence of items, positionally aligned with a schema.

    The distance between two tuples is the sum of the per-position item
    distances, accumulated left to right.
    """

    def __init__(self, items: Iterable[Item]):
        self._items = tuple(items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Item:
        return self._items[index]

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemTuple):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def values(self) -> List[Any]:
        """Raw values of the tuple, in schema order."""
        return [item.value for item in self._items]

    def distance(self, other: 'ItemTuple') -> float:
        """Sum of item distances against ``other``.

        Raises:
            InvalidArgumentError: If the tuples have different lengths
        """
        if len(other) != len(self):
            raise InvalidArgumentError(
                f"Tuples have different lengths: {len(self)} vs {len(other)}")
        total = 0.0
        for mine, theirs in zip(self._items, other._items):
            total += mine.distance(theirs.value)
        return total

    def average_distance(self, record_set: 'RecordSet', ids: Sequence[int]) -> float:
        """Mean distance from this tuple to the records referenced by ``ids``.

        Raises:
            InvalidArgumentError: If ``ids`` is empty
        """
        ids = list(ids)
        if not ids:
            raise InvalidArgumentError("Cannot average over an empty set of records")
        total = 0.0
        for record_id in ids:
            total += self.distance(record_set.get_item_set(record_id))
        return total / len(ids)

    def __str__(self) -> str:
        return ' '.join(str(item) for item in self._items)

    def __repr__(self) -> str:
        return f"ItemTuple({self.values()!r})"
