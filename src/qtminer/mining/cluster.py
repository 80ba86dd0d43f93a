"""
Clusters: a fixed centroid record plus the ids of its members.
"""

from typing import Iterator, List, Set, Tuple

from ..data.record_set import RecordSet
from ..data.tuples import ItemTuple


class Cluster:
    """Centroid tuple and the set of record ids assigned to it.

    The centroid is the record chosen as seed, not a computed mean, and is
    never changed after construction. Members are only ever added.
    """

    def __init__(self, centroid: ItemTuple):
        self._centroid = centroid
        self._members: Set[int] = set()

    @property
    def centroid(self) -> ItemTuple:
        return self._centroid

    def add(self, record_id: int) -> bool:
        """Add a record id.

        Returns:
            True if the id was not already a member
        """
        if record_id in self._members:
            return False
        self._members.add(record_id)
        return True

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._members))

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._members

    def members(self) -> List[int]:
        """Member ids in ascending order."""
        return sorted(self._members)

    def __str__(self) -> str:
        return f"Centroid=({self._centroid})"

    def __repr__(self) -> str:
        return f"Cluster(centroid={self._centroid.values()!r}, size={len(self)})"

    def to_string(self, record_set: RecordSet) -> str:
        """Describe the cluster with its members and their distances."""
        lines = [f"Centroid=({self._centroid})", "Examples:"]
        for record_id in self:
            values = ' '.join(str(v) for v in record_set.row(record_id))
            distance = self._centroid.distance(record_set.get_item_set(record_id))
            lines.append(f"[{values}] dist={distance}")
        lines.append(f"AvgDistance={self._centroid.average_distance(record_set, self.members())}")
        return '\n'.join(lines)


def cluster_sort_key(cluster: Cluster) -> Tuple[int, Tuple[str, ...]]:
    """Ordering key: size ascending, then stringified centroid values."""
    return len(cluster), tuple(str(item) for item in cluster.centroid)
