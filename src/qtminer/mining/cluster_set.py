"""
Cluster sets: the ordered result of one QT run and the unit of persistence.
"""

from bisect import insort
from typing import BinaryIO, Iterator, List, Optional, Union
import io
import os
import pickle

from .cluster import Cluster, cluster_sort_key
from ..data.record_set import RecordSet

PathOrFile = Union[str, os.PathLike, BinaryIO]

# Globals a saved cluster set may reference; everything else is refused
_SAFE_MODULES = ('qtminer.data.', 'qtminer.mining.')
_SAFE_BUILTINS = {'set', 'frozenset', 'tuple', 'list', 'dict'}


class ClusterSet:
    """Clusters kept sorted by size, then by centroid text.

    The ordering only fixes the enumeration order: clusters that compare
    equal are all kept, in insertion order.
    """

    def __init__(self):
        self._clusters: List[Cluster] = []

    def add(self, cluster: Cluster) -> None:
        insort(self._clusters, cluster, key=cluster_sort_key)

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self._clusters)

    def __len__(self) -> int:
        return len(self._clusters)

    def __getitem__(self, index: int) -> Cluster:
        return self._clusters[index]

    def labels(self, n_records: int) -> List[int]:
        """Cluster position (in iteration order) of every record, -1 if none."""
        labels = [-1] * n_records
        for position, cluster in enumerate(self._clusters):
            for record_id in cluster:
                labels[record_id] = position
        return labels

    def __str__(self) -> str:
        lines = [f"{i}:{cluster}" for i, cluster in enumerate(self._clusters, start=1)]
        return '\n' + '\n'.join(lines) + '\n'

    def to_string(self, record_set: RecordSet) -> str:
        """Describe every cluster with its members, numbered from 1."""
        blocks = [
            f"{i}:{cluster.to_string(record_set)}"
            for i, cluster in enumerate(self._clusters, start=1)
        ]
        return '\n' + '\n\n'.join(blocks) + '\n'

    def save(self, target: PathOrFile) -> None:
        """Write the cluster set to a path or a binary stream."""
        if isinstance(target, (str, os.PathLike)):
            with open(target, 'wb') as f:
                pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)
        else:
            pickle.dump(self, target, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, source: PathOrFile) -> 'ClusterSet':
        """Read a cluster set written by :meth:`save`.

        Raises:
            FileNotFoundError: If ``source`` is a path that does not exist
            pickle.UnpicklingError: If the stream is corrupt or references
                anything other than cluster data
        """
        if isinstance(source, (str, os.PathLike)):
            with open(source, 'rb') as f:
                loaded = _ClusterUnpickler(f).load()
        else:
            loaded = _ClusterUnpickler(source).load()
        if not isinstance(loaded, cls):
            raise pickle.UnpicklingError(
                f"Expected a ClusterSet, found {type(loaded).__name__}")
        return loaded


class _ClusterUnpickler(pickle.Unpickler):
    """Unpickler limited to this package's record and cluster classes."""

    def find_class(self, module: str, name: str):
        if module == 'builtins' and name in _SAFE_BUILTINS:
            return super().find_class(module, name)
        if module.startswith(_SAFE_MODULES):
            return super().find_class(module, name)
        raise pickle.UnpicklingError(f"Refusing to load global {module}.{name}")
