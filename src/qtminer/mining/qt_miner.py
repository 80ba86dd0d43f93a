"""
Quality-Threshold clustering.

QT clustering guarantees that every member of a cluster lies within a fixed
radius of the cluster's centroid record. Each pass builds one candidate
cluster around every unclustered record, commits the largest one and
removes its members from further consideration, until every record belongs
to a cluster.

A pass costs O(U^2) distance evaluations over the U unclustered records,
so a full run is O(n^3) in the worst case. The default vectorized path
thresholds the pairwise distance matrix once and turns each pass into a
masked tensor reduction; the scalar path evaluates ``ItemTuple.distance``
literally. Both produce the same clusters.

The vectorized path keeps an n x n boolean neighbourhood matrix in memory
(the float64 distances are only ever materialised ``block_size`` rows at a
time), so its memory grows as O(n^2). The scalar path needs O(n) memory
and is the one to use when the matrix does not fit.
"""

from typing import BinaryIO, List, Optional, Union
import logging
import math
import os
import torch

from .cluster import Cluster
from .cluster_set import ClusterSet
from ..data.attributes import is_number
from ..data.record_set import RecordSet
from ..distances.mixed import MixedDistance
from ..exceptions import ClusteringRadiusError, EmptyDatasetError, InvalidArgumentError
from ..utils.device import parse_device

logger = logging.getLogger(__name__)

PathOrFile = Union[str, os.PathLike, BinaryIO]


class QTMiner:
    """Quality-Threshold clustering over a mixed-type record set.

    Example:
        >>> miner = QTMiner(radius=0.1)
        >>> n_clusters = miner.compute(record_set)
        >>> for cluster in miner.cluster_set:
        ...     print(cluster.to_string(record_set))
    """

    def __init__(self,
                 radius: float,
                 vectorized: bool = True,
                 device: Optional[Union[str, torch.device]] = None,
                 block_size: int = 1024):
        """
        Args:
            radius: Maximum distance between a centroid and any member
            vectorized: Use batched tensor distances (True) or the per-tuple
                scan (False)
            device: Torch device for the vectorized path (None for auto-detect)
            block_size: Rows of float64 distances computed at once on the
                vectorized path

        Raises:
            InvalidArgumentError: If the radius is negative or not a finite
                number, or ``block_size`` is not a positive integer
        """
        if not is_number(radius) or not math.isfinite(radius) or radius < 0:
            raise InvalidArgumentError(f"Radius must be a finite number >= 0, got {radius!r}")
        if isinstance(block_size, bool) or not isinstance(block_size, int) or block_size < 1:
            raise InvalidArgumentError(f"block_size must be a positive integer, got {block_size!r}")
        self.radius = float(radius)
        self.vectorized = vectorized
        self.block_size = block_size
        self.device = parse_device(device) if vectorized else torch.device('cpu')
        self._cluster_set = ClusterSet()

    @property
    def cluster_set(self) -> ClusterSet:
        """Clusters of the last successful computation (or of a loaded file)."""
        return self._cluster_set

    def compute(self, record_set: RecordSet) -> int:
        """Cluster ``record_set``.

        Args:
            record_set: Records to cluster

        Returns:
            Number of clusters committed

        Raises:
            EmptyDatasetError: If the record set has no records
            ClusteringRadiusError: If every record ended up in one cluster
            InvalidArgumentError: If a record value does not fit its attribute,
                or a pass cannot commit any record
        """
        if record_set.n_examples == 0:
            raise EmptyDatasetError("Dataset is empty!")

        self._cluster_set = ClusterSet()
        if self.vectorized:
            clusters = self._compute_vectorized(record_set)
        else:
            clusters = self._compute_scalar(record_set)

        if len(clusters) == 1:
            raise ClusteringRadiusError(f"{record_set.n_examples} tuples in one cluster!")

        for cluster in clusters:
            self._cluster_set.add(cluster)
        return len(clusters)

    def _compute_vectorized(self, record_set: RecordSet) -> List[Cluster]:
        n = record_set.n_examples
        within = MixedDistance(record_set, device=self.device).within_radius(
            self.radius, block_size=self.block_size)
        unclustered = torch.ones(n, dtype=torch.bool, device=self.device)

        clusters = []
        while bool(unclustered.any()):
            # Candidate sizes: unclustered neighbours of every unclustered record
            counts = (within & unclustered.unsqueeze(0)).sum(dim=1)
            counts[~unclustered] = -1
            best = int(torch.nonzero(counts == counts.max())[0])

            members = torch.nonzero(within[best] & unclustered).flatten()
            cluster = Cluster(record_set.get_item_set(best))
            for record_id in members.tolist():
                cluster.add(record_id)
            unclustered[members] = False

            clusters.append(cluster)
            logger.debug("QT pass %d: committed cluster of %d around record %d",
                         len(clusters), len(cluster), best)
        return clusters

    def _compute_scalar(self, record_set: RecordSet) -> List[Cluster]:
        n = record_set.n_examples
        is_clustered = [False] * n
        count_clustered = 0

        clusters = []
        while count_clustered != n:
            cluster = self._build_candidate_cluster(record_set, is_clustered)
            if len(cluster) == 0:
                raise InvalidArgumentError(
                    "A QT pass committed no record; every record must lie within "
                    "radius of itself")
            for record_id in cluster:
                is_clustered[record_id] = True
            count_clustered += len(cluster)

            clusters.append(cluster)
            logger.debug("QT pass %d: committed cluster of %d", len(clusters), len(cluster))
        return clusters

    def _build_candidate_cluster(self, record_set: RecordSet,
                                 is_clustered: List[bool]) -> Cluster:
        """Largest candidate cluster among the unclustered records.

        Ties keep the first candidate found in ascending record order.
        """
        best_cluster = None
        for i in range(record_set.n_examples):
            if is_clustered[i]:
                continue
            centroid = record_set.get_item_set(i)
            candidate = Cluster(centroid)
            for j in range(record_set.n_examples):
                if not is_clustered[j] and centroid.distance(record_set.get_item_set(j)) <= self.radius:
                    candidate.add(j)
            if best_cluster is None or len(candidate) > len(best_cluster):
                best_cluster = candidate
        return best_cluster

    def save(self, target: PathOrFile) -> None:
        """Persist the current cluster set to a path or binary stream."""
        self._cluster_set.save(target)

    @classmethod
    def load(cls, source: PathOrFile) -> 'QTMiner':
        """Restore a miner whose cluster set is read from ``source``.

        The radius of the run that produced the file is not stored; the
        restored miner reports a radius of 0.

        Raises:
            FileNotFoundError: If ``source`` is a missing path
            pickle.UnpicklingError: If the stream is not a saved cluster set
        """
        stored = ClusterSet.load(source)
        miner = cls(0.0, vectorized=False)
        for cluster in stored:
            miner._cluster_set.add(cluster)
        return miner
