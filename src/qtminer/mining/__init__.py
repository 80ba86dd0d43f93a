"""Cluster model and the Quality-Threshold miner."""

from .cluster import Cluster, cluster_sort_key
from .cluster_set import ClusterSet
from .qt_miner import QTMiner

__all__ = [
    'Cluster',
    'cluster_sort_key',
    'ClusterSet',
    'QTMiner'
]
