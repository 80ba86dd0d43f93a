"""
QT-Miner: Quality-Threshold clustering of mixed-type records.

Records mixing continuous and categorical fields are grouped so that every
member of a cluster lies within a fixed radius of the cluster's centroid
record. Continuous attributes are normalised to their observed range and
categorical attributes contribute one unit per mismatch.

Example usage:
    >>> from qtminer import QTMiner, RecordSet
    >>>
    >>> records = RecordSet.from_rows(
    ...     ['position'], [[0.0], [1.0], [2.0], [10.0], [11.0]])
    >>>
    >>> miner = QTMiner(radius=0.1)
    >>> miner.compute(records)
    2
    >>> print(miner.cluster_set.to_string(records))
"""

import logging

__version__ = '0.1.0'

from .exceptions import (
    QTMinerError,
    InvalidArgumentError,
    EmptyDatasetError,
    ClusteringRadiusError,
    DataSourceError,
    NoDataError,
    DatabaseConnectionError,
    NoValueError
)

# Record model
from .data import (
    ContinuousAttribute,
    DiscreteAttribute,
    ContinuousItem,
    DiscreteItem,
    ItemTuple,
    RecordSet
)

# Mining
from .distances import MixedDistance
from .mining import Cluster, ClusterSet, QTMiner

# Visualization
from .visualization import plot_clusters_2d

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    'QTMinerError',
    'InvalidArgumentError',
    'EmptyDatasetError',
    'ClusteringRadiusError',
    'DataSourceError',
    'NoDataError',
    'DatabaseConnectionError',
    'NoValueError',

    # Record model
    'ContinuousAttribute',
    'DiscreteAttribute',
    'ContinuousItem',
    'DiscreteItem',
    'ItemTuple',
    'RecordSet',

    # Mining
    'MixedDistance',
    'Cluster',
    'ClusterSet',
    'QTMiner',

    # Visualization
    'plot_clusters_2d',

    # Version
    '__version__'
]
