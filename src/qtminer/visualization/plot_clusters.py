"""
Cluster visualization utilities.

Plots a QT clustering over two continuous attributes of its record set,
with each centroid marked and, optionally, the radius drawn around it.
"""

from typing import List, Optional, Union
import matplotlib.pyplot as plt
from matplotlib import colormaps
from matplotlib.patches import Rectangle
import numpy as np

from ..data.attributes import ContinuousAttribute
from ..data.record_set import RecordSet
from ..exceptions import InvalidArgumentError
from ..mining.cluster_set import ClusterSet


def _continuous(record_set: RecordSet, attribute: Union[int, str]) -> ContinuousAttribute:
    if isinstance(attribute, str):
        matches = [a for a in record_set.schema if a.name == attribute]
        if not matches:
            raise InvalidArgumentError(f"No attribute named '{attribute}'")
        found = matches[0]
    else:
        found = record_set.attribute(attribute)
    if not isinstance(found, ContinuousAttribute):
        raise InvalidArgumentError(f"Attribute '{found.name}' is not continuous")
    return found


def plot_clusters_2d(record_set: RecordSet,
                     cluster_set: ClusterSet,
                     x: Union[int, str] = 0,
                     y: Union[int, str] = 1,
                     radius: Optional[float] = None,
                     ax: Optional[plt.Axes] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 50,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot a clustering over two continuous attributes.

    Coordinates are the scaled attribute values, so both axes span [0, 1].

    Args:
        record_set: Records that were clustered
        cluster_set: Clusters computed on ``record_set``
        x: Index or name of the attribute on the horizontal axis
        y: Index or name of the attribute on the vertical axis
        radius: If given, draw the L1 radius around every centroid. Only
            exact when ``x`` and ``y`` are the record set's only attributes.
        ax: Matplotlib axes (created if None)
        colors: List of colors for clusters
        alpha: Point transparency
        center_marker: Marker for centroids
        center_size: Size of centroid markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    x_attr = _continuous(record_set, x)
    y_attr = _continuous(record_set, y)

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    points = np.array([
        [x_attr.scale(record_set.value(i, x_attr.index)),
         y_attr.scale(record_set.value(i, y_attr.index))]
        for i in range(record_set.n_examples)
    ], dtype=np.float64).reshape(-1, 2)
    labels = np.asarray(cluster_set.labels(record_set.n_examples))
    n_clusters = len(cluster_set)

    if colors is None:
        cmap = colormaps['tab10' if n_clusters <= 10 else 'tab20']
        colors = [cmap(i % cmap.N) for i in range(n_clusters)]

    for k, cluster in enumerate(cluster_set):
        mask = labels == k
        color = colors[k % len(colors)]
        ax.scatter(points[mask, 0], points[mask, 1],
                   color=color,
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Cluster {k + 1} ({len(cluster)})')

        cx = x_attr.scale(cluster.centroid[x_attr.index].value)
        cy = y_attr.scale(cluster.centroid[y_attr.index].value)
        ax.scatter([cx], [cy],
                   c='black',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='white',
                   linewidth=2,
                   zorder=10)
        if radius is not None:
            # The L1 ball is a square rotated by 45 degrees
            diamond = Rectangle((cx, cy - radius), radius * np.sqrt(2), radius * np.sqrt(2),
                                angle=45, fill=False, edgecolor=color, linestyle='--')
            ax.add_patch(diamond)

    ax.set_xlabel(x_attr.name)
    ax.set_ylabel(y_attr.name)

    if title:
        ax.set_title(title)

    if show_legend and n_clusters:
        ax.legend()

    return ax
