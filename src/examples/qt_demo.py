"""
Demo of QT clustering on mixed-type records.

This example shows how to:
1. Generate synthetic records with two numeric and one categorical field
2. Cluster them with QTMiner at a few radii
3. Save the result, restore it, and plot it
"""

import numpy as np
import matplotlib.pyplot as plt

from qtminer import ClusteringRadiusError, QTMiner, RecordSet, plot_clusters_2d


def generate_records(n_per_group=30, seed=42):
    """Three groups of (x, y, colour) records around different centres."""
    rng = np.random.default_rng(seed)
    centres = [(0.0, 0.0, 'red'), (5.0, 5.0, 'green'), (0.0, 8.0, 'blue')]

    rows = []
    for cx, cy, colour in centres:
        xy = rng.normal(loc=(cx, cy), scale=0.6, size=(n_per_group, 2))
        for x, y in xy:
            rows.append((float(x), float(y), colour))
    return RecordSet.from_rows(['x', 'y', 'colour'], rows)


def main():
    records = generate_records()
    print(f"Generated {records.n_examples} records")

    for radius in (0.15, 0.3, 3.0):
        miner = QTMiner(radius=radius)
        try:
            n_clusters = miner.compute(records)
        except ClusteringRadiusError as e:
            print(f"radius={radius}: {e}")
            continue
        sizes = [len(c) for c in miner.cluster_set]
        print(f"radius={radius}: {n_clusters} clusters, sizes {sizes}")

    miner = QTMiner(radius=0.3)
    miner.compute(records)
    miner.save('demo_clusters.dmp')
    restored = QTMiner.load('demo_clusters.dmp')
    print(f"Restored {len(restored.cluster_set)} clusters")

    plot_clusters_2d(records, restored.cluster_set, 'x', 'y', title='QT clusters (radius 0.3)')
    plt.tight_layout()
    plt.savefig('qt_demo.png', dpi=120)
    print("Saved plot to qt_demo.png")


if __name__ == '__main__':
    main()
