# tests/utils.py
"""
Small, reusable helpers used across the QT-Miner test suite.

Functions:
- memberships(cluster_set): clusters as a set of frozensets of record ids.
- assert_partition(cluster_set, n): clusters cover 0..n-1 exactly once.
- assert_within_radius(cluster_set, records, radius): QT radius invariant.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, FrozenSet, Set


def memberships(cluster_set) -> Set[FrozenSet[int]]:
    """Membership sets of every cluster, ignoring order."""
    return {frozenset(cluster) for cluster in cluster_set}


def assert_partition(cluster_set, n_records: int) -> None:
    """Every record belongs to exactly one cluster."""
    seen = []
    for cluster in cluster_set:
        seen.extend(cluster)
    assert sorted(seen) == list(range(n_records)), f"not a partition: {sorted(seen)}"


def assert_within_radius(cluster_set, records, radius: float) -> None:
    """Every member lies within ``radius`` of its cluster's centroid."""
    for cluster in cluster_set:
        for record_id in cluster:
            d = cluster.centroid.distance(records.get_item_set(record_id))
            assert d <= radius, f"record {record_id} at {d} > {radius}"


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("compute", {"n": 45, "radius": 0.2}):
    ...     miner.compute(records)

    Output
    ------
    [timing] compute {"n":45,"radius":0.2} 0.012s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"), default=repr)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
