import pytest

from qtminer.mining import Cluster, ClusterSet, cluster_sort_key


def test_cluster_members_are_a_set(line_records):
    cluster = Cluster(line_records.get_item_set(1))
    assert cluster.add(2) is True
    assert cluster.add(0) is True
    assert cluster.add(2) is False
    assert len(cluster) == 2
    assert list(cluster) == [0, 2]
    assert cluster.members() == [0, 2]
    assert 0 in cluster and 1 not in cluster


def test_cluster_centroid_is_fixed(line_records):
    centroid = line_records.get_item_set(1)
    cluster = Cluster(centroid)
    for record_id in range(5):
        cluster.add(record_id)
    assert cluster.centroid is centroid
    assert str(cluster) == "Centroid=(1.0)"


def test_cluster_to_string(line_records):
    cluster = Cluster(line_records.get_item_set(3))
    cluster.add(3)
    cluster.add(4)
    lines = cluster.to_string(line_records).split('\n')
    assert lines[0] == "Centroid=(10.0)"
    assert lines[1] == "Examples:"
    assert lines[2] == "[10.0] dist=0.0"
    assert lines[3].startswith("[11.0] dist=0.0909")
    assert lines[4].startswith("AvgDistance=0.0454")


def test_sort_key_orders_by_size_then_centroid_text(line_records):
    small = Cluster(line_records.get_item_set(4))
    small.add(4)
    big = Cluster(line_records.get_item_set(0))
    big.add(0)
    big.add(1)
    assert cluster_sort_key(small) == (1, ('11.0',))
    assert cluster_sort_key(small) < cluster_sort_key(big)


def test_cluster_set_iterates_in_key_order(line_records):
    clusters = ClusterSet()
    sizes = {0: 3, 3: 1, 4: 1}
    for centroid_id, size in sizes.items():
        cluster = Cluster(line_records.get_item_set(centroid_id))
        for record_id in range(size):
            cluster.add(record_id)
        clusters.add(cluster)
    assert [str(c) for c in clusters] == [
        "Centroid=(10.0)", "Centroid=(11.0)", "Centroid=(0.0)",
    ]
    assert len(clusters) == 3
    assert str(clusters[2]) == "Centroid=(0.0)"


def test_cluster_set_keeps_clusters_with_equal_keys(line_records):
    clusters = ClusterSet()
    first = Cluster(line_records.get_item_set(0))
    first.add(0)
    second = Cluster(line_records.get_item_set(0))
    second.add(1)
    clusters.add(first)
    clusters.add(second)
    assert len(clusters) == 2
    assert clusters[0] is first and clusters[1] is second


def test_cluster_set_text(line_records):
    clusters = ClusterSet()
    a = Cluster(line_records.get_item_set(1))
    for record_id in (0, 1, 2):
        a.add(record_id)
    b = Cluster(line_records.get_item_set(3))
    b.add(3)
    b.add(4)
    clusters.add(a)
    clusters.add(b)

    assert str(clusters) == "\n1:Centroid=(10.0)\n2:Centroid=(1.0)\n"
    report = clusters.to_string(line_records)
    assert report.startswith("\n1:Centroid=(10.0)\nExamples:\n")
    assert "\n\n2:Centroid=(1.0)\n" in report
    assert clusters.labels(6) == [1, 1, 1, 0, 0, -1]


def test_empty_cluster_set_text():
    assert str(ClusterSet()) == "\n\n"
    assert ClusterSet().labels(2) == [-1, -1]
