import io
import pickle
import collections

import pytest

from qtminer.database import DbAccess
from qtminer.server.protocol import (
    CLUSTER, LOAD_CLUSTERS, OK, SAVE_CLUSTERS, SELECT_TABLE, ObjectStream,
)
from qtminer.server.session import Session


@pytest.fixture
def db(sqlite_url):
    access = DbAccess(sqlite_url)
    yield access
    access.dispose()


@pytest.fixture
def cluster_folder(tmp_path):
    return str(tmp_path / "clusters")


def _serve(db, folder, *values):
    """Feed ``values`` to a fresh session and return every reply value."""
    rfile = io.BytesIO(b''.join(pickle.dumps(v, protocol=4) for v in values))
    wfile = io.BytesIO()
    session = Session(ObjectStream(rfile, wfile), db, folder)
    session.serve()

    wfile.seek(0)
    replies = []
    while True:
        try:
            replies.append(pickle.load(wfile))
        except EOFError:
            return replies


def test_select_table(db, cluster_folder):
    replies = _serve(db, cluster_folder, SELECT_TABLE, 'playtennis')
    assert replies[0] == OK
    assert replies[1].startswith("outlook,temperature,humidity,wind,playtennis\n1:")
    assert len(replies) == 2


@pytest.mark.parametrize("name, reply", [
    ('', "Error: invalid table name."),
    (42, "Error: invalid table name."),
])
def test_select_invalid_name(db, cluster_folder, name, reply):
    assert _serve(db, cluster_folder, SELECT_TABLE, name) == [reply]


def test_select_missing_table(db, cluster_folder):
    replies = _serve(db, cluster_folder, SELECT_TABLE, 'nope')
    assert len(replies) == 1
    assert replies[0].startswith("Error while loading data:")


def test_cluster_requires_table(db, cluster_folder):
    assert _serve(db, cluster_folder, CLUSTER, 0.5) == ["Error: no table selected."]


@pytest.mark.parametrize("radius", [0, -1.0, 'wide', float('nan')])
def test_cluster_invalid_radius(db, cluster_folder, radius):
    replies = _serve(db, cluster_folder, SELECT_TABLE, 'playtennis', CLUSTER, radius)
    assert replies[2:] == ["Error: invalid radius."]


def test_cluster(db, cluster_folder):
    replies = _serve(db, cluster_folder, SELECT_TABLE, 'playtennis', CLUSTER, 1.2)
    ok, n_clusters, report = replies[2:]
    assert ok == OK
    assert isinstance(n_clusters, int) and n_clusters > 1
    assert report.startswith("\n1:Centroid=(")
    assert report.count("Centroid=") == n_clusters


def test_cluster_radius_too_large(db, cluster_folder):
    replies = _serve(db, cluster_folder, SELECT_TABLE, 'playtennis', CLUSTER, 10.0,
                     SAVE_CLUSTERS, 'out.dmp')
    assert replies[2:] == ["Clustering error: 14 tuples in one cluster!",
                           "Error: no clusters to save."]


def test_save_and_load(db, cluster_folder):
    replies = _serve(db, cluster_folder,
                     SELECT_TABLE, 'playtennis', CLUSTER, 1.2,
                     SAVE_CLUSTERS, 'weather.dmp', LOAD_CLUSTERS, 'weather.dmp')
    n_clusters = replies[3]
    assert replies[5] == OK
    assert replies[6] == OK
    listing = replies[7]
    assert listing.startswith("\n1:Centroid=(")
    assert listing.count("Centroid=") == n_clusters


def test_save_without_clusters(db, cluster_folder):
    assert _serve(db, cluster_folder, SAVE_CLUSTERS, 'x.dmp') == ["Error: no clusters to save."]
    assert _serve(db, cluster_folder, SAVE_CLUSTERS, '') == ["Error: invalid file name."]


def test_load_errors(db, cluster_folder, tmp_path):
    assert _serve(db, cluster_folder, LOAD_CLUSTERS, 'missing.dmp') == [
        "Error: cluster file not found."]

    (tmp_path / "clusters").mkdir()
    (tmp_path / "clusters" / "junk.dmp").write_bytes(b"definitely not clusters")
    replies = _serve(db, cluster_folder, LOAD_CLUSTERS, 'junk.dmp')
    assert len(replies) == 1
    assert replies[0].startswith("Error while loading clusters:")


def test_loaded_clusters_can_be_saved_again(db, cluster_folder):
    _serve(db, cluster_folder, SELECT_TABLE, 'playtennis', CLUSTER, 1.2,
           SAVE_CLUSTERS, 'a.dmp')
    replies = _serve(db, cluster_folder, LOAD_CLUSTERS, 'a.dmp', SAVE_CLUSTERS, 'b.dmp')
    assert replies[0] == OK
    assert replies[2:] == [OK]


def test_invalid_requests(db, cluster_folder):
    replies = _serve(db, cluster_folder, 'hello', 7, SELECT_TABLE, '')
    assert replies == ["Invalid request.", "Invalid command.", "Error: invalid table name."]


def test_stream_ends_between_command_and_payload(db, cluster_folder):
    assert _serve(db, cluster_folder, SELECT_TABLE) == []


def test_rejects_non_primitive_values(db, cluster_folder):
    with pytest.raises(pickle.UnpicklingError):
        _serve(db, cluster_folder, collections.OrderedDict())
