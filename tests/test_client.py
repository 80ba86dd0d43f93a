import socket

import pytest

from qtminer.client import main, read_radius, run_console
from qtminer.client import ServerError


def _answers(*values):
    it = iter(values)
    return lambda _prompt: next(it)


def test_read_radius_reprompts(capsys):
    assert read_radius(_answers('abc', '0', '-1', 'nan', 'inf', '0.25')) == 0.25
    out = capsys.readouterr().out
    assert out.count("Invalid input.") == 5


class FakeClient:
    """Records console calls; cluster fails for negative tests."""

    def __init__(self, fail_cluster=False):
        self.calls = []
        self.fail_cluster = fail_cluster

    def select_table(self, name):
        self.calls.append(('select', name))
        if name == 'nope':
            raise ServerError("Error while loading data: Table 'nope' does not exist")
        return "x\n1:1.0\n"

    def cluster(self, radius):
        self.calls.append(('cluster', radius))
        if self.fail_cluster:
            raise ServerError("Clustering error: 3 tuples in one cluster!")
        return 2, "\n1:Centroid=(1.0)\n"

    def save_clusters(self, name):
        self.calls.append(('save', name))

    def load_clusters(self, name):
        self.calls.append(('load', name))
        return "\n1:Centroid=(1.0)\n"


def test_console_cluster_and_default_file_name(capsys):
    client = FakeClient()
    run_console(client, _answers('2', 'playtennis', '0.5', '', 'y', '0.7', 'out.dmp', 'n', 'n'))
    assert client.calls == [
        ('select', 'playtennis'),
        ('cluster', 0.5), ('save', 'playtennis0.5.dmp'),
        ('cluster', 0.7), ('save', 'out.dmp'),
    ]
    out = capsys.readouterr().out
    assert out.count("Number of clusters: 2") == 2


def test_console_reports_errors_and_continues(capsys):
    client = FakeClient(fail_cluster=True)
    run_console(client, _answers('3', '2', 'nope', 'y', '2', 'playtennis', '1', 'n', 'y', '1', 'a.dmp', 'n'))
    assert ('select', 'nope') in client.calls
    assert ('cluster', 1.0) in client.calls
    assert ('load', 'a.dmp') in client.calls
    assert not any(call[0] == 'save' for call in client.calls)
    out = capsys.readouterr().out
    assert "Error: Error while loading data" in out
    assert "Error: Clustering error: 3 tuples in one cluster!" in out


def test_main_without_server(capsys):
    with socket.socket() as probe:
        probe.bind(('127.0.0.1', 0))
        port = probe.getsockname()[1]
    main(['127.0.0.1', str(port)])
    out = capsys.readouterr().out
    assert out.rstrip().endswith("Bye.")
