import importlib

import qtminer.config as config_module
from qtminer.server.multi_server import build_parser


def test_defaults(monkeypatch):
    for name in ('QTMINER_DATABASE_URL', 'QTMINER_HOST', 'QTMINER_PORT',
                 'QTMINER_CLUSTER_FOLDER', 'QTMINER_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    Config = importlib.reload(config_module).Config
    assert Config.DATABASE_URL == 'sqlite:///qtminer.db'
    assert Config.HOST == '0.0.0.0'
    assert Config.PORT == 8080
    assert Config.CLUSTER_FOLDER == 'clusters'
    assert Config.LOG_LEVEL == 'INFO'


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv('QTMINER_PORT', '9100')
    monkeypatch.setenv('QTMINER_CLUSTER_FOLDER', '/tmp/qt')
    Config = importlib.reload(config_module).Config
    assert Config.PORT == 9100
    assert Config.CLUSTER_FOLDER == '/tmp/qt'
    monkeypatch.undo()
    importlib.reload(config_module)


def test_server_flags():
    args = build_parser().parse_args(['--port', '0', '--database-url', 'sqlite://',
                                      '--log-level', 'debug'])
    assert args.port == 0
    assert args.database_url == 'sqlite://'
    assert args.log_level == 'debug'
