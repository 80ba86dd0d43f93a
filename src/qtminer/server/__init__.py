"""Session protocol and the threaded clustering server."""

from .protocol import (
    OK,
    SELECT_TABLE,
    CLUSTER,
    SAVE_CLUSTERS,
    LOAD_CLUSTERS,
    ObjectStream
)

from .session import Session
from .multi_server import MultiServer, main

__all__ = [
    # Protocol
    'OK',
    'SELECT_TABLE',
    'CLUSTER',
    'SAVE_CLUSTERS',
    'LOAD_CLUSTERS',
    'ObjectStream',

    # Server
    'Session',
    'MultiServer',
    'main'
]
