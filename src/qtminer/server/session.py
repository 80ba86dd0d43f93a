"""
Per-connection session state and command handling.

A session owns everything one client works with: the selected table and the
miner holding the last computed (or loaded) clusters. Sessions never share
state, so no locking is needed between connections.
"""

from typing import Any, Callable, Dict, List, Optional
import logging
import math
import os
import pickle

from .protocol import (
    CLUSTER, LOAD_CLUSTERS, OK, SAVE_CLUSTERS, SELECT_TABLE,
    ObjectStream, is_integer,
)
from ..data.attributes import is_number
from ..database.db_access import DbAccess
from ..database.loader import load_record_set
from ..exceptions import (
    ClusteringRadiusError, DataSourceError, EmptyDatasetError, InvalidArgumentError,
)
from ..mining.qt_miner import QTMiner

logger = logging.getLogger(__name__)

# Errors a corrupt or foreign cluster file can produce while unpickling
_LOAD_ERRORS = (
    OSError, EOFError, pickle.UnpicklingError,
    AttributeError, ImportError, IndexError, KeyError, TypeError, ValueError,
)


class Session:
    """State and command handlers of one client connection."""

    def __init__(self, stream: ObjectStream, db: DbAccess, cluster_folder: str):
        self.stream = stream
        self.db = db
        self.cluster_folder = cluster_folder
        self.table_name: Optional[str] = None
        self.miner: Optional[QTMiner] = None
        self._handlers: Dict[int, Callable[[Any], List[Any]]] = {
            SELECT_TABLE: self.select_table,
            CLUSTER: self.cluster,
            SAVE_CLUSTERS: self.save_clusters,
            LOAD_CLUSTERS: self.load_clusters,
        }

    def serve(self) -> None:
        """Answer requests until the client closes the connection.

        Raises:
            pickle.UnpicklingError: If the client sends a malformed value
        """
        while True:
            try:
                request = self.stream.read()
            except EOFError:
                return

            if not is_integer(request):
                self.stream.write("Invalid request.")
                continue
            handler = self._handlers.get(request)
            if handler is None:
                self.stream.write("Invalid command.")
                continue

            try:
                payload = self.stream.read()
            except EOFError:
                return
            logger.info("Command %d with %r", request, payload)
            self.stream.write(*handler(payload))

    def _resolve(self, file_name: str) -> str:
        return os.path.join(self.cluster_folder, file_name)

    def select_table(self, table_name: Any) -> List[Any]:
        """Load ``table_name`` and remember it for later clustering requests."""
        if not isinstance(table_name, str) or not table_name:
            return ["Error: invalid table name."]
        try:
            record_set = load_record_set(self.db, table_name)
        except DataSourceError as e:
            return [f"Error while loading data: {e}"]
        self.table_name = table_name
        return [OK, str(record_set)]

    def cluster(self, radius: Any) -> List[Any]:
        """Reload the selected table and cluster it with ``radius``."""
        if not is_number(radius) or not math.isfinite(radius) or radius <= 0:
            return ["Error: invalid radius."]
        if self.table_name is None:
            return ["Error: no table selected."]

        self.miner = None
        try:
            record_set = load_record_set(self.db, self.table_name)
            miner = QTMiner(float(radius))
            n_clusters = miner.compute(record_set)
        except DataSourceError as e:
            return [f"Error while loading data: {e}"]
        except (EmptyDatasetError, ClusteringRadiusError, InvalidArgumentError) as e:
            return [f"Clustering error: {e}"]

        self.miner = miner
        return [OK, n_clusters, miner.cluster_set.to_string(record_set)]

    def save_clusters(self, file_name: Any) -> List[Any]:
        """Save the current clusters under ``file_name``."""
        if not isinstance(file_name, str) or not file_name:
            return ["Error: invalid file name."]
        if self.miner is None:
            return ["Error: no clusters to save."]
        try:
            os.makedirs(self.cluster_folder, exist_ok=True)
            self.miner.save(self._resolve(file_name))
        except OSError as e:
            return [f"Error while saving clusters: {e}"]
        return [OK]

    def load_clusters(self, file_name: Any) -> List[Any]:
        """Replace the current clusters with those saved in ``file_name``."""
        if not isinstance(file_name, str) or not file_name:
            return ["Error: invalid file name."]
        try:
            miner = QTMiner.load(self._resolve(file_name))
        except FileNotFoundError:
            return ["Error: cluster file not found."]
        except _LOAD_ERRORS as e:
            return [f"Error while loading clusters: {e}"]
        self.miner = miner
        return [OK, str(miner.cluster_set)]
