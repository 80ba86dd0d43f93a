"""
Database access for the relational record source.
"""

from contextlib import contextmanager
from typing import Iterator, Optional
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..config import Config
from ..exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class DbAccess:
    """Lazily created SQLAlchemy engine with per-use connections.

    Connections are opened for one load and closed right after; nothing is
    held across requests.
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url or Config.DATABASE_URL
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            try:
                self._engine = create_engine(self.url)
            except (SQLAlchemyError, ImportError) as e:
                raise DatabaseConnectionError(f"Cannot create database engine: {e}") from e
        return self._engine

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Open a connection and always close it afterwards.

        Raises:
            DatabaseConnectionError: If the database cannot be reached
        """
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Database connection error: {e}") from e
        try:
            yield conn
        finally:
            conn.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
