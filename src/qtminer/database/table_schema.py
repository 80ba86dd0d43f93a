"""
Column discovery for a database table.
"""

from dataclasses import dataclass
from typing import Iterator, List

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError
from sqlalchemy.types import Boolean, Integer, Numeric, String, TypeEngine

from ..exceptions import DatabaseConnectionError, NoDataError


@dataclass(frozen=True)
class Column:
    """Table column reduced to its name and a coarse kind."""

    name: str
    kind: str  # 'number' or 'string'

    @property
    def is_number(self) -> bool:
        return self.kind == 'number'

    def __str__(self) -> str:
        return f"{self.name}:{self.kind}"


def column_kind(sql_type: TypeEngine):
    """Map an SQL type to 'number', 'string' or None (unsupported)."""
    if isinstance(sql_type, (Integer, Numeric)):
        return 'number'
    if isinstance(sql_type, (String, Boolean)):
        return 'string'
    return None


class TableSchema:
    """Supported columns of a table, in table order.

    Columns whose SQL type is neither numeric nor textual are skipped.
    """

    def __init__(self, conn: Connection, table_name: str):
        self.table_name = table_name
        try:
            reflected = inspect(conn).get_columns(table_name)
        except NoSuchTableError as e:
            raise NoDataError(f"Table '{table_name}' does not exist") from e
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Cannot read schema of '{table_name}': {e}") from e

        self.columns: List[Column] = []
        for info in reflected:
            kind = column_kind(info['type'])
            if kind is not None:
                self.columns.append(Column(info['name'], kind))

    @property
    def n_attributes(self) -> int:
        return len(self.columns)

    def __getitem__(self, index: int) -> Column:
        return self.columns[index]

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)
