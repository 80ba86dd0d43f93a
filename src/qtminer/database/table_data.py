"""
Queries over the rows of a database table.
"""

from enum import Enum
from typing import Any, List, Tuple

from sqlalchemy import MetaData, Table, and_, func, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from .table_schema import Column, TableSchema
from ..exceptions import DatabaseConnectionError, NoDataError, NoValueError


class QueryType(Enum):
    MIN = 'min'
    MAX = 'max'


class TableData:
    """Distinct rows, distinct values and aggregates of one table."""

    def __init__(self, conn: Connection, table_name: str):
        self.conn = conn
        self.table_name = table_name
        try:
            self.table = Table(table_name, MetaData(), autoload_with=conn)
        except NoSuchTableError as e:
            raise NoDataError(f"Table '{table_name}' does not exist") from e
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Cannot load table '{table_name}': {e}") from e

    def _execute(self, statement):
        try:
            return self.conn.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Query on '{self.table_name}' failed: {e}") from e

    def distinct_rows(self, schema: TableSchema) -> List[Tuple[Any, ...]]:
        """Distinct rows over the schema's columns, ordered by every column.

        Rows holding NULL in any selected column are skipped. Numeric values
        are returned as float, others as str.

        Raises:
            NoDataError: If the schema is empty or no row qualifies
        """
        if schema.n_attributes == 0:
            raise NoDataError(f"Table '{self.table_name}' has no usable columns")

        columns = [self.table.c[column.name] for column in schema]
        statement = (
            select(*columns)
            .where(and_(*(c.is_not(None) for c in columns)))
            .distinct()
            .order_by(*columns)
        )
        rows = [
            tuple(float(v) if column.is_number else str(v) for column, v in zip(schema, row))
            for row in self._execute(statement)
        ]
        if not rows:
            raise NoDataError(f"Table '{self.table_name}' is empty")
        return rows

    def distinct_column_values(self, column: Column) -> List[Any]:
        """Sorted distinct non-NULL values of ``column``."""
        c = self.table.c[column.name]
        statement = select(c).where(c.is_not(None)).distinct().order_by(c)
        return [
            float(v) if column.is_number else str(v)
            for (v,) in self._execute(statement)
        ]

    def aggregate_column_value(self, column: Column, aggregate: QueryType) -> Any:
        """MIN or MAX of ``column``.

        Raises:
            NoValueError: If the aggregate is NULL
        """
        c = self.table.c[column.name]
        op = func.min if aggregate is QueryType.MIN else func.max
        value = self._execute(select(op(c))).scalar()
        if value is None:
            raise NoValueError(f"No {aggregate.value} on {column.name}")
        return float(value) if column.is_number else value
