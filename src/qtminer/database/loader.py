"""
Build a record set from a database table.
"""

import logging

from .db_access import DbAccess
from .table_data import QueryType, TableData
from .table_schema import TableSchema
from ..data.attributes import ContinuousAttribute, DiscreteAttribute
from ..data.record_set import RecordSet

logger = logging.getLogger(__name__)


def load_record_set(db: DbAccess, table_name: str) -> RecordSet:
    """Load the distinct rows of ``table_name`` with their schema.

    Numeric columns become continuous attributes bounded by MIN/MAX; other
    columns become categorical over their distinct values. A numeric column
    whose MIN equals its MAX is loaded as categorical.

    Args:
        db: Database access
        table_name: Table to read

    Returns:
        Record set for the table

    Raises:
        NoDataError: If the table is missing or has no rows
        DatabaseConnectionError: If the database cannot be queried
        NoValueError: If a numeric column has no MIN/MAX
    """
    with db.connection() as conn:
        schema = TableSchema(conn, table_name)
        data = TableData(conn, table_name)
        rows = data.distinct_rows(schema)

        attributes = []
        constant = set()
        for index, column in enumerate(schema):
            if column.is_number:
                low = data.aggregate_column_value(column, QueryType.MIN)
                high = data.aggregate_column_value(column, QueryType.MAX)
                if low < high:
                    attributes.append(ContinuousAttribute(column.name, index, low, high))
                    continue
                constant.add(index)
            values = data.distinct_column_values(column)
            attributes.append(DiscreteAttribute(
                column.name, index, tuple(str(v) for v in values)))

    if constant:
        rows = [
            tuple(str(v) if i in constant else v for i, v in enumerate(row))
            for row in rows
        ]
    logger.info("Loaded %d records with %d attributes from '%s'",
                len(rows), len(attributes), table_name)
    return RecordSet(attributes, rows)
