"""Relational record source built on SQLAlchemy."""

from .db_access import DbAccess
from .table_schema import Column, TableSchema, column_kind
from .table_data import QueryType, TableData
from .loader import load_record_set

__all__ = [
    'DbAccess',
    'Column',
    'TableSchema',
    'column_kind',
    'QueryType',
    'TableData',
    'load_record_set'
]
