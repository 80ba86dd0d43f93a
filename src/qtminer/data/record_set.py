"""
Record sets: the immutable, schema-described input of the QT miner.

A record set is built once per clustering request and never modified
afterwards. Clusters refer to its records by 0-based index.
"""

from typing import Any, List, Optional, Sequence, Tuple
import numpy as np

from .attributes import (
    Attribute, ContinuousAttribute, DiscreteAttribute,
    infer_attribute, validate_schema,
)
from .items import make_item
from .tuples import ItemTuple
from ..exceptions import InvalidArgumentError


class RecordSet:
    """Indexable collection of fixed-length records sharing one schema."""

    def __init__(self, schema: Sequence[Attribute], rows: Sequence[Sequence[Any]]):
        """
        Args:
            schema: Attributes in positional order (index i describes column i)
            rows: Raw records, each with exactly one value per attribute.
                NumPy scalars are stored as their Python equivalents

        Raises:
            InvalidArgumentError: If the schema is inconsistent or a row has
                the wrong length
        """
        self._schema = validate_schema(schema)
        n_attributes = len(self._schema)

        records = []
        for position, row in enumerate(rows):
            row = tuple(_to_builtin(v) for v in row)
            if len(row) != n_attributes:
                raise InvalidArgumentError(
                    f"Record {position} has {len(row)} values, expected {n_attributes}")
            records.append(row)
        self._rows: Tuple[Tuple[Any, ...], ...] = tuple(records)

        # Tuples are built lazily and reused; records never change
        self._tuples: List[Optional[ItemTuple]] = [None] * len(self._rows)

    @classmethod
    def from_rows(cls, names: Sequence[str], rows: Sequence[Sequence[Any]]) -> 'RecordSet':
        """Build a record set, inferring the schema from the values.

        Numeric columns become continuous attributes bounded by their
        observed min/max; other columns become categorical and their values
        are converted to strings (continuous values to float).

        Args:
            names: Column names
            rows: Raw records

        Returns:
            New record set
        """
        rows = [tuple(row) for row in rows]
        for position, row in enumerate(rows):
            if len(row) != len(names):
                raise InvalidArgumentError(
                    f"Record {position} has {len(row)} values, expected {len(names)}")

        schema = [
            infer_attribute(name, index, (row[index] for row in rows))
            for index, name in enumerate(names)
        ]
        # Stored values match their attribute kind: float or str
        convert = [float if isinstance(attr, ContinuousAttribute) else str for attr in schema]
        rows = [tuple(fn(v) for fn, v in zip(convert, row)) for row in rows]
        return cls(schema, rows)

    @property
    def schema(self) -> Tuple[Attribute, ...]:
        """Attribute schema shared by every record."""
        return self._schema

    @property
    def n_examples(self) -> int:
        """Number of records."""
        return len(self._rows)

    @property
    def n_attributes(self) -> int:
        """Number of attributes per record."""
        return len(self._schema)

    def __len__(self) -> int:
        return len(self._rows)

    def attribute(self, index: int) -> Attribute:
        return self._schema[index]

    def continuous_attributes(self) -> List[ContinuousAttribute]:
        return [a for a in self._schema if isinstance(a, ContinuousAttribute)]

    def value(self, example: int, attribute: int) -> Any:
        """Raw value of one attribute of one record."""
        return self._rows[example][attribute]

    def row(self, example: int) -> Tuple[Any, ...]:
        return self._rows[example]

    def get_item_set(self, example: int) -> ItemTuple:
        """Distance-capable tuple for record ``example``."""
        cached = self._tuples[example]
        if cached is None:
            cached = ItemTuple(
                make_item(attribute, value)
                for attribute, value in zip(self._schema, self._rows[example])
            )
            self._tuples[example] = cached
        return cached

    def __str__(self) -> str:
        lines = [','.join(attribute.name for attribute in self._schema)]
        for position, row in enumerate(self._rows, start=1):
            lines.append(f"{position}:" + ', '.join(str(v) for v in row))
        return '\n'.join(lines) + '\n'

    def __repr__(self) -> str:
        return f"RecordSet(n_examples={self.n_examples}, n_attributes={self.n_attributes})"


def _to_builtin(value: Any) -> Any:
    """Unwrap NumPy scalars so stored records hold plain Python values."""
    if isinstance(value, np.generic):
        return value.item()
    return value
