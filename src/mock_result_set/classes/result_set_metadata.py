from __future__ import annotations
import numbers
from typing import Sequence

from ..exceptions import ColumnIndexOutOfRange
from .column_type import ColumnType
from .unsupported import UnsupportedOperationsMixin


def _is_column_index(column:object) -> bool:
    """Column indexes are integers (numpy integers included); bool and float are not accepted."""
    return isinstance(column, numbers.Integral) and not isinstance(column, bool)


class MockResultSetMetaData(UnsupportedOperationsMixin):
    """Read-only description of the columns of a MockResultSet: count, labels and declared types.
    Column indexes are 1-based. Built once alongside the result set and never modified."""

    _unsupported_operations = frozenset({
        'get_column_name',
        'get_column_type_name',
        'get_column_class_name',
        'get_column_display_size',
        'get_precision',
        'get_scale',
        'get_schema_name',
        'get_table_name',
        'get_catalog_name',
        'is_auto_increment',
        'is_case_sensitive',
        'is_searchable',
        'is_currency',
        'is_nullable',
        'is_signed',
        'is_read_only',
        'is_writable',
        'is_definitely_writable',
        'unwrap',
        'is_wrapper_for',
    })


    def __init__(self, column_count:int, labels:Sequence[str], types:Sequence[ColumnType|int]):
        self._column_count = column_count
        self._labels:tuple[str, ...] = tuple(labels)
        self._types:tuple[ColumnType, ...] = tuple(ColumnType(t) for t in types)


    def _check_index(self, column:int) -> int:
        """Returns the 0-based position for the given 1-based column index (raises ColumnIndexOutOfRange)."""
        if not _is_column_index(column) or not 1 <= column <= self._column_count:
            raise ColumnIndexOutOfRange(column, self._column_count)
        return int(column) - 1


    def get_column_count(self) -> int:
        return self._column_count


    def get_column_label(self, column:int) -> str:
        return self._labels[self._check_index(column)]


    def get_column_type(self, column:int) -> ColumnType:
        return self._types[self._check_index(column)]


    def __repr__(self) -> str:
        cols = ', '.join(f'{label}:{t.name}' for label, t in zip(self._labels, self._types))
        return f'MockResultSetMetaData({cols})'
