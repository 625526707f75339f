from __future__ import annotations
import datetime as dt
from typing import Protocol, Any, Sequence, runtime_checkable

# NOTE: rows can be tuples (default) or dict-like
Row = Any


@runtime_checkable
class DBCursor(Protocol):
    """The part of a DB-API cursor (sqlite3, psycopg2, mysql.connector) that MockResultSet.from_cursor() reads."""

    # (name, type_code, ...) per column, or None if no query returning rows was executed
    description: Sequence[Sequence[Any]] | None

    def fetchall(self) -> list[Row]: ...


@runtime_checkable
class ResultSet(Protocol):
    """The forward-only, typed-read surface of a result set, as implemented by MockResultSet.
    Code that scans query results can type against this instead of the mock."""

    # Traversal
    def next(self) -> bool: ...

    # Typed reads (1-based column index)
    def get_string(self, column_index: int) -> str | None: ...
    def get_boolean(self, column_index: int) -> bool: ...
    def get_double(self, column_index: int) -> float: ...
    def get_date(self, column_index: int) -> dt.date | None: ...
    def get_time(self, column_index: int) -> dt.time | None: ...
    def get_timestamp(self, column_index: int) -> dt.datetime | None: ...

    # Null flag & metadata
    def was_null(self) -> bool: ...
    def get_metadata(self) -> Any: ...
