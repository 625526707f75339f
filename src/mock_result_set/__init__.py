from .classes.mock_result_set import MockResultSet
from .classes.result_set_metadata import MockResultSetMetaData
from .classes.column_type import ColumnType, DatabaseType
from .classes.cell import Cell, CellKind
from .classes.db_cursor import DBCursor, ResultSet
from .exceptions import *

__version__ = "0.1.0"

__all__ = [
    "MockResultSet",
    "MockResultSetMetaData",
    "ColumnType",
    "DatabaseType",
    "Cell",
    "CellKind",
    "DBCursor",
    "ResultSet",
    "ColumnIndexOutOfRange",
    "NoCurrentRow",
    "UnsupportedOperation",
    "CellTypeMismatch",
    "ColumnDescriptorMismatch",
    "DatabaseTypeNotSupported",
]
