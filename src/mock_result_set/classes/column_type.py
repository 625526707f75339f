from enum import Enum, IntEnum
from typing import Iterable

import numpy as np
import pandas as pd
import psycopg2 as psql
import psycopg2.extensions as _psql_ext
from mysql.connector.constants import FieldType

from pandas.api.types import (
    is_integer_dtype,
    is_float_dtype,
    is_bool_dtype,
    is_datetime64_any_dtype,
    is_string_dtype,
    is_object_dtype,
)

from ..exceptions import DatabaseTypeNotSupported
from .cell import CellKind, cell_kind


class DatabaseType(Enum):
    """Enum of the database drivers whose cursors can be recorded into a MockResultSet."""
    MYSQL = 1
    POSTGRESQL = 2
    SQLITE = 3


class ColumnType(IntEnum):
    """Declared column type tags, using the standard SQL type codes.
    NOTE: a tag is only a declaration - it is never checked against the cells of its column."""
    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    NCHAR = -15
    NVARCHAR = -9
    LONGNVARCHAR = -16
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    TIME_WITH_TIMEZONE = 2013
    TIMESTAMP_WITH_TIMEZONE = 2014
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    NULL = 0
    OTHER = 1111
    JAVA_OBJECT = 2000
    DISTINCT = 2001
    STRUCT = 2002
    ARRAY = 2003
    BLOB = 2004
    CLOB = 2005
    REF = 2006
    DATALINK = 70
    BOOLEAN = 16
    ROWID = -8
    NCLOB = 2011
    SQLXML = 2009


# PostgreSQL type casters (compared against the OID in cursor.description) and their tags
# NOTE: order matters - INTERVAL is part of psycopg2.DATETIME, so it is checked first
_PSQL_TYPE_CASTERS:tuple = (
    (_psql_ext.BOOLEAN, ColumnType.BOOLEAN),
    (_psql_ext.INTEGER, ColumnType.INTEGER),
    (_psql_ext.LONGINTEGER, ColumnType.BIGINT),
    (_psql_ext.FLOAT, ColumnType.DOUBLE),
    (_psql_ext.DECIMAL, ColumnType.NUMERIC),
    (_psql_ext.DATE, ColumnType.DATE),
    (_psql_ext.TIME, ColumnType.TIME),
    (_psql_ext.INTERVAL, ColumnType.OTHER),
    (psql.DATETIME, ColumnType.TIMESTAMP),
    (psql.STRING, ColumnType.VARCHAR),
    (psql.BINARY, ColumnType.VARBINARY),
)


def column_type_for_value(value:object) -> ColumnType:
    """Returns the type tag a column holding the given cell value would declare."""
    match cell_kind(value):
        case CellKind.TEXT: return ColumnType.VARCHAR
        case CellKind.BOOLEAN: return ColumnType.BOOLEAN
        case CellKind.INTEGER: return ColumnType.BIGINT
        case CellKind.FLOAT: return ColumnType.DOUBLE
        case CellKind.DATE: return ColumnType.DATE
        case CellKind.TIME: return ColumnType.TIME
        case CellKind.TIMESTAMP: return ColumnType.TIMESTAMP
        case _: return ColumnType.NULL


def infer_column_type(values:Iterable[object]) -> ColumnType:
    """Returns the type tag for a column from its first non-null value (ColumnType.NULL if every value is null)."""
    for value in values:
        if value is not None:
            return column_type_for_value(value)
    return ColumnType.NULL


def column_type_for_dtype(dtype:pd.api.extensions.ExtensionDtype|np.dtype) -> ColumnType:
    """Map a pandas dtype to a column type tag.

    NOTE:
        - Uses BIGINT for all integer widths and DOUBLE for all float widths
        - object columns map to OTHER so that the caller can infer the tag from the values
    """
    # Normalize dtype
    try: dt = pd.api.types.pandas_dtype(dtype)
    except TypeError: dt = np.dtype("object")

    if is_bool_dtype(dt): return ColumnType.BOOLEAN
    if is_integer_dtype(dt): return ColumnType.BIGINT
    if is_float_dtype(dt): return ColumnType.DOUBLE
    if is_datetime64_any_dtype(dt): return ColumnType.TIMESTAMP
    if is_object_dtype(dt): return ColumnType.OTHER
    if is_string_dtype(dt): return ColumnType.VARCHAR

    # Catchall - timedelta, categorical, bytes, ...
    return ColumnType.OTHER


def column_type_for_type_code(type_code:object, database_type:DatabaseType) -> ColumnType:
    """Map the type_code of a DB-API cursor.description entry to a column type tag, based on the driver it came from.
    Unknown codes map to ColumnType.OTHER."""

    match database_type:

        # POSTGRESQL (type_code is the type OID)
        case DatabaseType.POSTGRESQL:
            if type_code is None: return ColumnType.OTHER
            for caster, column_type in _PSQL_TYPE_CASTERS:
                if caster == type_code:
                    return column_type
            return ColumnType.OTHER

        # MYSQL (type_code is a FieldType constant)
        case DatabaseType.MYSQL:
            match type_code:
                case FieldType.BIT: return ColumnType.BIT
                case FieldType.TINY: return ColumnType.TINYINT
                case FieldType.SHORT: return ColumnType.SMALLINT
                case FieldType.LONG | FieldType.INT24 | FieldType.YEAR: return ColumnType.INTEGER
                case FieldType.LONGLONG: return ColumnType.BIGINT
                case FieldType.FLOAT: return ColumnType.REAL
                case FieldType.DOUBLE: return ColumnType.DOUBLE
                case FieldType.DECIMAL | FieldType.NEWDECIMAL: return ColumnType.DECIMAL
                case FieldType.DATE | FieldType.NEWDATE: return ColumnType.DATE
                case FieldType.TIME: return ColumnType.TIME
                case FieldType.DATETIME | FieldType.TIMESTAMP: return ColumnType.TIMESTAMP
                case FieldType.VARCHAR | FieldType.VAR_STRING | FieldType.ENUM | FieldType.SET | FieldType.JSON: return ColumnType.VARCHAR
                case FieldType.STRING: return ColumnType.CHAR
                # NOTE: MySQL reports TEXT columns with the BLOB codes; bytes are not a supported cell kind anyway
                case FieldType.TINY_BLOB | FieldType.MEDIUM_BLOB | FieldType.LONG_BLOB | FieldType.BLOB: return ColumnType.LONGVARCHAR
                case FieldType.NULL: return ColumnType.NULL
                case _: return ColumnType.OTHER

        # SQLITE (the sqlite3 module never reports type codes)
        case DatabaseType.SQLITE:
            return ColumnType.OTHER

        # UNSUPPORTED
        case _:
            raise DatabaseTypeNotSupported(database_type)
