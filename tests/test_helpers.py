import datetime as dt
import logging
import sqlite3
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest
from mysql.connector.constants import FieldType

from mock_result_set import ColumnType, DatabaseType, CellKind, CellTypeMismatch, DatabaseTypeNotSupported
from mock_result_set.classes.cell import cell_kind, to_cell
from mock_result_set.classes.column_type import (
    column_type_for_dtype,
    column_type_for_type_code,
    column_type_for_value,
    infer_column_type,
)
from mock_result_set.utils.general import setup_logger, cursor_database_type


@pytest.mark.parametrize(
    "value,kind",
    [
        (None, CellKind.NULL),
        ("a", CellKind.TEXT),
        (True, CellKind.BOOLEAN),       # NOT INTEGER
        (3, CellKind.INTEGER),
        (3.5, CellKind.FLOAT),
        (dt.date(2020, 1, 1), CellKind.DATE),
        (dt.datetime(2020, 1, 1), CellKind.TIMESTAMP),   # NOT DATE
        (dt.time(1, 2), CellKind.TIME),
    ],
)
def test_cell_kind(value, kind):
    """Testing cell_kind() for every supported kind."""
    assert cell_kind(value) is kind


@pytest.mark.parametrize("value", [b"x", Decimal("1"), dt.timedelta(1), {"a": 1}])
def test_cell_kind_rejects_unsupported(value):
    """Testing that cell_kind() raises for values outside the cell kinds."""
    with pytest.raises(CellTypeMismatch):
        cell_kind(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        (np.int64(5), 5),
        (np.float64(2.5), 2.5),
        (np.bool_(True), True),
        (np.float64("nan"), None),
        (float("nan"), None),
        (pd.NaT, None),
        (pd.NA, None),
        (None, None),
        (pd.Timestamp("2020-01-02 03:04:05"), dt.datetime(2020, 1, 2, 3, 4, 5)),
        (np.datetime64("2020-01-02T03:04:05"), dt.datetime(2020, 1, 2, 3, 4, 5)),
        (np.datetime64("NaT"), None),
        (Decimal("1.25"), 1.25),
        ("text", "text"),
        (dt.date(2020, 1, 2), dt.date(2020, 1, 2)),
        (dt.timedelta(hours=10, minutes=30, microseconds=5), dt.time(10, 30, 0, 5)),
        (pd.Timedelta("1h"), dt.time(1)),
        (np.timedelta64(90, "s"), dt.time(0, 1, 30)),
        (dt.timedelta(days=1), dt.timedelta(days=1)),      # not a time of day
        (dt.timedelta(hours=-1), dt.timedelta(hours=-1)),
    ],
)
def test_to_cell(value, expected):
    """Testing to_cell() normalization of numpy, pandas and driver values."""

    cell = to_cell(value)

    assert cell == expected
    assert type(cell) is type(expected)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("a", ColumnType.VARCHAR),
        (False, ColumnType.BOOLEAN),
        (1, ColumnType.BIGINT),
        (1.0, ColumnType.DOUBLE),
        (dt.date(2020, 1, 1), ColumnType.DATE),
        (dt.time(0, 0), ColumnType.TIME),
        (dt.datetime(2020, 1, 1), ColumnType.TIMESTAMP),
        (None, ColumnType.NULL),
    ],
)
def test_column_type_for_value(value, expected):
    """Testing the type tag inferred for each cell kind."""
    assert column_type_for_value(value) is expected


def test_infer_column_type_skips_nulls():
    """Testing that infer_column_type() uses the first non-null value."""
    assert infer_column_type([None, None, dt.date(2020, 1, 1), "x"]) is ColumnType.DATE
    assert infer_column_type([None, None]) is ColumnType.NULL
    assert infer_column_type([]) is ColumnType.NULL


@pytest.mark.parametrize(
    "dtype,expected",
    [
        (np.dtype("int64"), ColumnType.BIGINT),
        (np.dtype("int8"), ColumnType.BIGINT),
        ("Int64", ColumnType.BIGINT),
        (np.dtype("float64"), ColumnType.DOUBLE),
        (np.dtype("bool"), ColumnType.BOOLEAN),
        ("boolean", ColumnType.BOOLEAN),
        ("datetime64[ns]", ColumnType.TIMESTAMP),
        ("string", ColumnType.VARCHAR),
        (np.dtype("object"), ColumnType.OTHER),
        ("timedelta64[ns]", ColumnType.OTHER),
    ],
)
def test_column_type_for_dtype(dtype, expected):
    """Testing the pandas dtype to type tag mapping."""

    # Build an empty Series to extract the dtype from the pandas pathway where necessary
    if isinstance(dtype, str):
        dt_ = pd.Series(pd.array([], dtype=dtype)).dtype
    else:
        dt_ = dtype

    assert column_type_for_dtype(dt_) is expected


@pytest.mark.parametrize(
    "dbtype,type_code,expected",
    [
        (DatabaseType.POSTGRESQL, 16, ColumnType.BOOLEAN),
        (DatabaseType.POSTGRESQL, 23, ColumnType.INTEGER),
        (DatabaseType.POSTGRESQL, 20, ColumnType.BIGINT),
        (DatabaseType.POSTGRESQL, 701, ColumnType.DOUBLE),
        (DatabaseType.POSTGRESQL, 1700, ColumnType.NUMERIC),
        (DatabaseType.POSTGRESQL, 1082, ColumnType.DATE),
        (DatabaseType.POSTGRESQL, 1083, ColumnType.TIME),
        (DatabaseType.POSTGRESQL, 1114, ColumnType.TIMESTAMP),
        (DatabaseType.POSTGRESQL, 1186, ColumnType.OTHER),      # INTERVAL
        (DatabaseType.POSTGRESQL, 25, ColumnType.VARCHAR),
        (DatabaseType.POSTGRESQL, 1043, ColumnType.VARCHAR),
        (DatabaseType.POSTGRESQL, 17, ColumnType.VARBINARY),
        (DatabaseType.POSTGRESQL, None, ColumnType.OTHER),
        (DatabaseType.POSTGRESQL, 999999, ColumnType.OTHER),

        (DatabaseType.MYSQL, FieldType.TINY, ColumnType.TINYINT),
        (DatabaseType.MYSQL, FieldType.LONG, ColumnType.INTEGER),
        (DatabaseType.MYSQL, FieldType.LONGLONG, ColumnType.BIGINT),
        (DatabaseType.MYSQL, FieldType.DOUBLE, ColumnType.DOUBLE),
        (DatabaseType.MYSQL, FieldType.NEWDECIMAL, ColumnType.DECIMAL),
        (DatabaseType.MYSQL, FieldType.DATE, ColumnType.DATE),
        (DatabaseType.MYSQL, FieldType.TIME, ColumnType.TIME),
        (DatabaseType.MYSQL, FieldType.DATETIME, ColumnType.TIMESTAMP),
        (DatabaseType.MYSQL, FieldType.VAR_STRING, ColumnType.VARCHAR),
        (DatabaseType.MYSQL, FieldType.BLOB, ColumnType.LONGVARCHAR),
        (DatabaseType.MYSQL, None, ColumnType.OTHER),

        (DatabaseType.SQLITE, None, ColumnType.OTHER),
    ],
)
def test_column_type_for_type_code(dbtype, type_code, expected):
    """Testing the DB-API type_code to type tag mapping for PSQL, MySQL and SQLITE."""
    assert column_type_for_type_code(type_code, dbtype) is expected


def test_column_type_for_type_code_unsupported_db():
    """Testing that an unknown database type raises DatabaseTypeNotSupported."""
    with pytest.raises(DatabaseTypeNotSupported):
        column_type_for_type_code(1, "oracle")


def test_cursor_database_type():
    """Testing cursor_database_type() for an SQLite cursor and an unknown object."""

    cxn = sqlite3.connect(":memory:")
    try:
        assert cursor_database_type(cxn.cursor()) is DatabaseType.SQLITE
    finally:
        cxn.close()

    assert cursor_database_type(object()) is None


def test_setup_logger_no_duplicate_handlers(tmp_path):
    """Testing that calling setup_logger() twice for the same name keeps a single file handler."""

    log_path = tmp_path / "nested" / "out.log"
    logger = setup_logger(str(log_path), "test_setup_logger_no_duplicate_handlers", min_level=logging.INFO)
    again = setup_logger(str(log_path), "test_setup_logger_no_duplicate_handlers", min_level=logging.INFO)

    assert again is logger
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    logger.info("hello")
    logger.debug("hidden")
    logger.handlers[0].flush()

    text = log_path.read_text(encoding="utf-8")
    assert "INFO: hello" in text
    assert "hidden" not in text


def test_setup_logger_bare_filename(tmp_path, monkeypatch):
    """Testing that a log path without a directory is written to the working directory."""

    monkeypatch.chdir(tmp_path)
    logger = setup_logger("bare.log", "test_setup_logger_bare_filename")
    logger.warning("careful")
    logger.handlers[0].flush()

    assert "WARNING: careful" in (tmp_path / "bare.log").read_text(encoding="utf-8")
