from __future__ import annotations
import datetime as dt
import math
from decimal import Decimal
from enum import Enum

import numpy as np
import pandas as pd

from ..exceptions import CellTypeMismatch


# A single cell value; None stands for SQL NULL
Cell = str | bool | int | float | dt.date | dt.time | dt.datetime | None

# Human readable list of the supported kinds (used in error messages)
SUPPORTED_KINDS:str = 'text, boolean, integer, float, date, time, timestamp or null'


class CellKind(Enum):
    """Tag for each of the concrete value kinds a cell may hold."""
    NULL = 0
    TEXT = 1
    BOOLEAN = 2
    INTEGER = 3
    FLOAT = 4
    DATE = 5
    TIME = 6
    TIMESTAMP = 7


def cell_kind(value:object) -> CellKind:
    """Returns the CellKind of the given value, or raises CellTypeMismatch if it is not a supported cell value.

        NOTE:
            - bool is checked before int, and datetime before date, since they are subclasses
    """
    match value:
        case None:
            return CellKind.NULL
        case bool():
            return CellKind.BOOLEAN
        case int():
            return CellKind.INTEGER
        case float():
            return CellKind.FLOAT
        case str():
            return CellKind.TEXT
        case dt.datetime():
            return CellKind.TIMESTAMP
        case dt.date():
            return CellKind.DATE
        case dt.time():
            return CellKind.TIME
        case _:
            raise CellTypeMismatch(value, SUPPORTED_KINDS)


def to_cell(value:object) -> Cell:
    """Normalizes a value coming from a DB driver or a DataFrame into a supported cell value.

        - numpy scalars -> the matching Python scalar
        - pandas.Timestamp / numpy.datetime64 -> datetime.datetime
        - timedelta within one day (MySQL TIME, pandas.Timedelta) -> datetime.time
        - NaN, NaT and pd.NA -> None
        - Decimal -> float

    Values of any other unsupported type are returned unchanged (and rejected later by cell_kind()).
    """

    # numpy datetimes go through pandas so that ns precision is not turned into an int by .item()
    if isinstance(value, np.datetime64):
        value = pd.Timestamp(value)
    elif isinstance(value, np.timedelta64):
        value = pd.Timedelta(value)

    # Missing values
    if value is None or value is pd.NA or value is pd.NaT:
        return None

    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()

    # Time of day as returned for TIME columns; durations outside one day are left for cell_kind() to reject
    if isinstance(value, dt.timedelta) and dt.timedelta(0) <= value < dt.timedelta(days=1):
        return _time_of_day(value)

    # numpy scalar types (int64, float64, bool_, ...)
    if isinstance(value, np.generic):
        value = value.item()

    if isinstance(value, Decimal):
        value = float(value)

    if isinstance(value, float) and math.isnan(value):
        return None

    return value


def _time_of_day(value:dt.timedelta) -> dt.time:
    """Returns the time of day [value] past midnight (0 <= value < 1 day)."""
    seconds, micro = divmod(value // dt.timedelta(microseconds=1), 1_000_000)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return dt.time(hours, minutes, seconds, micro)
