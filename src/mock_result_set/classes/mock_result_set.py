# Standard imports
import logging
from collections.abc import Mapping
from typing import Iterable, NoReturn, Sequence
import datetime as dt
import pandas as pd

# Custom utils and objs
from ..utils.general import setup_logger, cursor_database_type
from ..exceptions import ColumnIndexOutOfRange, NoCurrentRow, CellTypeMismatch, ColumnDescriptorMismatch, UnsupportedOperation, DatabaseTypeNotSupported
from .cell import Cell, CellKind, cell_kind, to_cell
from .column_type import ColumnType, DatabaseType, column_type_for_dtype, column_type_for_type_code, infer_column_type
from .db_cursor import DBCursor
from .result_set_metadata import MockResultSetMetaData, _is_column_index
from .unsupported import UnsupportedOperationsMixin


# MockResultSet class definition
class MockResultSet(UnsupportedOperationsMixin):
    """A forward-only, read-only result set over an in-memory table, for testing code that scans SQL query results.

    Usage mirrors a live cursor: call next() until it returns False and read each row's columns by 1-based index
    with the typed getters, checking was_null() after each read. Only forward scanning, typed reads, the null flag
    and the column metadata are implemented; every other cursor operation raises UnsupportedOperation.
    """

    _rows:tuple[tuple[Cell, ...], ...]          # The row set (one tuple of cells per row)
    _column_count:int                           # The number of declared columns
    _metadata:MockResultSetMetaData             # Column count, labels and types (built once)
    _row_index:int                              # Cursor position; -1 is before the first row
    _was_null:bool                              # Whether the last cell read was NULL
    enable_logging:bool                         # Optional - specify whether to enable logging for this instance; defaults to False
    logger:logging.Logger                       # Logger for debug/errors

    _unsupported_operations = frozenset({
        # Scrollable positioning
        'previous', 'first', 'last', 'absolute', 'relative', 'before_first', 'after_last',
        'is_before_first', 'is_after_last', 'is_first', 'is_last', 'get_row',
        'move_to_insert_row', 'move_to_current_row',

        # Row mutation
        'insert_row', 'update_row', 'delete_row', 'refresh_row', 'cancel_row_updates',
        'row_inserted', 'row_updated', 'row_deleted',
        'update_array', 'update_ascii_stream', 'update_big_decimal', 'update_binary_stream', 'update_blob',
        'update_boolean', 'update_byte', 'update_bytes', 'update_character_stream', 'update_clob', 'update_date',
        'update_double', 'update_float', 'update_int', 'update_long', 'update_ncharacter_stream', 'update_nclob',
        'update_nstring', 'update_null', 'update_object', 'update_ref', 'update_row_id', 'update_sqlxml',
        'update_short', 'update_string', 'update_time', 'update_timestamp',

        # Other typed, streaming and large object reads
        'get_byte', 'get_short', 'get_int', 'get_long', 'get_float', 'get_big_decimal', 'get_bytes',
        'get_object', 'get_array', 'get_ref', 'get_row_id', 'get_sqlxml', 'get_url', 'get_nstring',
        'get_blob', 'get_clob', 'get_nclob',
        'get_ascii_stream', 'get_unicode_stream', 'get_binary_stream', 'get_character_stream', 'get_ncharacter_stream',
        'find_column',

        # Execution environment
        'get_warnings', 'clear_warnings', 'get_cursor_name', 'get_statement', 'get_type', 'get_concurrency',
        'get_fetch_direction', 'set_fetch_direction', 'get_fetch_size', 'set_fetch_size', 'get_holdability',
        'is_closed', 'close', 'unwrap', 'is_wrapper_for',

        # DB-API cursor methods
        'execute', 'executemany', 'fetchone', 'fetchmany', 'fetchall', 'callproc', 'nextset',
        'setinputsizes', 'setoutputsize',
    })


    def __init__(
            self,
            rows:Iterable[Sequence[Cell]],
            column_count:int,
            labels:Sequence[str],
            types:Sequence[ColumnType|int],
            *,
            enable_logging:bool=False,
            log_file_path:str='./mock_result_set.log',
            logger_name:str='mock_result_set_logger',
            logger_min_level:int=logging.DEBUG,
            logger_format:str="%(asctime)s - %(levelname)s: %(message)s"
        ):

        # Setup logging if configured
        self.enable_logging = enable_logging
        if enable_logging:
            self.logger = setup_logger(
                log_file_path=log_file_path,
                logger_name=logger_name,
                min_level=logger_min_level,
                log_format=logger_format,
            )

        # Make sure labels and types describe exactly [column_count] columns
        if len(labels) != column_count:
            self._fail('__init__()', ColumnDescriptorMismatch('label sequence', len(labels), column_count))
        if len(types) != column_count:
            self._fail('__init__()', ColumnDescriptorMismatch('type sequence', len(types), column_count))

        # Freeze the rows, checking their width and that every cell is a supported kind
        frozen:list[tuple[Cell, ...]] = []
        for i, row in enumerate(rows):
            row = tuple(row)
            if len(row) != column_count:
                self._fail('__init__()', ColumnDescriptorMismatch(f'row at index {i}', len(row), column_count))
            for value in row:
                try: cell_kind(value)
                except CellTypeMismatch as e:
                    self._fail('__init__()', e)
            frozen.append(row)

        # Set the base attributes
        self._rows = tuple(frozen)
        self._column_count = column_count
        self._metadata = MockResultSetMetaData(column_count, labels, types)
        self._row_index = -1
        self._was_null = False

        self.log_debug('__init__()', f'Created a result set with {len(self._rows)} rows and {column_count} columns.')


    # ---- Factories for recording fixtures from real data ---- #
    @classmethod
    def from_dataframe(cls, df:pd.DataFrame, **options) -> "MockResultSet":
        """Builds a MockResultSet from the given df: labels from the columns, types from the dtypes and one row per df row.

            NOTE:
                - object columns take the type of their first non-null value (NULL if the column is empty or all null)
                - NaN/NaT/pd.NA become NULL cells, and numpy/pandas scalars are converted to Python values
        """

        labels:list[str] = [str(c) for c in df.columns]
        rows:list[tuple[Cell, ...]] = [
            tuple(to_cell(v) for v in row)
            for row in df.itertuples(index=False, name=None)
        ]

        declared:list[ColumnType] = [column_type_for_dtype(df.dtypes.iloc[i]) for i in range(len(labels))]
        return cls._recorded(rows, labels, declared, **options)


    @classmethod
    def from_cursor(cls, cursor:DBCursor, database_type:DatabaseType|None=None, **options) -> "MockResultSet":
        """Records the results of an already executed DB-API cursor (SQLite, MySQL, or PostgreSQL) into a MockResultSet.
        All remaining rows are fetched from the cursor; the cursor is NOT closed.

            NOTE:
                - Labels come from cursor.description, types from its type codes for the given [database_type]
                - If no [database_type] is given, it is detected from the cursor class
                - Columns whose type code is unknown (always the case for SQLite) take the type of their first non-null value
                - Dict-like rows are read in cursor.description order
        """

        # Detect the driver if not given
        if database_type is None:
            database_type = cursor_database_type(cursor)
            if database_type is None:
                raise DatabaseTypeNotSupported(type(cursor).__name__)

        # Make sure there is a result to record
        description = cursor.description
        if description is None:
            raise ValueError('The cursor has no result description; execute a query that returns rows first.')

        labels:list[str] = [d[0] for d in description]

        rows:list[tuple[Cell, ...]] = []
        for row in cursor.fetchall():
            values = [row[label] for label in labels] if isinstance(row, Mapping) else row
            rows.append(tuple(to_cell(v) for v in values))

        declared:list[ColumnType] = [column_type_for_type_code(d[1], database_type) for d in description]
        return cls._recorded(rows, labels, declared, **options)


    @classmethod
    def _recorded(cls, rows:list[tuple[Cell, ...]], labels:list[str], declared:list[ColumnType], **options) -> "MockResultSet":
        """Builds the result set for the recording factories. Columns declared as OTHER take the type of their first
        non-null value; a warning is logged for columns left without a type (all NULL)."""

        types:list[ColumnType] = [
            infer_column_type(row[i] for row in rows) if column_type is ColumnType.OTHER else column_type
            for i, column_type in enumerate(declared)
        ]

        rs = cls(rows, len(labels), labels, types, **options)
        for label, column_type in zip(labels, types):
            if column_type is ColumnType.NULL:
                rs.log_warning('_recorded()', f'Column "{label}" holds no non-null values; declared as NULL.')
        return rs


    # ---- Helper functions for standardizing logging ---- #
    def _log(
        self,
        level:int,
        fmt:str,
        *args,
        exc:BaseException|None=None,
        stacklevel:int=2,
    ) -> None:
        """Helper func to standardize logging format (or do nothing if not [self.enable_logging] or not self.logger).
        Log format is: "[calling_function]: [message|Exception]" """

        # Check if enable logging is True
        if not getattr(self, "enable_logging", False): return

        # Make sure self.logger is not None
        logger:logging.Logger = getattr(self, "logger", None)
        if logger is None: return

        # Write to the log
        logger.log(level, fmt, *args, exc_info=exc, stacklevel=stacklevel)


    def log_debug(self, calling_func:str, message:str, stacklevel:int=2) -> None:
        """Logs a DEBUG message."""
        self._log(logging.DEBUG, "%s: %s", calling_func, message, stacklevel=stacklevel)


    def log_warning(self, calling_func:str, message:str, stacklevel:int=2) -> None:
        """Logs a WARNING message."""
        self._log(logging.WARNING, "%s: %s", calling_func, message, stacklevel=stacklevel)


    def log_error(self, calling_func:str, exception:Exception, stacklevel:int=2) -> None:
        """Logs an ERROR message."""
        self._log(logging.ERROR, "%s failed: %s - %s", calling_func, type(exception).__name__, exception, exc=exception, stacklevel=stacklevel)


    def _fail(self, calling_func:str, exception:Exception) -> NoReturn:
        """Logs the given exception and raises it."""
        self.log_error(calling_func, exception)
        raise exception


    def _on_unsupported(self, operation:str, exception:UnsupportedOperation) -> None:
        self.log_error(operation, exception)


    # ---- Cursor traversal ---- #
    def next(self) -> bool:
        """Moves the cursor one row forward. Returns True if the cursor is now on a row, False once it is after the last row.
        Never raises; calling it again after the last row keeps returning False."""
        self._row_index += 1
        if self._row_index == len(self._rows):
            self.log_debug('next()', f'Moved past the last row ({len(self._rows)} rows).')
        return self._row_index < len(self._rows)


    def _get_object_from_cell(self, column_index:int, calling_func:str) -> Cell:
        """Returns the raw cell at [column_index] (1-based) of the current row and updates the null flag.

            NOTE:
                - The column index is checked before the cursor position, so a bad index fails even before next() is called
                - Column labels are not supported as indexes
        """

        # Label based access is not part of the supported surface
        if isinstance(column_index, str):
            self._raise_unsupported(f'{calling_func[:-2]} by column label')

        if not _is_column_index(column_index) or not 1 <= column_index <= self._column_count:
            self._fail(calling_func, ColumnIndexOutOfRange(column_index, self._column_count))

        if not 0 <= self._row_index < len(self._rows):
            self._fail(calling_func, NoCurrentRow(self._row_index, len(self._rows)))

        value:Cell = self._rows[self._row_index][int(column_index) - 1]
        self._was_null = value is None
        return value


    def was_null(self) -> bool:
        """Returns True if the last cell read (by any getter) was NULL."""
        return self._was_null


    # ---- Typed getters ---- #
    def get_string(self, column_index:int) -> str|None:
        """Returns the cell as a string (any non-null cell kind is rendered with str()), or None if it is NULL."""
        value = self._get_object_from_cell(column_index, 'get_string()')
        if self._was_null:
            return None
        return str(value)


    def get_boolean(self, column_index:int) -> bool:
        """Returns the cell as a bool, or False if it is NULL. The cell must already hold a bool."""
        value = self._get_object_from_cell(column_index, 'get_boolean()')
        match cell_kind(value):
            case CellKind.NULL: return False
            case CellKind.BOOLEAN: return value
            case _: self._fail('get_boolean()', CellTypeMismatch(value, 'boolean'))


    def get_double(self, column_index:int) -> float:
        """Returns the cell widened to a float, or 0.0 if it is NULL. The cell must hold an int or a float (not a bool)."""
        value = self._get_object_from_cell(column_index, 'get_double()')
        match cell_kind(value):
            case CellKind.NULL: return 0.0
            case CellKind.INTEGER | CellKind.FLOAT: return float(value)
            case _: self._fail('get_double()', CellTypeMismatch(value, 'integer or float'))


    def get_date(self, column_index:int) -> dt.date|None:
        value = self._get_object_from_cell(column_index, 'get_date()')
        match cell_kind(value):
            case CellKind.NULL: return None
            case CellKind.DATE: return value
            case _: self._fail('get_date()', CellTypeMismatch(value, 'date'))


    def get_time(self, column_index:int) -> dt.time|None:
        value = self._get_object_from_cell(column_index, 'get_time()')
        match cell_kind(value):
            case CellKind.NULL: return None
            case CellKind.TIME: return value
            case _: self._fail('get_time()', CellTypeMismatch(value, 'time'))


    def get_timestamp(self, column_index:int) -> dt.datetime|None:
        value = self._get_object_from_cell(column_index, 'get_timestamp()')
        match cell_kind(value):
            case CellKind.NULL: return None
            case CellKind.TIMESTAMP: return value
            case _: self._fail('get_timestamp()', CellTypeMismatch(value, 'timestamp'))


    # ---- Metadata ---- #
    def get_metadata(self) -> MockResultSetMetaData:
        """Returns the column count, labels and types of this result set."""
        return self._metadata


    def __repr__(self) -> str:
        return f'MockResultSet(rows={len(self._rows)}, columns={self._column_count}, position={self._row_index})'
