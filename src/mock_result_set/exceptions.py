class ColumnIndexOutOfRange(IndexError):
    """Raised when a 1-based column index falls outside [1, column_count] (cursor reads and metadata lookups)."""

    def __init__(self, column_index:int, column_count:int):
        self.column_index = column_index
        self.column_count = column_count
        super().__init__(f'The column index is out of bounds. Index = {column_index}, number of columns = {column_count}')


class NoCurrentRow(IndexError):
    """Raised when a cell is read while the cursor is positioned before the first row or after the last row."""

    def __init__(self, row_index:int, row_count:int):
        self.row_index = row_index
        self.row_count = row_count
        position = 'before the first row' if row_index < 0 else 'after the last row'
        super().__init__(f'There is no current row: the cursor is {position} (position = {row_index}, number of rows = {row_count}).')


class UnsupportedOperation(NotImplementedError):
    """Raised for every operation outside the forward-scan and typed-read surface of the mock result set.
    Hitting one of these in a test means the code under test uses a cursor feature it is not expected to use."""

    def __init__(self, operation:str):
        self.operation = operation
        super().__init__(f'The operation "{operation}" is unsupported.')


class CellTypeMismatch(TypeError):
    """Raised when a cell holds a value outside the supported cell kinds, or a kind the accessor cannot return."""

    def __init__(self, value:object, expected:str):
        self.value = value
        self.expected = expected
        super().__init__(f'Expected a cell of kind {expected}, got {type(value).__name__}: {value!r}')


class ColumnDescriptorMismatch(ValueError):
    """Raised when the labels, types or a row do not have one entry per declared column."""

    def __init__(self, what:str, length:int, column_count:int):
        self.what = what
        self.length = length
        self.column_count = column_count
        super().__init__(f'The {what} has {length} entries, but the number of columns is {column_count}.')


class DatabaseTypeNotSupported(ValueError):
    """Raised when a cursor is recorded for a database_type that is not one of the Enum values in the DatabaseType class."""

    def __init__(self, db_type:str|int):
        self.db_type = db_type
        super().__init__(f'The current database_type "{db_type}" is not supported. See the DatabaseType enum class for supported types.')
