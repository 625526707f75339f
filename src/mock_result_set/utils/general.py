import logging
import os
from sqlite3 import Cursor as SQLiteCursor

from psycopg2.extensions import cursor as PSQLCursor
from mysql.connector.abstracts import MySQLCursorAbstract

from ..classes.column_type import DatabaseType


def setup_logger(log_file_path:str, logger_name:str, min_level:int=logging.DEBUG, log_format:str='%(asctime)s - %(levelname)s: %(message)s') -> logging.Logger:
    """Sets up a logger to save logs to the given filepath."""

    # Init a logger and set the lowest level to capture
    logger:logging.Logger = logging.getLogger(logger_name)
    logger.setLevel(min_level)

    # Prevent double logging if root logger is used
    logger.propagate = False

    # Avoid duplicate handlers if setup is called multiple times
    if not logger.handlers:

        # NOTE: default path if log file path is None or empty string
        if not log_file_path:
            log_file_path = './mock_result_set.log'

        # Create the output dir if it doesn't exist (a bare filename goes to the working dir)
        log_dir:str = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # Create a file handler
        file_handler:logging.FileHandler = logging.FileHandler(log_file_path, encoding='utf-8')
        logger.addHandler(file_handler)

        # Set the format for logs
        formatter:logging.Formatter = logging.Formatter(log_format)
        file_handler.setFormatter(formatter)

    # Return the logger
    return logger


def cursor_database_type(cursor:SQLiteCursor|MySQLCursorAbstract|PSQLCursor) -> DatabaseType|None:
    """Returns the DatabaseType of the driver that created the given cursor (SQLite, MySQL, PostgreSQL), or None if unknown."""
    if isinstance(cursor, SQLiteCursor): return DatabaseType.SQLITE
    if isinstance(cursor, MySQLCursorAbstract): return DatabaseType.MYSQL
    if isinstance(cursor, PSQLCursor): return DatabaseType.POSTGRESQL
    return None
