"""
Table management and direct reads with SQLAlchemy.

This module provides:
1. The `connect()` function for creating a table manager from options
2. The `SqlTableManager` class that owns one autocommit connection and
   implements the table-management and direct-read collaborators
3. Engine creation and management through a thread-safe registry

Statements are sent through the raw DB-API cursor without parameters, so an
insert literal reaches the backend byte for byte (no bind-parameter parsing
of ':' or '%' inside the literal).
"""
import atexit
import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import fields
from functools import wraps
from typing import Any, Self, TypeVar

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool
from typecompat.collaborators import DATA_COLUMN, TableHandle
from typecompat.exceptions import DbConnectionError
from typecompat.options import CompatOptions
from typecompat.render import render_direct
from typecompat.sql import create_table_sql, drop_table_sql, get_dialect_name
from typecompat.sql import insert_literal_sql, select_all_sql
from typecompat.sql import select_column_sql

from libb import load_options

__all__ = [
    'SqlTableManager',
    'connect',
    'check_connection',
    'create_url_from_options',
    'get_engine_for_options',
    'dispose_all_engines',
]

logger = logging.getLogger(__name__)

T = TypeVar('T')
_engine_registry: dict[str, Engine] = {}
_engine_registry_lock = threading.RLock()


def create_url_from_options(options: CompatOptions,
                            url_creator: Callable[..., sa.URL] = sa.URL.create) -> sa.URL:
    """Convert CompatOptions to SQLAlchemy URL.
    """
    if options.drivername == 'sqlite':
        return url_creator(
            drivername='sqlite',
            database=options.database
        )

    elif options.drivername == 'postgresql':
        query = {}
        if options.timeout:
            query['connect_timeout'] = str(options.timeout)

        return url_creator(
            drivername='postgresql+psycopg',
            username=options.username,
            password=options.password,
            host=options.hostname,
            port=options.port,
            database=options.database,
            query=query
        )

    raise ValueError(f'Unsupported database type: {options.drivername}')


def check_connection(func: Callable[..., T], max_retries: int = 3,
                     retry_delay: float = 1.0, retry_backoff: float = 1.5,
                     sleep_func: Callable[[float], None] = time.sleep) -> Callable[..., T]:
    """Wrap `func` so driver connection errors are retried with growing delays.

    Usage:
        sa_connection = check_connection(engine.connect)()
    """
    @wraps(func)
    def inner(*args: Any, **kwargs: Any) -> T:
        delay = retry_delay
        for attempt in range(1, max_retries + 1):
            try:
                return func(*args, **kwargs)
            except DbConnectionError as err:
                if attempt == max_retries:
                    logger.error(f'Giving up after {max_retries} connection attempts: {err}')
                    raise
                logger.warning(f'Connection attempt {attempt}/{max_retries} failed, '
                               f'retrying in {delay:.1f}s: {err}')
                sleep_func(delay)
                delay *= retry_backoff

    return inner


def get_engine_for_options(options: CompatOptions,
                           engine_factory: Callable[..., Engine] = sa.create_engine,
                           **kwargs: Any) -> Engine:
    """Get or create an autocommit SQLAlchemy engine for the given options.
    """
    key = str(options)

    with _engine_registry_lock:
        if key in _engine_registry:
            logger.debug(f'Using existing engine for {options.drivername}')
            return _engine_registry[key]

        url = create_url_from_options(options)

        engine_kwargs: dict[str, Any] = {
            'echo': False,
            'poolclass': NullPool,
            'isolation_level': 'AUTOCOMMIT',
        }
        engine_kwargs.update(kwargs)

        engine = engine_factory(url, **engine_kwargs)

        _engine_registry[key] = engine
        logger.debug(f'Created new engine for {options.drivername}')

        return engine


def dispose_all_engines() -> None:
    """Dispose all engines in the registry.
    """
    with _engine_registry_lock:
        for engine in _engine_registry.values():
            engine.dispose()
        _engine_registry.clear()
        logger.debug('All database engines disposed')


atexit.register(dispose_all_engines)


class SqlTableManager:
    """Creates, fills, reads and drops the single-column scratch table.

    Owns one autocommit SQLAlchemy connection for its whole lifetime, so an
    in-memory SQLite database survives between scenarios. Tracks statement
    counts and time spent like a connection wrapper.
    """

    def __init__(self, sa_connection: sa.engine.Connection,
                 options: CompatOptions | None = None) -> None:
        self.sa_connection = sa_connection
        self.engine = sa_connection.engine
        self.options = options
        self.dialect = get_dialect_name(sa_connection)
        self.table_prefix = options.table_prefix if options else 'MGR_'
        self.calls = 0
        self.time = 0

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None,
                 exc_tb: Any | None) -> None:
        self.close()

    @property
    def table_name(self) -> str:
        return f'{self.table_prefix}COMPAT'

    @contextmanager
    def _cursor(self, sql: str) -> Iterator[Any]:
        """Cursor lifecycle for one statement.
        """
        start = time.time()
        cursor = self.sa_connection.connection.cursor()
        try:
            logger.debug(f'Executing: {sql}')
            cursor.execute(sql)
            yield cursor
        finally:
            cursor.close()
            self.time += time.time() - start
            self.calls += 1

    def _execute_raw(self, sql: str) -> int:
        """Execute a statement and return its rowcount."""
        with self._cursor(sql) as cursor:
            return cursor.rowcount

    def get_connect_string(self) -> str:
        """Connection URL with the password masked."""
        return self.engine.url.render_as_string(hide_password=True)

    def create_table_with_column(self, column_type: str, insert_literal: str,
                                 table_name: str | None = None) -> TableHandle:
        """Create a one-column table of `column_type` and insert one row.

        The literal is inserted verbatim as the column's SQL value.
        """
        table = TableHandle(table_name or self.table_name, DATA_COLUMN, column_type)
        self._execute_raw(create_table_sql(table.name, table.column, column_type, self.dialect))
        self._execute_raw(insert_literal_sql(table.name, insert_literal, self.dialect))
        return table

    def drop_table_if_exists(self, name: str) -> None:
        self._execute_raw(drop_table_sql(name, self.dialect))

    def read_back_column(self, table: TableHandle, row_index: int = 0) -> str | None:
        """Read the column value of one row straight from the database.
        """
        with self._cursor(select_column_sql(table.name, table.column, self.dialect)) as cursor:
            rows = cursor.fetchall()
        if row_index >= len(rows):
            raise IndexError(f'{table.name} has {len(rows)} row(s), no row {row_index}')
        return render_direct(rows[row_index][0])

    def fetch_rows(self, table: TableHandle) -> tuple[list[str], list[tuple]]:
        """All column names and rows of a table, as the import job sees them.
        """
        with self._cursor(select_all_sql(table.name, self.dialect)) as cursor:
            columns = [desc[0] for desc in cursor.description]
            rows = [tuple(row) for row in cursor.fetchall()]
        return columns, rows

    def close(self) -> None:
        if not self.sa_connection.closed:
            self.sa_connection.close()
            logger.debug(f'Connection closed: {self.calls} statements in {self.time:.2f}s')


@load_options(cls=CompatOptions)
def connect(options: CompatOptions | dict[str, Any] | str,
            config: Any | None = None, **kw: Any) -> SqlTableManager:
    """Connect to a database and return a table manager

    Args:
        options: Can be:
                - CompatOptions object
                - String name of a Setting in the configuration
                - Dictionary of options
                - Options specified as keyword arguments
        config: Configuration object (for loading from config files)
        **kw: Additional keyword arguments to override options

    Returns
        SqlTableManager owning an autocommit connection
    """
    if isinstance(options, CompatOptions):
        for field in fields(options):
            kw.pop(field.name, None)
    else:
        options_func = load_options(cls=CompatOptions)(lambda o, c: o)
        options = options_func(options, config, **kw)

    engine = get_engine_for_options(options)
    sa_connection = check_connection(engine.connect)()

    return SqlTableManager(sa_connection, options)
