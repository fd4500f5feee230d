"""
SQL text builders for the single-column compatibility table.

Insert literals are placed into the statement verbatim; they are the value
under test and must reach the backend exactly as written. Identifiers are
always quoted.
"""
from typing import Any

_DIALECTS = {'postgresql', 'sqlite'}


def quote_identifier(identifier: str, dialect: str = 'postgresql') -> str:
    """Safely quote database identifiers.

    Parameters
        identifier: Table or column name
        dialect: Database dialect

    Returns
        Quoted identifier

    Raises
        ValueError: If dialect is unsupported
    """
    if dialect in _DIALECTS:
        return '"' + identifier.replace('"', '""') + '"'

    raise ValueError(f'Unknown dialect: {dialect}')


def get_dialect_name(obj: Any) -> str:
    """Get dialect name for a SQLAlchemy connection or engine.
    """
    if hasattr(obj, 'dialect'):
        dialect = obj.dialect
        if isinstance(dialect, str):
            return dialect.lower()
        return str(dialect.name).lower()

    if hasattr(obj, 'engine') and hasattr(obj.engine, 'dialect'):
        return str(obj.engine.dialect.name).lower()

    raise AttributeError(f'Cannot determine dialect for {type(obj)}')


def create_table_sql(table: str, column: str, column_type: str, dialect: str) -> str:
    return (f'CREATE TABLE {quote_identifier(table, dialect)} '
            f'({quote_identifier(column, dialect)} {column_type})')


def insert_literal_sql(table: str, literal: str, dialect: str) -> str:
    return f'INSERT INTO {quote_identifier(table, dialect)} VALUES ({literal})'


def select_column_sql(table: str, column: str, dialect: str) -> str:
    return (f'SELECT {quote_identifier(column, dialect)} '
            f'FROM {quote_identifier(table, dialect)}')


def select_all_sql(table: str, dialect: str) -> str:
    return f'SELECT * FROM {quote_identifier(table, dialect)}'


def drop_table_sql(table: str, dialect: str) -> str:
    return f'DROP TABLE IF EXISTS {quote_identifier(table, dialect)}'
