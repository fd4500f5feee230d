"""
In-memory fake collaborators for verifier tests.

The fake backend plays table manager, direct reader and importer at once. By
default it echoes the inserted literal back on both paths (quotes stripped,
NULL as None); tests pass their own functions to model a backend's behavior.

Usage:
    def test_something(fake_backend, make_verifier):
        backend = fake_backend(serialized=lambda column_type, literal: 'x')
        verifier = make_verifier(backend)
"""
from pathlib import Path

import pytest
from typecompat.adapter import DEFAULT_ADAPTER
from typecompat.collaborators import DATA_COLUMN, ImportedData, TableHandle
from typecompat.verify import Verifier


def echo_literal(column_type, literal):
    """Return the literal as a backend storing it verbatim would."""
    if literal.upper() == 'NULL':
        return None
    if len(literal) >= 2 and literal[0] == literal[-1] == "'":
        return literal[1:-1]
    return literal


class FakeBackend:

    def __init__(self, direct=echo_literal, serialized=None, fail_create=False,
                 fail_read=False, fail_import=False, fail_teardown=False):
        self.direct = direct
        self.serialized = serialized or direct
        self.fail_create = fail_create
        self.fail_read = fail_read
        self.fail_import = fail_import
        self.fail_teardown = fail_teardown
        self.tables = {}
        self.created = []
        self.dropped = []
        self.imports = 0
        self.closed = False

    def get_connect_string(self):
        return 'fake://memory'

    def create_table_with_column(self, column_type, insert_literal, table_name=None):
        if self.fail_create:
            raise RuntimeError(f'syntax error near {column_type}')
        name = table_name or 'FAKE_COMPAT'
        if name in self.tables:
            raise RuntimeError(f'table {name} already exists')
        self.tables[name] = (column_type, insert_literal)
        self.created.append((name, column_type, insert_literal))
        return TableHandle(name, DATA_COLUMN, column_type)

    def drop_table_if_exists(self, name):
        self.dropped.append(name)
        if self.fail_teardown and name in self.tables:
            raise RuntimeError('connection lost')
        self.tables.pop(name, None)

    def read_back_column(self, table, row_index=0):
        if self.fail_read:
            raise RuntimeError('cursor closed')
        return self.direct(*self.tables[table.name])

    def run_import(self, table):
        if self.fail_import:
            raise RuntimeError('import job exited with status 1')
        self.imports += 1
        return ImportedData(table, Path('/fake') / f'{table.name}.parquet', 1)

    def read_first_serialized_value(self, imported):
        return self.serialized(*self.tables[imported.table.name])

    def close(self):
        self.closed = True


@pytest.fixture
def fake_backend():
    """Factory building a FakeBackend with custom behavior."""
    def factory(**kwargs):
        return FakeBackend(**kwargs)

    return factory


@pytest.fixture
def make_verifier():
    """Factory wiring a fake backend into a Verifier."""
    def factory(backend=None, adapter=DEFAULT_ADAPTER):
        backend = backend or FakeBackend()
        return Verifier(adapter, backend, backend)

    return factory
