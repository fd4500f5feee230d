"""
Collaborator interfaces consumed by the verifier.

The verifier never talks to a database or a storage format directly. It
drives three collaborators:

- a table manager that creates the one-column table, inserts the literal and
  drops the table
- a direct reader that reads the inserted value straight back
- an importer that moves the table into the storage format and reads the
  first serialized record back

`SqlTableManager` (direct reader included) and `ParquetImporter` are the
shipped implementations; anything satisfying these protocols can replace them.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

DATA_COLUMN = 'DATA_COL0'


@dataclass(frozen=True, slots=True)
class TableHandle:
    """A created single-column table."""
    name: str
    column: str = DATA_COLUMN
    column_type: str = ''


@dataclass(frozen=True, slots=True)
class ImportedData:
    """Result of importing a table into the storage format."""
    table: TableHandle
    location: Path
    rows: int


@runtime_checkable
class TableManager(Protocol):

    def get_connect_string(self) -> str:
        ...

    def create_table_with_column(self, column_type: str, insert_literal: str,
                                 table_name: str | None = None) -> TableHandle:
        ...

    def drop_table_if_exists(self, name: str) -> None:
        ...


@runtime_checkable
class DirectReader(Protocol):

    def read_back_column(self, table: TableHandle, row_index: int = 0) -> str | None:
        ...


@runtime_checkable
class Importer(Protocol):

    def run_import(self, table: TableHandle) -> ImportedData:
        ...

    def read_first_serialized_value(self, imported: ImportedData) -> str | None:
        ...
