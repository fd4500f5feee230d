"""
Import job writing a table into Parquet and reading records back.

The import pulls every row of the table through its own query, builds an
Arrow table from the column values and writes one Parquet file per table.
Reading back goes record by record through the file's batches, so the value
observed is the one stored in the file, not the one the query returned.
"""
import logging
import shutil
import tempfile
from contextlib import closing
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq
from typecompat.collaborators import ImportedData, TableHandle
from typecompat.render import render_serialized

logger = logging.getLogger(__name__)


class ParquetImporter:
    """Import collaborator backed by pyarrow and a staging directory.

    `tables` is any object providing `fetch_rows(table) -> (columns, rows)`,
    normally the `SqlTableManager` of the same run.
    """

    def __init__(self, tables: Any, staging_dir: str | Path | None = None) -> None:
        self.tables = tables
        self._owns_staging = staging_dir is None
        if staging_dir is None:
            staging_dir = tempfile.mkdtemp(prefix='typecompat-')
        self.staging_dir = Path(staging_dir)
        self.staging_dir.mkdir(parents=True, exist_ok=True)

    def run_import(self, table: TableHandle) -> ImportedData:
        """Pull the table's rows into a Parquet file.
        """
        columns, rows = self.tables.fetch_rows(table)
        data = pa.table({name: [row[i] for row in rows] for i, name in enumerate(columns)})

        location = self.staging_dir / f'{table.name}.parquet'
        pq.write_table(data, location)
        logger.debug(f'Imported {data.num_rows} row(s) of {table.name} to {location} '
                     f'with schema {data.schema}')
        return ImportedData(table, location, data.num_rows)

    def iter_records(self, imported: ImportedData):
        """Yield the imported column's values one record at a time."""
        with open(imported.location, 'rb') as fh:
            parquet = pq.ParquetFile(fh)
            for batch in parquet.iter_batches(batch_size=1, columns=[imported.table.column]):
                for value in batch.column(0):
                    yield value.as_py()

    def read_first_serialized_value(self, imported: ImportedData) -> str | None:
        """Render the column value of the first serialized record.
        """
        with closing(self.iter_records(imported)) as records:
            for value in records:
                return render_serialized(value)
        raise LookupError(f'No records imported from {imported.table.name}')

    def close(self) -> None:
        """Remove the staging directory if this importer created it."""
        if self._owns_staging:
            shutil.rmtree(self.staging_dir, ignore_errors=True)
