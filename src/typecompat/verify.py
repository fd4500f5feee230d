"""
Verification engine.

For each scenario the verifier:
1. drops and recreates the backend-prefixed scratch table with the scenario's
   column type, inserting the literal verbatim
2. reads the value straight back and compares it to the direct expectation
3. imports the table into the storage format, reads the first record back
   and compares it to the serialized expectation
4. drops the table, whatever happened before

Errors never leave `run()` or `verify_type()`: they become an `Outcome`.
A scenario whose type the adapter does not support is Skipped, never Failed.
"""
import logging
import time
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Self

from typecompat.adapter import Adapter, Path, get_adapter
from typecompat.backend import connect
from typecompat.catalog import SAME, TypeScenario
from typecompat.collaborators import DirectReader, Importer, TableManager
from typecompat.exceptions import AssertionFailure, CompatError, ImportJobError
from typecompat.exceptions import Mismatch, SetupError, UnsupportedType
from typecompat.importer import ParquetImporter
from typecompat.options import CompatOptions

from libb import load_options

__all__ = ['Status', 'Outcome', 'Verifier', 'create_verifier']

logger = logging.getLogger(__name__)


class Status(str, Enum):
    PASSED = 'passed'
    FAILED = 'failed'
    SKIPPED = 'skipped'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Outcome:
    """Result of running one scenario.
    """
    scenario: TypeScenario
    status: Status
    reason: str = ''
    mismatches: tuple[Mismatch, ...] = ()
    error: CompatError | None = None
    elapsed: float = 0.0

    @property
    def passed(self) -> bool:
        return self.status is Status.PASSED

    @property
    def failed(self) -> bool:
        return self.status is Status.FAILED

    @property
    def skipped(self) -> bool:
        return self.status is Status.SKIPPED

    def __str__(self) -> str:
        text = f'{self.status.value.upper()}: {self.scenario}'
        if self.reason:
            text += f' - {self.reason}'
        return text


class Verifier:
    """Runs type scenarios against one backend through its collaborators.

    The table manager also serves as direct reader unless `reader` is given.
    """

    def __init__(self, adapter: Adapter, tables: TableManager, importer: Importer,
                 reader: DirectReader | None = None,
                 table_prefix: str | None = None) -> None:
        self.adapter = adapter
        self.tables = tables
        self.importer = importer
        self.reader = reader if reader is not None else tables
        self.table_prefix = table_prefix or adapter.table_prefix

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None,
                 exc_tb: Any | None) -> None:
        self.close()

    @property
    def table_name(self) -> str:
        return f'{self.table_prefix}COMPAT'

    def check_type(self, column_type: str, insert_literal: str,
                   direct_expected: str | None,
                   serialized_expected: str | None = SAME,
                   name: str | None = None) -> None:
        """Verify one value on both paths, raising on any problem.

        Raises
            SetupError: table creation, insert or direct read failed
            ImportJobError: the import or the serialized read failed
            AssertionFailure: either path returned unexpected text
        """
        if serialized_expected is SAME:
            serialized_expected = direct_expected
        name = name or f'{column_type} <- {insert_literal}'

        try:
            self.tables.drop_table_if_exists(self.table_name)
            table = self.tables.create_table_with_column(column_type, insert_literal,
                                                         self.table_name)
        except Exception as err:
            raise SetupError(f'Cannot create {column_type} table with {insert_literal}: {err}') from err

        try:
            direct = self.reader.read_back_column(table, 0)
        except Exception as err:
            raise SetupError(f'Direct read of {table.name} failed: {err}') from err
        logger.debug(f'{name}: direct read returned {direct!r}')

        try:
            imported = self.importer.run_import(table)
            serialized = self.importer.read_first_serialized_value(imported)
        except Exception as err:
            raise ImportJobError(f'Import of {table.name} failed: {err}') from err
        logger.debug(f'{name}: serialized read returned {serialized!r}')

        mismatches = []
        if direct != direct_expected:
            mismatches.append(Mismatch(str(Path.DIRECT), direct_expected, direct))
        if serialized != serialized_expected:
            mismatches.append(Mismatch(str(Path.SERIALIZED), serialized_expected, serialized))
        if mismatches:
            raise AssertionFailure(name, mismatches)

    def verify_type(self, column_type: str, insert_literal: str,
                    direct_expected: str | None,
                    serialized_expected: str | None = SAME,
                    requires: str | None = None) -> Outcome:
        """Verify one value on both paths and return its outcome.

        `serialized_expected` defaults to `direct_expected`. `requires` defaults
        to the optional type `column_type` names (BOOLEAN, BIGINT, TINYINT,
        TIME or the adapter's long varchar spelling).
        """
        scenario = TypeScenario(column_type, column_type, insert_literal,
                                direct_expected, serialized_expected, requires)
        return self.run(scenario)

    def run(self, scenario: TypeScenario) -> Outcome:
        """Run one scenario; never raises for scenario-level problems.
        """
        requires = scenario.requires or self.adapter.capability_for(scenario.column_type)
        if requires and not self.adapter.supports(requires):
            logger.info(f'Skipping {requires} test (unsupported)')
            err = UnsupportedType(f'{requires} unsupported by {self.adapter.name}')
            return Outcome(scenario, Status.SKIPPED, str(err), error=err)

        start = time.time()
        try:
            self.check_type(scenario.column_type, scenario.insert_literal,
                            scenario.direct_expected, scenario.serialized_expected,
                            name=scenario.name)
        except AssertionFailure as err:
            logger.info(f'{scenario}: {err}')
            return Outcome(scenario, Status.FAILED, str(err), err.mismatches, err,
                           time.time() - start)
        except SetupError as err:
            logger.error(f'{scenario}: {err}')
            return Outcome(scenario, Status.FAILED, str(err), error=err,
                           elapsed=time.time() - start)
        finally:
            self._teardown()

        logger.debug(f'{scenario} passed')
        return Outcome(scenario, Status.PASSED, elapsed=time.time() - start)

    def _teardown(self) -> None:
        try:
            self.tables.drop_table_if_exists(self.table_name)
        except Exception as e:
            logger.warning(f"Error trying to drop table '{self.table_name}' on teardown: {e}")

    def close(self) -> None:
        """Close collaborators that hold resources."""
        for collaborator in (self.importer, self.tables):
            close = getattr(collaborator, 'close', None)
            if close is not None:
                close()


@load_options(cls=CompatOptions)
def create_verifier(options: CompatOptions | dict[str, Any] | str,
                    config: Any | None = None, **kw: Any) -> Verifier:
    """Build a verifier with the SQL table manager and the Parquet importer.

    Args:
        options: CompatOptions, a Setting name in `config`, a dict, or keywords
        config: Configuration object (for loading from config files)
        **kw: Additional keyword arguments to override options
    """
    if isinstance(options, CompatOptions):
        for field in fields(options):
            kw.pop(field.name, None)
    else:
        options_func = load_options(cls=CompatOptions)(lambda o, c: o)
        options = options_func(options, config, **kw)

    tables = connect(options)
    importer = ParquetImporter(tables, options.staging_dir)
    adapter = get_adapter(options.adapter)
    logger.info(f'Verifying {adapter.name} types against {tables.get_connect_string()}')
    return Verifier(adapter, tables, importer, table_prefix=options.table_prefix)
