"""
Data-type compatibility checks for a database import pipeline.

A backend adapter declares which optional SQL types a backend has, how to
spell their DDL, and how an inserted literal is expected to come back through
two independent paths: a direct database read and an import into Parquet
followed by a record read. The verifier runs type scenarios against a live
backend and reports each as passed, failed or skipped.

    import typecompat as tc

    with tc.create_verifier('sqlite', config=config) as verifier:
        summary = tc.run_catalog(verifier)
        print(summary.describe())
"""
__version__ = '0.1.0'

from typecompat.adapter import DEFAULT_ADAPTER, POSTGRES_ADAPTER, SQLITE_ADAPTER
from typecompat.adapter import Adapter, Path, PathRules, Spelling, get_adapter
from typecompat.adapter import get_available_backends, register_adapter
from typecompat.backend import SqlTableManager, connect
from typecompat.catalog import CATALOG, ScenarioTemplate, TypeScenario
from typecompat.catalog import resolve_catalog
from typecompat.exceptions import AssertionFailure, CompatError, ImportJobError
from typecompat.exceptions import SetupError, UnsupportedType
from typecompat.importer import ParquetImporter
from typecompat.normalize import timestamp_db_output, timestamp_seq_output
from typecompat.normalize import with_decimal_zero
from typecompat.options import CompatOptions
from typecompat.report import RunSummary, run_catalog
from typecompat.verify import Outcome, Status, Verifier, create_verifier

__all__ = [
    'Adapter',
    'PathRules',
    'Spelling',
    'Path',
    'DEFAULT_ADAPTER',
    'SQLITE_ADAPTER',
    'POSTGRES_ADAPTER',
    'get_adapter',
    'get_available_backends',
    'register_adapter',
    'CompatOptions',
    'connect',
    'SqlTableManager',
    'ParquetImporter',
    'TypeScenario',
    'ScenarioTemplate',
    'CATALOG',
    'resolve_catalog',
    'Verifier',
    'Outcome',
    'Status',
    'create_verifier',
    'RunSummary',
    'run_catalog',
    'with_decimal_zero',
    'timestamp_db_output',
    'timestamp_seq_output',
    'CompatError',
    'SetupError',
    'ImportJobError',
    'UnsupportedType',
    'AssertionFailure',
]
