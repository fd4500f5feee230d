"""
Compatibility-check exception classes.
"""
import sqlite3
from dataclasses import dataclass

import psycopg
import sqlalchemy as sa


@dataclass(frozen=True, slots=True)
class Mismatch:
    """One extraction path whose observed text differs from the expectation."""
    path: str
    expected: str | None
    actual: str | None

    def __str__(self) -> str:
        return f'{self.path} path: expected {self.expected!r}, got {self.actual!r}'


class CompatError(Exception):
    """Base class for all typecompat errors.
    """


class SetupError(CompatError):
    """Table creation, insert, read or connection failure for a scenario.
    """


class ImportJobError(SetupError):
    """The import collaborator raised while moving or reading rows.
    """


class UnsupportedType(CompatError):
    """The backend adapter does not declare support for a type.
    """


class AssertionFailure(CompatError, AssertionError):
    """Observed text differs from the expected text on one or more paths.
    """

    def __init__(self, scenario: str, mismatches: list[Mismatch]) -> None:
        self.scenario = scenario
        self.mismatches = tuple(mismatches)
        detail = '; '.join(str(m) for m in self.mismatches)
        super().__init__(f'{scenario}: {detail}')


DbConnectionError = (
    psycopg.OperationalError,
    psycopg.InterfaceError,
    sqlite3.OperationalError,
    sqlite3.InterfaceError,
    sa.exc.OperationalError,
    sa.exc.InterfaceError,
    )
