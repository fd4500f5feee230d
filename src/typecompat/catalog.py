"""
Built-in scenario catalog.

Each `ScenarioTemplate` names one type/value case in backend-neutral terms.
Resolving it against an adapter yields a concrete `TypeScenario`: the DDL to
create, the literal to insert and the text expected on each extraction path.
"""
import fnmatch
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from typecompat.adapter import Adapter, Path
from typecompat.adapter.base import BIGINT, BOOLEAN, LONGVARCHAR, TIME, TINYINT
from typecompat.normalize import fraction_digits, timestamp_db_output

logger = logging.getLogger(__name__)

SAME = object()

STRING_VAL_IN = "'this is a short string'"
STRING_VAL_OUT = 'this is a short string'


@dataclass(frozen=True)
class TypeScenario:
    """One concrete case: column DDL, insert literal and expected text per path.

    `serialized_expected` defaults to `direct_expected`. A None expectation
    means the value must come back as SQL NULL.
    """
    name: str
    column_type: str
    insert_literal: str
    direct_expected: str | None = None
    serialized_expected: str | None = field(default=SAME)
    requires: str | None = None

    def __post_init__(self):
        if self.serialized_expected is SAME:
            object.__setattr__(self, 'serialized_expected', self.direct_expected)

    def expected(self, path: Path) -> str | None:
        if Path(path) is Path.SERIALIZED:
            return self.serialized_expected
        return self.direct_expected

    def __str__(self) -> str:
        return f'{self.name} [{self.column_type} <- {self.insert_literal}]'


@dataclass(frozen=True)
class ScenarioTemplate:
    """Backend-neutral description of a scenario.

    Either `column_type` (literal DDL) or `spelling` (logical type resolved by
    the adapter) names the column. `value` is the canonical text of the value
    as inserted; `rule` selects the adapter normalization that predicts how it
    is observed.
    """
    name: str
    literal: str
    value: str | None
    column_type: str | None = None
    spelling: str | None = None
    rule: str | None = None
    rewrite: str | None = None
    width: int | None = None
    requires: str | None = None

    def resolve(self, adapter: Adapter) -> TypeScenario:
        column_type = adapter.spell(self.spelling) if self.spelling else self.column_type
        literal = adapter.rewrite(self.rewrite, self.literal) if self.rewrite else self.literal
        direct = self._expected(adapter, Path.DIRECT)
        serialized = self._expected(adapter, Path.SERIALIZED)

        if (self.rule == 'timestamp' and direct is not None
                and adapter.timestamp_output.direct is timestamp_db_output
                and fraction_digits(direct) != 9):
            logger.warning(f'{self.name}: {adapter.name} direct timestamp expectation '
                           f'{direct!r} has {fraction_digits(direct)} fractional digits')

        return TypeScenario(self.name, column_type, literal, direct, serialized,
                            self.requires)

    def _expected(self, adapter: Adapter, path: Path) -> str | None:
        if self.value is None:
            return None
        if self.rule is None:
            return self.value
        if self.rule == 'boolean':
            return adapter.boolean_output(self.value == 'true', path)
        return adapter.normalize(self.rule, path, self.value, self.width)


def _numeric_cases(logical: str) -> list[ScenarioTemplate]:
    values = ('1', '-10', '3.14159', '3000000000000000000.14159',
              '99999999999999999999.14159', '-99999999999999999999.14159')
    return [ScenarioTemplate(f'{logical}_{i}', v, v, spelling=logical, rule=logical)
            for i, v in enumerate(values, 1)]


def _time_case(name: str, literal: str, value: str) -> ScenarioTemplate:
    return ScenarioTemplate(name, literal, value, column_type='TIME',
                            rewrite='time', requires=TIME)


def _date_case(name: str, literal: str, value: str) -> ScenarioTemplate:
    return ScenarioTemplate(name, literal, value, column_type='DATE',
                            rule='date', rewrite='date')


CATALOG: tuple[ScenarioTemplate, ...] = (
    ScenarioTemplate('string_col_1', STRING_VAL_IN, STRING_VAL_OUT, column_type='VARCHAR(32)'),
    ScenarioTemplate('string_col_2', STRING_VAL_IN, STRING_VAL_OUT, column_type='CHAR(32)',
                     rule='fixed_char', width=32),
    ScenarioTemplate('empty_string_col', "''", '', column_type='VARCHAR(32)'),
    ScenarioTemplate('null_string_col', 'NULL', None, column_type='VARCHAR(32)'),
    ScenarioTemplate('int', '42', '42', column_type='INTEGER'),
    ScenarioTemplate('null_int', 'NULL', None, column_type='INTEGER'),
    ScenarioTemplate('boolean_1', '1', 'true', column_type='BOOLEAN', rule='boolean',
                     rewrite='boolean', requires=BOOLEAN),
    ScenarioTemplate('boolean_2', '0', 'false', column_type='BOOLEAN', rule='boolean',
                     rewrite='boolean', requires=BOOLEAN),
    ScenarioTemplate('boolean_3', 'false', 'false', column_type='BOOLEAN', rule='boolean',
                     rewrite='boolean', requires=BOOLEAN),
    ScenarioTemplate('tinyint_1', '0', '0', column_type='TINYINT', requires=TINYINT),
    ScenarioTemplate('tinyint_2', '42', '42', column_type='TINYINT', requires=TINYINT),
    ScenarioTemplate('smallint_1', '-1024', '-1024', column_type='SMALLINT'),
    ScenarioTemplate('smallint_2', '2048', '2048', column_type='SMALLINT'),
    ScenarioTemplate('bigint_1', '10000000000', '10000000000', column_type='BIGINT',
                     requires=BIGINT),
    ScenarioTemplate('real_1', '256', '256', column_type='REAL', rule='real'),
    ScenarioTemplate('real_2', '256.45', '256.45', column_type='REAL', rule='real'),
    ScenarioTemplate('float_1', '256', '256', column_type='FLOAT', rule='float'),
    ScenarioTemplate('float_2', '256.5', '256.5', column_type='FLOAT', rule='float'),
    ScenarioTemplate('double_1', '-256', '-256', spelling='double', rule='double'),
    ScenarioTemplate('double_2', '256.45', '256.45', spelling='double', rule='double'),
    _date_case('date_1', "'2009-1-12'", '2009-01-12'),
    _date_case('date_2', "'2009-01-12'", '2009-01-12'),
    _date_case('date_3', "'2009-04-24'", '2009-04-24'),
    _time_case('time_1', "'12:24:00'", '12:24:00'),
    _time_case('time_2', "'06:24:00'", '06:24:00'),
    _time_case('time_3', "'6:24:00'", '06:24:00'),
    _time_case('time_4', "'18:24:00'", '18:24:00'),
    ScenarioTemplate('timestamp_1', "'2009-04-24 18:24:00'", '2009-04-24 18:24:00',
                     spelling='timestamp', rule='timestamp', rewrite='timestamp'),
    ScenarioTemplate('timestamp_2', "'2009-04-24 18:24:00.0002'", '2009-04-24 18:24:00.0002',
                     spelling='timestamp', rule='timestamp', rewrite='timestamp'),
    ScenarioTemplate('timestamp_3', 'null', None, spelling='timestamp'),
    *_numeric_cases('numeric'),
    *_numeric_cases('decimal'),
    ScenarioTemplate('longvarchar', "'this is a long varchar'", 'this is a long varchar',
                     spelling='longvarchar', requires=LONGVARCHAR),
)


def select_templates(patterns: Iterable[str] | None = None,
                     catalog: Iterable[ScenarioTemplate] = CATALOG) -> list[ScenarioTemplate]:
    """Return templates whose name matches any fnmatch pattern (all if None)."""
    templates = list(catalog)
    if not patterns:
        return templates
    patterns = list(patterns)
    return [t for t in templates
            if any(fnmatch.fnmatchcase(t.name, p) for p in patterns)]


def resolve_catalog(adapter: Adapter, patterns: Iterable[str] | None = None,
                    catalog: Iterable[ScenarioTemplate] = CATALOG) -> list[TypeScenario]:
    """Resolve (a selection of) the catalog against an adapter."""
    return [t.resolve(adapter) for t in select_templates(patterns, catalog)]
