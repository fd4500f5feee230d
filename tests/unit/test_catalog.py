import logging

import pytest
from typecompat.adapter import DEFAULT_ADAPTER, POSTGRES_ADAPTER, SQLITE_ADAPTER
from typecompat.adapter import Path
from typecompat.catalog import CATALOG, STRING_VAL_OUT, ScenarioTemplate
from typecompat.catalog import TypeScenario, resolve_catalog, select_templates


def _resolved(adapter, name):
    return {s.name: s for s in resolve_catalog(adapter)}[name]


def test_catalog_names_are_unique():
    names = [t.name for t in CATALOG]
    assert len(names) == len(set(names))


def test_catalog_covers_every_type_family():
    """Test the catalog holds every scenario family of the battery"""
    names = {t.name for t in CATALOG}
    for expected in ('string_col_1', 'string_col_2', 'empty_string_col', 'null_string_col',
                     'int', 'null_int', 'boolean_3', 'tinyint_2', 'smallint_2', 'bigint_1',
                     'real_2', 'float_2', 'double_2', 'date_3', 'time_4', 'timestamp_3',
                     'numeric_6', 'decimal_6', 'longvarchar'):
        assert expected in names


def test_type_scenario_serialized_defaults_to_direct():
    scenario = TypeScenario('int', 'INTEGER', '42', '42')
    assert scenario.serialized_expected == '42'
    assert scenario.expected(Path.SERIALIZED) == '42'
    assert str(scenario) == 'int [INTEGER <- 42]'


def test_type_scenario_null_expectation():
    """Test an explicit None expectation stays None on both paths"""
    scenario = TypeScenario('null_int', 'INTEGER', 'NULL', None)
    assert scenario.direct_expected is None
    assert scenario.serialized_expected is None


def test_resolve_default_adapter():
    """Test resolution against the default adapter"""
    scenarios = {s.name: s for s in resolve_catalog(DEFAULT_ADAPTER)}

    assert scenarios['real_1'].direct_expected == '256.0'
    assert scenarios['double_1'].column_type == 'DOUBLE'
    assert scenarios['double_1'].direct_expected == '-256.0'
    assert scenarios['boolean_1'].insert_literal == '1'
    assert scenarios['boolean_1'].direct_expected == 'true'
    assert scenarios['boolean_2'].direct_expected == 'false'
    assert scenarios['numeric_1'].column_type == 'NUMERIC(30, 5)'
    assert scenarios['decimal_1'].column_type == 'DECIMAL(30, 5)'
    assert scenarios['string_col_2'].direct_expected == STRING_VAL_OUT
    assert scenarios['null_string_col'].direct_expected is None


def test_resolve_timestamps():
    """Test timestamps resolve to different text on each path"""
    ts1 = _resolved(DEFAULT_ADAPTER, 'timestamp_1')
    assert ts1.direct_expected == '2009-04-24 18:24:00.000000000'
    assert ts1.serialized_expected == '2009-04-24 18:24:00.0'

    ts2 = _resolved(DEFAULT_ADAPTER, 'timestamp_2')
    assert ts2.direct_expected == '2009-04-24 18:24:00.000200000'
    assert ts2.serialized_expected == '2009-04-24 18:24:00.0002'

    ts3 = _resolved(DEFAULT_ADAPTER, 'timestamp_3')
    assert ts3.insert_literal == 'null'
    assert ts3.direct_expected is None
    assert ts3.serialized_expected is None


def test_resolve_sqlite():
    scenarios = {s.name: s for s in resolve_catalog(SQLITE_ADAPTER)}

    assert scenarios['boolean_1'].direct_expected == '1'
    assert scenarios['boolean_3'].serialized_expected == '0'
    assert scenarios['date_1'].insert_literal == "'2009-01-12'"
    assert scenarios['time_3'].insert_literal == "'06:24:00'"
    assert scenarios['time_3'].direct_expected == '06:24:00'
    assert scenarios['timestamp_1'].serialized_expected == '2009-04-24 18:24:00'
    assert scenarios['numeric_5'].direct_expected == '1e+20'


def test_resolve_postgres():
    scenarios = {s.name: s for s in resolve_catalog(POSTGRES_ADAPTER)}

    assert scenarios['string_col_2'].direct_expected == STRING_VAL_OUT.ljust(32)
    assert scenarios['boolean_1'].insert_literal == "'1'"
    assert scenarios['boolean_3'].insert_literal == 'false'
    assert scenarios['double_2'].column_type == 'DOUBLE PRECISION'
    assert scenarios['longvarchar'].column_type == 'TEXT'
    assert scenarios['numeric_1'].direct_expected == '1.00000'
    assert scenarios['decimal_3'].serialized_expected == '3.14159'
    assert scenarios['tinyint_1'].requires == 'tinyint'


def test_select_templates():
    """Test fnmatch selection over scenario names"""
    selected = select_templates(['numeric_*', 'int'])
    assert [t.name for t in selected][:1] == ['int']
    assert len(selected) == 7

    assert select_templates(None) == list(CATALOG)
    assert select_templates(['nothing_*']) == []


def test_timestamp_fraction_warning(caplog):
    """Test a default timestamp prediction short of nine digits is reported"""
    template = ScenarioTemplate('timestamp_short', "'2009-04-24 18:24:00.5'",
                                '2009-04-24 18:24:00.5', spelling='timestamp',
                                rule='timestamp', rewrite='timestamp')

    with caplog.at_level(logging.WARNING, logger='typecompat.catalog'):
        scenario = template.resolve(DEFAULT_ADAPTER)

    assert scenario.direct_expected == '2009-04-24 18:24:00.500'
    assert 'fractional digits' in caplog.text


def test_timestamp_no_warning_for_full_padding(caplog):
    with caplog.at_level(logging.WARNING, logger='typecompat.catalog'):
        resolve_catalog(DEFAULT_ADAPTER, ['timestamp_*'])
    assert 'fractional digits' not in caplog.text


def test_unknown_rule_raises():
    template = ScenarioTemplate('bad', '1', '1', column_type='INTEGER', rule='interval')
    with pytest.raises(ValueError):
        template.resolve(DEFAULT_ADAPTER)


if __name__ == '__main__':
    __import__('pytest').main([__file__])
