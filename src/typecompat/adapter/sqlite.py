"""
SQLite adapter.

SQLite assigns column affinity from the declared type name and stores most
values in one of five storage classes, which shapes what comes back:
- BOOLEAN has NUMERIC affinity; TRUE/FALSE are stored as 1/0
- DATE, TIME and TIMESTAMP values are stored as the inserted text, so date
  and time literals are zero-padded before insert
- NUMERIC and DECIMAL columns turn integral reals into integers
"""
from typecompat.adapter.base import DEFAULT_ADAPTER, PathRules, Spelling
from typecompat.adapter.base import register_adapter
from typecompat.normalize import canonical_date_literal, canonical_time_literal
from typecompat.normalize import identity, sqlite_numeric

SQLITE_ADAPTER = register_adapter(DEFAULT_ADAPTER.derive(
    name='sqlite',
    rewrite_date_literal=canonical_date_literal,
    rewrite_time_literal=canonical_time_literal,
    true_bool=Spelling('1'),
    false_bool=Spelling('0'),
    timestamp_output=PathRules(identity, identity),
    numeric_output=PathRules(sqlite_numeric),
    decimal_output=PathRules(sqlite_numeric),
    ))
