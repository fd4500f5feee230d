"""
PostgreSQL adapter.

PostgreSQL differs from the defaults in a handful of places:
- there is no TINYINT
- doubles are spelled DOUBLE PRECISION and long strings TEXT
- a bare integer is not accepted for a BOOLEAN column, so 0/1 are quoted
- CHAR(n) values come back right-padded to n on both paths
- NUMERIC(p, s) values come back with exactly s fractional digits

Build variants through `postgres_adapter()` rather than deriving from
`POSTGRES_ADAPTER`, so the expected padding follows a changed scale.
"""
from functools import partial

from typecompat.adapter.base import DEFAULT_ADAPTER, TINYINT, Adapter
from typecompat.adapter.base import PathRules, register_adapter
from typecompat.normalize import pad_fixed_char, pad_fraction
from typecompat.normalize import quote_boolean_literal


def postgres_adapter(numeric_frac_digits: int = DEFAULT_ADAPTER.numeric_frac_digits,
                     decimal_frac_digits: int = DEFAULT_ADAPTER.decimal_frac_digits,
                     **changes) -> Adapter:
    """PostgreSQL adapter whose NUMERIC/DECIMAL padding matches the declared scale.

    Usage:
        adapter = postgres_adapter(numeric_frac_digits=2, name='postgresql_s2')
    """
    adapter = DEFAULT_ADAPTER.derive(
        name='postgresql',
        capabilities={TINYINT: False},
        double_spelling='DOUBLE PRECISION',
        longvarchar_spelling='TEXT',
        rewrite_boolean_literal=quote_boolean_literal,
        fixed_char_output=PathRules(pad_fixed_char),
        numeric_frac_digits=numeric_frac_digits,
        decimal_frac_digits=decimal_frac_digits,
        numeric_output=PathRules(partial(pad_fraction, digits=numeric_frac_digits)),
        decimal_output=PathRules(partial(pad_fraction, digits=decimal_frac_digits)),
        )
    return adapter.derive(**changes) if changes else adapter


POSTGRES_ADAPTER = register_adapter(postgres_adapter())
