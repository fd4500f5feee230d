"""
Normalization rules mapping an inserted literal to its observed text.

Every rule here is a pure function of the literal text. The comparisons made
by the verifier are string comparisons, so these rules describe exactly how a
backend (plus the extraction path) spells a value it was given, not whether
two spellings are numerically equal.

Default rules:
- `identity` - pass-through (date, numeric, decimal, fixed-width char)
- `with_decimal_zero` - REAL/FLOAT/DOUBLE on both paths
- `timestamp_db_output` - timestamp as returned by a direct read
- `timestamp_seq_output` - timestamp as rendered from a serialized record

Backend helpers (used by concrete adapters):
- `pad_fixed_char`, `pad_fraction`, `sqlite_numeric`
- `canonical_date_literal`, `canonical_time_literal`, `quote_boolean_literal`
"""
from collections.abc import Callable

import dateutil.parser

Rule = Callable[[str], str]
WidthRule = Callable[[int, str], str]

NULL_LITERAL = 'null'
NANO_PADDING = '.000000000'

_INT64_MIN = -2**63
_INT64_MAX = 2**63 - 1


def identity(value: str) -> str:
    """Return the value exactly as inserted."""
    return value


def unpadded(width: int, value: str) -> str:
    """Return a CHAR(width) value unchanged (backend does not pad)."""
    return value


def with_decimal_zero(floating_point_str: str) -> str:
    """Return a floating-point string as entered, with '.0' added to integers.

    >>> with_decimal_zero('256')
    '256.0'
    >>> with_decimal_zero('256.45')
    '256.45'
    """
    if '.' not in floating_point_str:
        return floating_point_str + '.0'
    return floating_point_str


def timestamp_db_output(ts_as_inserted: str) -> str:
    """Convert an inserted timestamp to the text returned by a direct read.

    Without fractional seconds the value gains nine zero digits. With a
    fraction, the number of zeros appended is the length of the string minus
    the position of the dot. That count is not a fixed target width; it is
    kept as observed.

    >>> timestamp_db_output('2009-04-24 18:24:00')
    '2009-04-24 18:24:00.000000000'
    >>> timestamp_db_output('2009-04-24 18:24:00.0002')
    '2009-04-24 18:24:00.000200000'
    """
    if ts_as_inserted == NULL_LITERAL:
        return ts_as_inserted

    dot_pos = ts_as_inserted.find('.')
    if dot_pos == -1:
        return ts_as_inserted + NANO_PADDING

    return ts_as_inserted + '0' * (len(ts_as_inserted) - dot_pos)


def timestamp_seq_output(ts_as_inserted: str) -> str:
    """Convert an inserted timestamp to the text of a serialized record.

    >>> timestamp_seq_output('2009-04-24 18:24:00')
    '2009-04-24 18:24:00.0'
    >>> timestamp_seq_output('2009-04-24 18:24:00.0002')
    '2009-04-24 18:24:00.0002'
    """
    if ts_as_inserted == NULL_LITERAL:
        return ts_as_inserted

    if '.' not in ts_as_inserted:
        return ts_as_inserted + '.0'
    return ts_as_inserted


def fraction_digits(ts: str) -> int:
    """Number of digits after the dot of a timestamp string (0 if none)."""
    dot_pos = ts.find('.')
    if dot_pos == -1:
        return 0
    return len(ts) - dot_pos - 1


def pad_fixed_char(width: int, value: str) -> str:
    """Right-pad a CHAR(width) value with spaces to the column width."""
    return value.ljust(width)


def pad_fraction(value: str, digits: int) -> str:
    """Pad a decimal string with zeros to exactly `digits` fractional places.

    >>> pad_fraction('-10', 5)
    '-10.00000'
    >>> pad_fraction('3.14', 5)
    '3.14000'
    """
    if digits <= 0:
        return value
    whole, dot, frac = value.partition('.')
    return f'{whole}.{frac.ljust(digits, "0")}'


def sqlite_numeric(value: str) -> str:
    """Text of a numeric literal stored in a NUMERIC-affinity SQLite column.

    Integer literals come back unchanged. Real literals are parsed as 64-bit
    floats; a float that is integral and inside the int64 range is stored as
    an integer, anything else comes back as a float.

    >>> sqlite_numeric('3.14159')
    '3.14159'
    >>> sqlite_numeric('3000000000000000000.14159')
    '3000000000000000000'
    >>> sqlite_numeric('-99999999999999999999.14159')
    '-1e+20'
    """
    if '.' not in value:
        return value
    real = float(value)
    if real.is_integer() and _INT64_MIN < real < _INT64_MAX:
        return str(int(real))
    return repr(real)


def _unquote(literal: str) -> str | None:
    if len(literal) >= 2 and literal[0] == literal[-1] == "'":
        return literal[1:-1]
    return None


def canonical_date_literal(literal: str) -> str:
    """Rewrite a quoted date literal to zero-padded ISO form.

    Unquoted input (NULL, function calls) is returned unchanged.

    >>> canonical_date_literal("'2009-1-12'")
    "'2009-01-12'"
    """
    text = _unquote(literal)
    if text is None:
        return literal
    return f"'{dateutil.parser.parse(text).date().isoformat()}'"


def canonical_time_literal(literal: str) -> str:
    """Rewrite a quoted time literal to zero-padded HH:MM:SS form.

    >>> canonical_time_literal("'6:24:00'")
    "'06:24:00'"
    """
    text = _unquote(literal)
    if text is None:
        return literal
    return f"'{dateutil.parser.parse(text).time().isoformat()}'"


def quote_boolean_literal(literal: str) -> str:
    """Quote bare 0/1 boolean literals for backends that reject integers."""
    if literal in {'0', '1'}:
        return f"'{literal}'"
    return literal
