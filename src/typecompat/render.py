"""
Text rendering of values read back from a backend or a serialized record.

All verification is string based. A direct read renders the DB-API value the
way a driver's string accessor would; a serialized read renders the stored
record field the way the record's text form does. The two only differ for
timestamps:

- direct: always nine fractional digits (2009-04-24 18:24:00.000200000)
- serialized: trailing zeros dropped, at least one digit (2009-04-24 18:24:00.0002)
"""
import datetime
import decimal
from typing import Any


def _nanos(value: datetime.datetime) -> int:
    # pandas Timestamps carry sub-microsecond precision separately
    return value.microsecond * 1000 + getattr(value, 'nanosecond', 0)


def _render_common(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, decimal.Decimal):
        return str(value)
    if isinstance(value, datetime.date | datetime.time):
        return value.isoformat()
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value).hex()
    return str(value)


def render_direct(value: Any) -> str | None:
    """Render a value returned by a direct database read."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return f'{value:%Y-%m-%d %H:%M:%S}.{_nanos(value):09d}'
    return _render_common(value)


def render_serialized(value: Any) -> str | None:
    """Render a value read from a serialized record."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        nanos = _nanos(value)
        fraction = f'{nanos:09d}'.rstrip('0') if nanos else '0'
        return f'{value:%Y-%m-%d %H:%M:%S}.{fraction}'
    return _render_common(value)
