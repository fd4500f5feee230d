"""
Backend adapter definition.

An adapter is a single immutable configuration value that holds everything a
verifier needs to know about one backend:

- capability flags for the optional types (boolean, bigint, tinyint,
  longvarchar, time)
- DDL spellings for types whose syntax differs between backends
- literal rewrites for inserts that need a backend-specific syntax
- normalization rules predicting the observed text of a value on the direct
  path and on the serialized path

Backends are described by deriving a new value from `DEFAULT_ADAPTER`, never
by subclassing. The verifier receives the adapter by injection and stays
backend-agnostic.
"""
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Self

from typecompat.normalize import Rule, WidthRule, identity, timestamp_db_output
from typecompat.normalize import timestamp_seq_output, unpadded
from typecompat.normalize import with_decimal_zero

BOOLEAN = 'boolean'
BIGINT = 'bigint'
TINYINT = 'tinyint'
LONGVARCHAR = 'longvarchar'
TIME = 'time'

OPTIONAL_TYPES = (BOOLEAN, BIGINT, TINYINT, LONGVARCHAR, TIME)

# Leading DDL word -> optional type it needs
_CAPABILITY_WORDS = {
    'BOOLEAN': BOOLEAN,
    'BIGINT': BIGINT,
    'TINYINT': TINYINT,
    'LONGVARCHAR': LONGVARCHAR,
    'TIME': TIME,
    }

# Registry of backend name -> adapter
_ADAPTER_REGISTRY: dict[str, 'Adapter'] = {}


class Path(str, Enum):
    """Extraction path a value is observed through."""
    DIRECT = 'direct'
    SERIALIZED = 'serialized'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PathRules:
    """Normalization rule pair for one logical type.

    When `serialized` is None the serialized path applies the direct rule to
    the inserted literal.
    """
    direct: Callable[..., str] = identity
    serialized: Callable[..., str] | None = None

    def rule_for(self, path: Path) -> Callable[..., str]:
        if path is Path.SERIALIZED and self.serialized is not None:
            return self.serialized
        return self.direct

    def apply(self, path: Path, value: str, width: int | None = None) -> str:
        rule = self.rule_for(path)
        if width is None:
            return rule(value)
        return rule(width, value)


@dataclass(frozen=True, slots=True)
class Spelling:
    """Fixed text of a value on each path (serialized defaults to direct)."""
    direct: str
    serialized: str | None = None

    def for_path(self, path: Path) -> str:
        if path is Path.SERIALIZED and self.serialized is not None:
            return self.serialized
        return self.direct


def ansi_numeric(int_digits: int, frac_digits: int) -> str:
    return f'NUMERIC({int_digits}, {frac_digits})'


def ansi_decimal(int_digits: int, frac_digits: int) -> str:
    return f'DECIMAL({int_digits}, {frac_digits})'


def _all_supported() -> Mapping[str, bool]:
    return MappingProxyType(dict.fromkeys(OPTIONAL_TYPES, True))


def register_adapter(adapter: 'Adapter') -> 'Adapter':
    """Register an adapter under its backend name and return it.

    Usage:
        SQLITE_ADAPTER = register_adapter(DEFAULT_ADAPTER.derive(name='sqlite', ...))
    """
    _ADAPTER_REGISTRY[adapter.name] = adapter
    return adapter


@dataclass(frozen=True)
class Adapter:
    """Capability, spelling and normalization surface of one backend.
    """
    name: str = 'generic'
    capabilities: Mapping[str, bool] = field(default_factory=_all_supported)

    # DDL spellings
    numeric_int_digits: int = 30
    numeric_frac_digits: int = 5
    decimal_int_digits: int = 30
    decimal_frac_digits: int = 5
    numeric_spelling: Callable[[int, int], str] = ansi_numeric
    decimal_spelling: Callable[[int, int], str] = ansi_decimal
    double_spelling: str = 'DOUBLE'
    longvarchar_spelling: str = 'LONGVARCHAR'
    timestamp_spelling: str = 'TIMESTAMP'

    # Insert literal rewrites
    rewrite_date_literal: Rule = identity
    rewrite_time_literal: Rule = identity
    rewrite_timestamp_literal: Rule = identity
    rewrite_boolean_literal: Rule = identity

    # Observed text per path
    true_bool: Spelling = Spelling('true')
    false_bool: Spelling = Spelling('false')
    real_output: PathRules = PathRules(with_decimal_zero)
    float_output: PathRules = PathRules(with_decimal_zero)
    double_output: PathRules = PathRules(with_decimal_zero)
    date_output: PathRules = PathRules(identity)
    timestamp_output: PathRules = PathRules(timestamp_db_output, timestamp_seq_output)
    numeric_output: PathRules = PathRules(identity)
    decimal_output: PathRules = PathRules(identity)
    fixed_char_output: PathRules = PathRules(unpadded)

    def derive(self, **changes: Any) -> Self:
        """Return a copy with `changes` applied.

        Capability changes are merged into the existing flags rather than
        replacing them.
        """
        if 'capabilities' in changes:
            merged = dict(self.capabilities)
            merged.update(changes['capabilities'])
            changes['capabilities'] = MappingProxyType(merged)
        return replace(self, **changes)

    @property
    def table_prefix(self) -> str:
        return f'MGR_{self.name.upper()}_'

    # Capabilities

    def supports(self, type_name: str) -> bool:
        """Return False only for types the backend explicitly lacks."""
        return bool(self.capabilities.get(type_name, True))

    def supports_boolean(self) -> bool:
        return self.supports(BOOLEAN)

    def supports_bigint(self) -> bool:
        return self.supports(BIGINT)

    def supports_tinyint(self) -> bool:
        return self.supports(TINYINT)

    def supports_longvarchar(self) -> bool:
        return self.supports(LONGVARCHAR)

    def supports_time(self) -> bool:
        return self.supports(TIME)

    def capability_for(self, column_type: str) -> str | None:
        """Optional type a column DDL fragment depends on, or None.

        >>> DEFAULT_ADAPTER.capability_for('BOOLEAN')
        'boolean'
        >>> DEFAULT_ADAPTER.capability_for('TIMESTAMP') is None
        True
        """
        text = column_type.strip().upper()
        if text == self.longvarchar_type().upper():
            return LONGVARCHAR
        word = re.split(r'[\s(]', text, maxsplit=1)[0]
        return _CAPABILITY_WORDS.get(word)

    # Spellings

    def numeric_type(self, int_digits: int | None = None,
                     frac_digits: int | None = None) -> str:
        """NUMERIC column able to hold `int_digits` total, `frac_digits` after the point."""
        return self.numeric_spelling(
            self.numeric_int_digits if int_digits is None else int_digits,
            self.numeric_frac_digits if frac_digits is None else frac_digits)

    def decimal_type(self, int_digits: int | None = None,
                     frac_digits: int | None = None) -> str:
        return self.decimal_spelling(
            self.decimal_int_digits if int_digits is None else int_digits,
            self.decimal_frac_digits if frac_digits is None else frac_digits)

    def double_type(self) -> str:
        return self.double_spelling

    def longvarchar_type(self) -> str:
        return self.longvarchar_spelling

    def timestamp_type(self) -> str:
        """TIMESTAMP column that accepts NULL."""
        return self.timestamp_spelling

    def spell(self, logical_type: str) -> str:
        """Resolve a logical type name to this backend's DDL fragment.
        """
        spellings = {
            'numeric': self.numeric_type,
            'decimal': self.decimal_type,
            'double': self.double_type,
            'longvarchar': self.longvarchar_type,
            'timestamp': self.timestamp_type,
        }
        if logical_type not in spellings:
            raise ValueError(f'No DDL spelling for logical type: {logical_type}')
        return spellings[logical_type]()

    # Literals and expectations

    def rewrite(self, kind: str, literal: str) -> str:
        """Apply the insert-literal rewrite for `kind` (date, time, timestamp, boolean)."""
        rewriter = getattr(self, f'rewrite_{kind}_literal', None)
        if rewriter is None:
            raise ValueError(f'No literal rewrite for kind: {kind}')
        return rewriter(literal)

    def boolean_output(self, value: bool, path: Path) -> str:
        spelling = self.true_bool if value else self.false_bool
        return spelling.for_path(path)

    def normalize(self, rule: str, path: Path, value: str,
                  width: int | None = None) -> str:
        """Expected text of `value` for logical type `rule` on `path`.

        `rule` is one of real, float, double, date, timestamp, numeric,
        decimal, fixed_char.
        """
        rules = getattr(self, f'{rule}_output', None)
        if not isinstance(rules, PathRules):
            raise ValueError(f'No normalization rule for: {rule}')
        return rules.apply(Path(path), value, width)


DEFAULT_ADAPTER = register_adapter(Adapter())
