import pytest
from typecompat.normalize import canonical_date_literal, canonical_time_literal
from typecompat.normalize import fraction_digits, pad_fixed_char, pad_fraction
from typecompat.normalize import quote_boolean_literal, sqlite_numeric
from typecompat.normalize import timestamp_db_output, timestamp_seq_output
from typecompat.normalize import unpadded, with_decimal_zero


def test_with_decimal_zero():
    """Test integers gain '.0' and fractional values pass through"""
    assert with_decimal_zero('256') == '256.0'
    assert with_decimal_zero('-256') == '-256.0'
    assert with_decimal_zero('256.45') == '256.45'
    assert with_decimal_zero('256.5') == '256.5'


def test_timestamp_db_output_without_fraction():
    """Test a whole-second timestamp gains nine fractional zeros"""
    assert timestamp_db_output('2009-04-24 18:24:00') == '2009-04-24 18:24:00.000000000'


def test_timestamp_db_output_with_fraction():
    """Test the zero count equals the length of the string from the dot"""
    assert timestamp_db_output('2009-04-24 18:24:00.0002') == '2009-04-24 18:24:00.000200000'

    # One fractional digit gets two zeros, not eight
    assert timestamp_db_output('2009-04-24 18:24:00.5') == '2009-04-24 18:24:00.500'


def test_timestamp_seq_output():
    """Test serialized timestamps keep their fraction or gain '.0'"""
    assert timestamp_seq_output('2009-04-24 18:24:00') == '2009-04-24 18:24:00.0'
    assert timestamp_seq_output('2009-04-24 18:24:00.0002') == '2009-04-24 18:24:00.0002'


def test_timestamp_rules_pass_null_literal():
    """Test the 'null' literal is returned unchanged by both timestamp rules"""
    assert timestamp_db_output('null') == 'null'
    assert timestamp_seq_output('null') == 'null'


def test_fraction_digits():
    assert fraction_digits('2009-04-24 18:24:00') == 0
    assert fraction_digits('2009-04-24 18:24:00.000200000') == 9
    assert fraction_digits('2009-04-24 18:24:00.500') == 3


def test_fixed_char_rules():
    """Test CHAR values either pass through or pad to the column width"""
    assert unpadded(32, 'abc') == 'abc'
    assert pad_fixed_char(6, 'abc') == 'abc   '
    assert len(pad_fixed_char(32, 'this is a short string')) == 32


@pytest.mark.parametrize(('value', 'digits', 'expected'), [
    ('1', 5, '1.00000'),
    ('-10', 5, '-10.00000'),
    ('3.14159', 5, '3.14159'),
    ('3.1', 3, '3.100'),
    ('42', 0, '42'),
])
def test_pad_fraction(value, digits, expected):
    assert pad_fraction(value, digits) == expected


@pytest.mark.parametrize(('value', 'expected'), [
    ('1', '1'),
    ('-10', '-10'),
    ('3.14159', '3.14159'),
    ('3000000000000000000.14159', '3000000000000000000'),
    ('99999999999999999999.14159', '1e+20'),
    ('-99999999999999999999.14159', '-1e+20'),
])
def test_sqlite_numeric(value, expected):
    """Test integral reals inside int64 collapse to integers"""
    assert sqlite_numeric(value) == expected


def test_canonical_date_literal():
    """Test date literals are zero-padded and unquoted input is untouched"""
    assert canonical_date_literal("'2009-1-12'") == "'2009-01-12'"
    assert canonical_date_literal("'2009-04-24'") == "'2009-04-24'"
    assert canonical_date_literal('NULL') == 'NULL'


def test_canonical_time_literal():
    """Test time literals are zero-padded to HH:MM:SS"""
    assert canonical_time_literal("'6:24:00'") == "'06:24:00'"
    assert canonical_time_literal("'18:24:00'") == "'18:24:00'"
    assert canonical_time_literal('NULL') == 'NULL'


def test_quote_boolean_literal():
    assert quote_boolean_literal('1') == "'1'"
    assert quote_boolean_literal('0') == "'0'"
    assert quote_boolean_literal('false') == 'false'


if __name__ == '__main__':
    __import__('pytest').main([__file__])
