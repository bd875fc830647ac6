from decimal import Decimal
from fractions import Fraction

import pytest

from factorium.core.numeric import Scalar, is_scalar, match_scalar, scale_value


@pytest.mark.parametrize("value", [1, 2.5, Fraction(1, 3), Decimal("1.25")])
def test_real_numbers_are_scalars(value):
    assert is_scalar(value)
    assert isinstance(value, Scalar)

@pytest.mark.parametrize("value", [True, 1j, "1", None, [1]])
def test_non_reals_are_not_scalars(value):
    assert not is_scalar(value)


def test_scale_value_identity_returns_value_unchanged():
    value = 2.5
    assert scale_value(value, Fraction(1)) is value

def test_scale_value_int_stays_int_when_whole():
    result = scale_value(2, Fraction(1000))
    assert result == 2000
    assert type(result) is int

def test_scale_value_int_becomes_fraction_when_not_whole():
    result = scale_value(1, Fraction(1, 1000))
    assert result == Fraction(1, 1000)
    assert isinstance(result, Fraction)

def test_scale_value_fraction_narrows_to_int():
    result = scale_value(Fraction(499, 500), Fraction(1000))
    assert result == 998
    assert type(result) is int

def test_scale_value_float_stays_float():
    result = scale_value(0.2, Fraction(1000))
    assert result == 200.0
    assert type(result) is float

def test_scale_value_decimal_stays_decimal():
    result = scale_value(Decimal("1.5"), Fraction(1, 1000))
    assert result == Decimal("0.0015")
    assert type(result) is Decimal

@pytest.mark.parametrize("value, like, expected, kind", [
    (0.001, Decimal("1"), Decimal("0.001"), Decimal),
    (Fraction(1, 8), Decimal("1"), Decimal("0.125"), Decimal),
    (Decimal("0.25"), 1.0, 0.25, float),
    (Decimal("0.25"), Fraction(1, 2), Fraction(1, 4), Fraction),
    (3, Decimal("1"), 3, int),
    (Decimal("2"), 1, Decimal("2"), Decimal),
    (0.5, Fraction(1, 3), 0.5, float),
])
def test_match_scalar_only_converts_pairs_that_do_not_mix(value, like, expected, kind):
    result = match_scalar(value, like)
    assert result == expected
    assert type(result) is kind
