import pytest
import math
from decimal import Decimal
from fractions import Fraction

# Target module
import factorium.core.utils as utils


# -------------------------------
# as_fraction
# -------------------------------

@pytest.mark.parametrize("x, expected", [
    (3, Fraction(3)),
    (Fraction(2, 3), Fraction(2, 3)),
    (0.5, Fraction(1, 2)),
    (Decimal("1.5"), Fraction(3, 2)),
    (Decimal("0.001"), Fraction(1, 1000)),
])
def test_as_fraction_is_exact(x, expected):
    assert utils.as_fraction(x) == expected

def test_as_fraction_keeps_binary_value_of_floats():
    # 0.1 is not 1/10 in binary; no rounding is applied
    assert utils.as_fraction(0.1) != Fraction(1, 10)
    assert float(utils.as_fraction(0.1)) == 0.1

def test_as_fraction_rejects_bool():
    with pytest.raises(TypeError):
        utils.as_fraction(True)

@pytest.mark.parametrize("x", [math.nan, math.inf, -math.inf, Decimal("NaN")])
def test_as_fraction_rejects_non_finite(x):
    with pytest.raises(ValueError):
        utils.as_fraction(x)

def test_as_fraction_rejects_non_numbers():
    with pytest.raises(TypeError):
        utils.as_fraction("1")


# -------------------------------
# integer_root
# -------------------------------

@pytest.mark.parametrize("n, k, expected", [
    (0, 3, 0),
    (1, 5, 1),
    (1000, 3, 10),
    (999, 3, 9),
    (1001, 3, 10),
    (2 ** 64, 2, 2 ** 32),
    (10 ** 30, 30, 10),
    (17, 1, 17),
])
def test_integer_root_floor(n, k, expected):
    assert utils.integer_root(n, k) == expected

def test_integer_root_rejects_bad_input():
    with pytest.raises(ValueError):
        utils.integer_root(-8, 3)
    with pytest.raises(ValueError):
        utils.integer_root(8, 0)


# -------------------------------
# perfect_power / canonical_number
# -------------------------------

@pytest.mark.parametrize("value, expected", [
    (Fraction(1000), (Fraction(10), 3)),
    (Fraction(64), (Fraction(2), 6)),
    (Fraction(12), (Fraction(12), 1)),
    (Fraction(4, 9), (Fraction(2, 3), 2)),
    (Fraction(1, 1000), (Fraction(1, 10), 3)),
])
def test_perfect_power_uses_largest_exponent(value, expected):
    assert utils.perfect_power(value) == expected

@pytest.mark.parametrize("value", [Fraction(0), Fraction(-8), Fraction(1)])
def test_perfect_power_rejects_zero_negative_and_one(value):
    with pytest.raises(ValueError):
        utils.perfect_power(value)

@pytest.mark.parametrize("value, expected", [
    (Fraction(1000), (Fraction(10), 3)),
    (Fraction(1, 1000), (Fraction(10), -3)),
    (Fraction(1, 2), (Fraction(2), -1)),
    (Fraction(8, 27), (Fraction(2, 3), 3)),
    (Fraction(10) ** 30, (Fraction(10), 30)),
])
def test_canonical_number_flips_unit_fractions(value, expected):
    assert utils.canonical_number(value) == expected

def test_canonical_number_same_for_every_spelling_of_a_scale():
    # 2^2 * 5^2 * 10 and 10 * 100 are both 10^3
    a = utils.canonical_number(Fraction(2) ** 2 * Fraction(5) ** 2 * 10)
    b = utils.canonical_number(Fraction(10) * Fraction(100))
    assert a == b == (Fraction(10), 3)

@pytest.mark.parametrize("terms, expected", [
    ([(Fraction(2), 2), (Fraction(5), 2), (Fraction(10), 1)], (Fraction(10), 3)),
    ([(Fraction(4), 3), (Fraction(8), -2)], None),
    ([(Fraction(1, 100), 2)], (Fraction(10), -4)),
    ([(Fraction(6), 2), (Fraction(2), -2)], (Fraction(3), 2)),
    ([(Fraction(12), 1), (Fraction(3), 1)], (Fraction(6), 2)),
    ([(Fraction(9, 4), 1)], (Fraction(3, 2), 2)),
    ([], None),
])
def test_canonical_power_combines_terms_without_expanding(terms, expected):
    assert utils.canonical_power(terms) == expected

@pytest.mark.regression(reason="Huge exponents are canonicalized from their bases, not their value")
def test_canonical_power_handles_huge_exponents():
    assert utils.canonical_power([(Fraction(10), 100_000)]) == (Fraction(10), 100_000)
    assert utils.canonical_power([(Fraction(1000), 5000), (Fraction(100), -1)]) == (Fraction(10), 14_998)
    assert utils.canonical_power([(Fraction(4), 50_000), (Fraction(9), 50_000)]) == (Fraction(6), 100_000)

def test_perfect_power_finds_composite_degrees():
    assert utils.perfect_power(Fraction(2) ** 60) == (Fraction(2), 60)
    assert utils.perfect_power(Fraction(3) ** 35 / 7 ** 35) == (Fraction(3, 7), 35)


# -------------------------------
# format_number
# -------------------------------

@pytest.mark.parametrize("x, expected", [
    (Fraction(10), "10"),
    (Fraction(1, 2), "0.5"),
    (Fraction("1.602176634e-19"), "1.602176634e-19"),
])
def test_format_number(x, expected):
    assert utils.format_number(x) == expected
