"""Rational arithmetic: simplification, arithmetic, rounding, conversion and comparison."""
import math
import pytest
import sympy
from decimal import Decimal, ROUND_HALF_EVEN, ROUND_DOWN
from fractions import Fraction
from exactlinalg import Rational, ZERO, ONE, HALF
from exactlinalg.errors import DivisionByZeroError, InvalidParameterError, ExactLinalgError
from exactlinalg.names import REDUCTION_THRESHOLD

# =============================================================================
# Construction
# =============================================================================


def test_sign_moves_to_numerator():
    """Negative denominators are normalized away."""
    value = Rational(2, -4)
    assert value.denominator > 0
    assert value == Rational(-1, 2)
    assert str(value) == "-1 / 2"


def test_zero_has_unit_denominator():
    """Zero is always stored as 0 / 1."""
    value = Rational(0, -5)
    assert value.numerator == 0
    assert value.denominator == 1
    assert value.is_zero()


def test_zero_denominator():
    """A zero denominator raises DivisionByZeroError, which is also a ZeroDivisionError."""
    with pytest.raises(DivisionByZeroError):
        Rational(1, 0)
    with pytest.raises(ZeroDivisionError):
        Rational(1, 0)
    with pytest.raises(ExactLinalgError):
        Rational(1, 0)


def test_large_fractions_are_reduced():
    """Operands at the reduction threshold are divided by their gcd right away."""
    value = Rational(REDUCTION_THRESHOLD, 2 * REDUCTION_THRESHOLD)
    assert value.numerator == 1
    assert value.denominator == 2


def test_unreduced_values_compare_equal():
    """Reduction state does not leak into equality, ordering or hashing."""
    assert Rational(2, 4) == Rational(1, 2)
    assert not Rational(2, 4) < Rational(1, 2)
    assert hash(Rational(2, 4)) == hash(Rational(1, 2)) == hash(Fraction(1, 2)) == hash(0.5)
    assert Rational(2, 4).reduce().numerator == 1


@pytest.mark.parametrize("value, expected", [
    (3, Rational(3)),
    (0.1, Rational(1, 10)),
    ("3/4", Rational(3, 4)),
    (" -1.25", Rational(-5, 4)),
    ("7", Rational(7)),
    (Decimal("0.5"), HALF),
    (Fraction(3, 4), Rational(3, 4)),
    (sympy.Rational(-3, 4), Rational(-3, 4)),
    (True, ONE),
])
def test_value_of(value, expected):
    """value_of accepts the supported numeric types and strings."""
    assert Rational.value_of(value) == expected


def test_value_of_rejects_invalid_input():
    """Non-finite, malformed and unsupported inputs are rejected."""
    with pytest.raises(InvalidParameterError):
        Rational.value_of(float('nan'))
    with pytest.raises(InvalidParameterError):
        Rational.value_of(float('inf'))
    with pytest.raises(ValueError):
        Rational.value_of("abc")
    with pytest.raises(ValueError):
        Rational.value_of("1/x")
    with pytest.raises(TypeError):
        Rational.value_of(object())


def test_of():
    """of builds from a pair or from a single value."""
    assert Rational.of(3, 6) == HALF
    assert Rational.of("1/2") == HALF
    assert Rational.of(Fraction(1, 2)) == HALF


# =============================================================================
# Arithmetic
# =============================================================================


def test_add_example():
    """1/3 + 1/6 == 1/2"""
    assert Rational(1, 3).add(Rational(1, 6)) == Rational(1, 2)


@pytest.mark.parametrize("a, b", [
    (Rational(3, 7), Rational(-2, 5)),
    (Rational(-11, 4), Rational(13, 9)),
    (Rational(10**40 + 1, 3), Rational(7, 10**30)),
])
def test_arithmetic_identities(a, b):
    """Division undoes multiplication, a value plus its negation is zero."""
    assert a.divide(b).multiply(b) == a
    assert a.add(a.negate()) == ZERO
    assert a.subtract(b).add(b) == a
    assert a.multiply(b.invert()) == a.divide(b)


def test_divide_by_zero():
    """Dividing by zero or inverting zero fails."""
    with pytest.raises(DivisionByZeroError):
        ONE.divide(ZERO)
    with pytest.raises(DivisionByZeroError):
        ZERO.invert()
    with pytest.raises(ZeroDivisionError):
        ONE / 0


def test_pow():
    """Integer, negative and exactly representable fractional exponents."""
    assert Rational(2, 3).pow(2) == Rational(4, 9)
    assert Rational(2, 3).pow(-2) == Rational(9, 4)
    assert Rational(2, 3).pow(0) == ONE
    assert Rational(4, 9).pow(Rational(1, 2)) == Rational(2, 3)
    assert Rational(8, 27).pow("2/3") == Rational(4, 9)
    assert Rational(-8).pow(Rational(1, 3)) == Rational(-2)
    assert Rational(3, 2) ** 3 == Rational(27, 8)


def test_pow_without_rational_result():
    """Fractional exponents without an exact rational root are rejected."""
    with pytest.raises(InvalidParameterError):
        Rational(2).pow(Rational(1, 2))
    with pytest.raises(InvalidParameterError):
        Rational(-4).pow(Rational(1, 2))
    with pytest.raises(DivisionByZeroError):
        ZERO.pow(-1)


def test_shifts_min_max_abs():
    assert Rational(3, 4).shift_left(2) == Rational(3)
    assert Rational(3, 4).shift_right(1) == Rational(3, 8)
    assert Rational(3, 4).shift_left(-1) == Rational(3, 8)
    assert Rational(1, 3).min(Rational(1, 2)) == Rational(1, 3)
    assert Rational(1, 3).max(Rational(1, 2)) == Rational(1, 2)
    assert Rational(-5, 3).abs() == Rational(5, 3)
    assert Rational(-5, 3).signum() == -1


def test_operators_with_builtin_numbers():
    """Python operators coerce ints, floats and Fractions."""
    assert Rational(1, 2) + 1 == Rational(3, 2)
    assert 1 - Rational(1, 4) == Rational(3, 4)
    assert 2 / Rational(1, 3) == Rational(6)
    assert Fraction(1, 2) * Rational(2, 3) == Rational(1, 3)
    assert -Rational(1, 2) == Rational(-1, 2)
    assert Rational(1, 2) == 0.5
    assert Rational(1, 2) != "1/2"


# =============================================================================
# Rounding
# =============================================================================


@pytest.mark.parametrize("value, floor, ceil, rounded, truncated", [
    (Rational(7, 2), 3, 4, 4, 3),
    (Rational(-7, 2), -4, -3, -3, -3),
    (Rational(5, 2), 2, 3, 3, 2),
    (Rational(-5, 2), -3, -2, -2, -2),
    (Rational(-1, 3), -1, 0, 0, 0),
    (Rational(4), 4, 4, 4, 4),
])
def test_floor_ceil_round(value, floor, ceil, rounded, truncated):
    """round is floor(x + 1/2), to_int truncates toward zero."""
    assert value.floor() == floor
    assert value.ceil() == ceil
    assert value.round() == rounded
    assert value.to_int() == truncated
    assert math.floor(value) == floor
    assert math.ceil(value) == ceil
    assert int(value) == truncated
    assert round(value) == rounded
    assert isinstance(round(value), int)


def test_round_to_digits():
    assert round(Rational(1, 8), 2) == Rational(13, 100)
    assert round(Rational(-1, 8), 2) == Rational(-3, 25)
    assert round(Rational(1250), -2) == Rational(1300)


# =============================================================================
# Conversion
# =============================================================================


def test_to_decimal():
    """Rounding happens once on the exact quotient."""
    assert Rational(1, 3).to_decimal(4) == Decimal("0.3333")
    assert Rational(2, 3).to_decimal(2) == Decimal("0.67")
    assert Rational(1, 8).to_decimal(2) == Decimal("0.13")
    assert Rational(-1, 8).to_decimal(2) == Decimal("-0.13")
    assert Rational(1, 8).to_decimal(2, ROUND_HALF_EVEN) == Decimal("0.12")
    assert Rational(-2, 3).to_decimal(1, ROUND_DOWN) == Decimal("-0.6")
    assert Rational(1234).to_decimal(-2) == Decimal("1200")
    assert Rational(-1, 1000).to_decimal(1) == Decimal("0")


def test_to_string():
    """Fraction notation by default, plain decimals with a scale."""
    assert Rational(1, 2).to_string() == "1 / 2"
    assert Rational(6, 3).to_string() == "2"
    assert Rational(1, 3).to_string(3) == "0.333"
    assert Rational(5, 2).to_string(2) == "2.5"
    assert Rational(4).to_string(2) == "4"
    assert Rational(100).to_string(0) == "100"
    assert repr(Rational(1, 2)) == "Rational(1, 2)"


def test_float_and_fraction():
    assert float(Rational(1, 4)) == 0.25
    assert Rational(-3, 4).to_fraction() == Fraction(-3, 4)
    assert Rational(3).is_integer()
    assert not Rational(3, 2).is_integer()
    assert Rational(5, 5).is_one()


def test_ordering():
    """Sorting uses exact comparison."""
    values = [Rational(1, 2), Rational(-1, 3), Rational(2, 7), ONE]
    assert sorted(values) == [Rational(-1, 3), Rational(2, 7), Rational(1, 2), ONE]
    assert Rational(1, 3).compare_to(Rational(2, 6)) == 0
    assert Rational(1, 3).compare_to(HALF) == -1
    assert HALF >= Rational(1, 3)
