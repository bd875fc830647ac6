"""
factorium.core.utils
====================

Exact-number helpers used by the factor algebra.

Scale factors are kept as ``fractions.Fraction`` so that spellings such as
``10*100`` and ``1000`` reduce to the very same value. The helpers here convert
incoming reals to fractions and find the canonical ``base^power`` form of a
rational scale (e.g. ``1000 -> 10^3``, ``1/1000 -> 10^-3``).
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from functools import lru_cache
from math import gcd, isfinite, isqrt
from numbers import Rational, Real
from typing import Dict, Iterable, Optional, Tuple, Union

RealLike = Union[int, float, Fraction, Decimal, Real]


def as_fraction(x: RealLike) -> Fraction:
    """Convert a finite real number into an exact ``Fraction``.

    Floats and decimals are converted exactly (no rounding), so ``0.1`` becomes
    its binary value ``3602879701896397/36028797018963968``.

    Raises
    ------
    TypeError
        If ``x`` is not a real number (``bool`` is rejected too).
    ValueError
        If ``x`` is NaN or infinite.
    """
    if isinstance(x, bool):
        raise TypeError("bool is not a valid number")
    if isinstance(x, Fraction):
        return x
    if isinstance(x, int):
        return Fraction(x)
    if isinstance(x, Rational):
        return Fraction(x.numerator, x.denominator)
    if isinstance(x, (float, Decimal, Real)):
        if not isfinite(x):
            raise ValueError(f"Number must be finite, got {x!r}")
        return Fraction(x) if isinstance(x, (float, Decimal)) else Fraction(float(x))
    raise TypeError(f"Expected a real number, got {type(x).__name__}")


def integer_root(n: int, k: int) -> int:
    """Return the floor of the ``k``-th root of a non-negative integer ``n``."""
    if n < 0:
        raise ValueError("integer_root requires a non-negative integer")
    if k < 1:
        raise ValueError("root degree must be >= 1")
    if n < 2 or k == 1:
        return n

    # Newton iteration from an upper bound; the sequence decreases to the root.
    r = 1 << -(-n.bit_length() // k)
    while True:
        s = ((k - 1) * r + n // r ** (k - 1)) // k
        if s >= r:
            return r
        r = s


def _next_prime(k: int) -> int:
    k += 1
    while any(k % d == 0 for d in range(2, isqrt(k) + 1)):
        k += 1
    return k


@lru_cache(maxsize=4096)
def perfect_power(value: Fraction) -> Tuple[Fraction, int]:
    """Split a positive rational into ``(base, k)`` with ``base**k == value`` and ``k`` maximal.

    Only prime degrees are tried; each one is applied for as long as it keeps
    giving exact roots, so ``2^6`` is found as a square root then a cube root.

    >>> perfect_power(Fraction(1000))
    (Fraction(10, 1), 3)
    >>> perfect_power(Fraction(4, 9))
    (Fraction(2, 3), 2)
    """
    if value <= 0:
        raise ValueError("perfect_power requires a positive value")
    if value == 1:
        raise ValueError("1 has no unique perfect-power form")

    p, q = value.numerator, value.denominator
    total, k = 1, 2
    # a k-th root other than 1 needs at least 2**k
    while 1 << k <= max(p, q):
        rp = integer_root(p, k)
        if rp ** k == p:
            rq = integer_root(q, k)
            if rq ** k == q:
                p, q, total = rp, rq, total * k
                continue
        k = _next_prime(k)
    return Fraction(p, q), total


def _coprime_insert(basis: Dict[int, int], n: int, exponent: int) -> None:
    """Add ``n**exponent`` to a product kept over pairwise coprime integers."""
    pending = [(n, exponent)]
    while pending:
        n, exponent = pending.pop()
        if n == 1:
            continue
        for c in list(basis):
            g = gcd(n, c)
            if g == 1:
                continue
            f = basis.pop(c)
            pending.extend([(g, exponent + f), (c // g, f), (n // g, exponent)])
            break
        else:
            basis[n] = exponent


def canonical_power(terms: Iterable[Tuple[Fraction, int]]) -> Optional[Tuple[Fraction, int]]:
    """Canonical ``(base, power)`` of a product of ``base**power`` terms, or None when it is 1.

    The product is never expanded: bases are split into pairwise coprime
    integers, each reduced to its perfect-power root, and the greatest common
    divisor of the resulting exponents is the power. ``10^5000`` costs no more
    than ``10^3``.

    >>> canonical_power([(Fraction(2), 2), (Fraction(5), 2), (Fraction(10), 1)])
    (Fraction(10, 1), 3)
    """
    basis: Dict[int, int] = {}
    for value, power in terms:
        if power == 0 or value == 1:
            continue
        _coprime_insert(basis, value.numerator, power)
        _coprime_insert(basis, value.denominator, -power)

    roots: Dict[int, int] = {}
    for c, exponent in basis.items():
        if exponent:
            root, k = perfect_power(Fraction(c))
            roots[root.numerator] = exponent * k
    if not roots:
        return None

    power = gcd(*roots.values())
    base = Fraction(1)
    for root, exponent in roots.items():
        base *= Fraction(root) ** (exponent // power)
    if base.numerator == 1:
        return Fraction(base.denominator), -power
    return base, power


def canonical_number(value: Fraction) -> Tuple[Fraction, int]:
    """Return the canonical ``(base, power)`` pair for a positive rational other than 1.

    The base is the smallest perfect-power root; a base ``1/n`` is flipped to
    ``n`` with a negated power so that ``0.001`` reads as ``10^-3``.
    """
    if value <= 0:
        raise ValueError("canonical_number requires a positive value")
    found = canonical_power([(value, 1)])
    if found is None:
        raise ValueError("1 has no canonical number form")
    return found


def format_number(x: Fraction) -> str:
    """Integers print as integers, anything else as the shortest float repr."""
    if x.denominator == 1:
        return str(x.numerator)
    return repr(float(x))


__all__ = [
    "as_fraction",
    "integer_root",
    "perfect_power",
    "canonical_power",
    "canonical_number",
    "format_number",
]
