"""Number-theory helpers for Shor's algorithm."""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Optional


def gcd(a: int, b: int) -> int:
    """Calculate the Greatest Common Divisor of a and b."""
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    """Least common multiple, written as ``a * b / gcd(a, b)``."""
    return a * b // math.gcd(a, b)


def trailing_zeros(value: int) -> int:
    """Number of trailing zero bits of a positive integer."""
    if value <= 0:
        raise ValueError(f"trailing_zeros expects a positive integer, got {value}")
    return (value & -value).bit_length() - 1


def mod_inverse(a: int, n: int) -> Optional[int]:
    """Return x with (a * x) mod n == 1, or None if a is not invertible."""
    try:
        return pow(a, -1, n)
    except ValueError:
        return None


def continued_fraction_convergent(numerator: int, denominator: int, max_denominator: int) -> tuple[int, int]:
    """Best rational approximation of numerator/denominator.

    Args:
        numerator: Numerator of the value to approximate.
        denominator: Denominator of the value to approximate.
        max_denominator: Ceiling on the denominator of the result.

    Returns:
        (p, q) with q <= max_denominator, in lowest terms.
    """
    frac = Fraction(numerator, denominator).limit_denominator(max_denominator)
    return frac.numerator, frac.denominator


def is_prime(n: int) -> bool:
    """Deterministic Miller-Rabin primality test (exact below 3.3e24)."""
    if n < 2:
        return False
    small_primes = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)
    for p in small_primes:
        if n % p == 0:
            return n == p

    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for a in small_primes:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True

