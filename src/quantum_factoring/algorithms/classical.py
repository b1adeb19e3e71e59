"""Classical implementation of Shor's algorithm logic."""

import random
from typing import Any, Optional

from ..core import ShorAlgorithm, ShorResult
from ..utils import gcd
from .factoring import factor_semiprime_integer


def find_period_classical(a: int, N: int) -> Optional[int]:
    """Find period r such that a^r = 1 (mod N) using classical iteration."""
    if gcd(a, N) != 1:
        return None

    r = 1
    value = a % N
    while value != 1:
        value = (value * a) % N
        r += 1
        if r > N:
            return None
    return r


class ClassicalShor(ShorAlgorithm):
    """Shor's retry loop with brute-force period finding in place of QPE."""

    def __init__(self, seed: Optional[int] = None, max_attempts: Optional[int] = None):
        self._rng = random.Random(seed)
        self.max_attempts = max_attempts

    def run(self, number: int, **kwargs: Any) -> ShorResult:
        """Run the classical period finding algorithm.

        Args:
            number: The integer to factorize.
            **kwargs: Unused, kept for interface consistency.

        Returns:
            ShorResult containing the factorization results.
        """
        return factor_semiprime_integer(
            number,
            find_period_classical,
            rng=self._rng,
            max_attempts=self.max_attempts,
            method="classical",
        )
