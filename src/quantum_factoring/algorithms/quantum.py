"""Quantum implementation of Shor's algorithm."""

from __future__ import annotations

import random
from typing import Any, Callable, Optional

from ..backends import QuantumBackend, SparseSimulatorBackend
from ..circuit import Context
from ..core import ShorAlgorithm, ShorResult
from .factoring import factor_semiprime_integer
from .period import estimate_period


class QuantumShor(ShorAlgorithm):
    """Quantum implementation of Shor's algorithm using semiclassical QPE."""

    def __init__(
        self,
        backend_factory: Optional[Callable[[], QuantumBackend]] = None,
        seed: Optional[int] = None,
        max_attempts: Optional[int] = None,
        max_period_rounds: Optional[int] = None,
    ):
        """Initialize QuantumShor.

        Args:
            backend_factory: Builds the backend for one run. Defaults to a
                SparseSimulatorBackend seeded with ``seed``.
            seed: Seed for base selection and measurement sampling.
            max_attempts: Ceiling on random bases tried; unbounded if None.
            max_period_rounds: Ceiling on frequency estimations per base.
        """
        self._backend_factory = backend_factory or (lambda: SparseSimulatorBackend(seed=seed))
        self._rng = random.Random(seed)
        self.max_attempts = max_attempts
        self.max_period_rounds = max_period_rounds

    def run(self, number: int, **kwargs: Any) -> ShorResult:
        """Run the quantum algorithm.

        Args:
            number: The integer to factorize.
            **kwargs: Unused, kept for interface consistency.

        Returns:
            ShorResult containing the factorization results.
        """
        backend = self._backend_factory()
        ctx = Context(backend)

        def find_period(generator: int, modulus: int) -> int:
            return estimate_period(ctx, generator, modulus, max_rounds=self.max_period_rounds)

        result = factor_semiprime_integer(
            number,
            find_period,
            rng=self._rng,
            max_attempts=self.max_attempts,
            method="quantum",
        )
        result.backend_name = backend.name()
        result.backend_info = backend.get_info()
        return result
