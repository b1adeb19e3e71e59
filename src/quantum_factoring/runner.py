"""Runner module for Shor's algorithm."""

from __future__ import annotations

from typing import Any, Optional

from .algorithms import ClassicalShor, QuantumShor
from .algorithms.phase_estimation import estimate_frequency
from .backends import QiskitCircuitBackend
from .circuit import Context
from .core import ShorResult

DEFAULT_NUMBER = 15
DEFAULT_METHOD = "quantum"


def run_shor(
    number: int = DEFAULT_NUMBER,
    method: str = DEFAULT_METHOD,
    seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
    **kwargs: Any,
) -> ShorResult:
    """Run Shor's algorithm.

    Args:
        number: The integer to factorize.
        method: "quantum" or "classical".
        seed: Seed for base selection and measurement sampling.
        max_attempts: Ceiling on random bases tried; unbounded if None.
        **kwargs: Additional arguments for QuantumShor
            (``backend_factory``, ``max_period_rounds``).

    Returns:
        ShorResult object.
    """
    if method == "classical":
        algo = ClassicalShor(seed=seed, max_attempts=max_attempts)
        return algo.run(number)
    elif method == "quantum":
        algo = QuantumShor(seed=seed, max_attempts=max_attempts, **kwargs)
        return algo.run(number)
    else:
        raise ValueError(f"Unknown method: {method}")


def factor(number: int, seed: Optional[int] = None) -> tuple[int, int]:
    """Factor ``number`` with the quantum algorithm and return (p, q)."""
    return run_shor(number, method="quantum", seed=seed).factors


def estimate_resources(generator: int, modulus: int) -> dict[str, Any]:
    """Circuit metrics of one frequency-estimation round.

    The round is recorded on a QiskitCircuitBackend, so no simulation takes
    place and every measurement reads 0.
    """
    backend = QiskitCircuitBackend()
    estimate_frequency(Context(backend), generator, modulus, modulus.bit_length())
    metrics = backend.metrics()
    metrics.update({"generator": generator, "modulus": modulus})
    return metrics
