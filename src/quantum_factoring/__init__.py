"""Quantum Factoring Lab - Shor's algorithm on reversible arithmetic circuits.

Subpackages:
- quantum_factoring.arithmetic: reversible constant adders, comparators and
  modular arithmetic
- quantum_factoring.algorithms: order-finding oracle, phase estimation,
  period recovery and the factoring retry loop
- quantum_factoring.backends: sparse simulator and Qiskit circuit backends
"""

import logging

__all__ = [
    "factor",
    "run_shor",
    "estimate_resources",
    "ShorResult",
    "FactoringSetting",
    "sweep_factorizations",
    "summarize_attempts",
]

from .core import ShorResult
from .runner import estimate_resources, factor, run_shor
from .experiment_logging import FactoringSetting, summarize_attempts, sweep_factorizations

logging.getLogger(__name__).addHandler(logging.NullHandler())
