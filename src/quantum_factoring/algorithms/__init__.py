"""Order finding and factoring algorithms."""

from .oracle import apply_order_finding_oracle
from .phase_estimation import bits_precision_for, estimate_frequency
from .period import estimate_period, period_from_frequency
from .factoring import factor_semiprime_integer, maybe_factors_from_period, validate_number
from .classical import ClassicalShor, find_period_classical
from .quantum import QuantumShor

__all__ = [
    "apply_order_finding_oracle",
    "bits_precision_for",
    "estimate_frequency",
    "estimate_period",
    "period_from_frequency",
    "factor_semiprime_integer",
    "maybe_factors_from_period",
    "validate_number",
    "ClassicalShor",
    "find_period_classical",
    "QuantumShor",
]
