"""Recovering the order from frequency estimates."""

from __future__ import annotations

import logging
from typing import Optional

from ..circuit import Context
from ..errors import AttemptsExhaustedError, ContractViolationError
from ..utils import continued_fraction_convergent, gcd, lcm
from .phase_estimation import bits_precision_for, estimate_frequency

logger = logging.getLogger(__name__)


def period_from_frequency(modulus: int, frequency_estimate: int, bits_precision: int, current_divisor: int) -> int:
    """Fold the denominator recovered from a frequency estimate into a divisor.

    frequency_estimate / 2^bits_precision approximates s/r; its best rational
    approximation with denominator at most ``modulus`` yields r / gcd(s, r).

    Args:
        modulus: The modulus N, bounding the order.
        frequency_estimate: Measured integer k.
        bits_precision: Number of bits of k.
        current_divisor: Divisor of the order accumulated so far.

    Returns:
        lcm(current_divisor, denominator).
    """
    numerator, period = continued_fraction_convergent(frequency_estimate, 2 ** bits_precision, modulus)
    numerator, period = abs(numerator), abs(period)
    period = lcm(current_divisor, period)
    logger.debug("Found period=%d (numerator %d)", period, numerator)
    return period


def estimate_period(ctx: Context, generator: int, modulus: int, max_rounds: Optional[int] = None) -> int:
    """Estimate the multiplicative order of ``generator`` modulo ``modulus``.

    Frequency estimation is repeated, each non-zero estimate contributing a
    divisor of the order, until generator^period = 1 (mod modulus).

    Raises:
        ContractViolationError: If generator and modulus are not co-prime.
        AttemptsExhaustedError: If ``max_rounds`` is set and reached.
    """
    if gcd(generator, modulus) != 1:
        raise ContractViolationError(f"generator {generator} and modulus {modulus} must be co-prime")

    bitsize = modulus.bit_length()
    bits_precision = bits_precision_for(bitsize)
    period = 1
    rounds = 0

    while True:
        rounds += 1
        frequency_estimate = estimate_frequency(ctx, generator, modulus, bitsize)
        if frequency_estimate != 0:
            period = period_from_frequency(modulus, frequency_estimate, bits_precision, period)
        else:
            logger.info("The estimated frequency was 0, trying again.")

        if pow(generator, period, modulus) == 1:
            return period

        logger.info("The estimated period %d for %d did not verify, trying again.", period, generator)
        if max_rounds is not None and rounds >= max_rounds:
            raise AttemptsExhaustedError(
                f"Period of {generator} mod {modulus} not found after {rounds} rounds", rounds
            )
