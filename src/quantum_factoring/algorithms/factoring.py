"""The retry loop turning periods into factors."""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from ..core import (
    LUCKY_GCD,
    ODD_PERIOD,
    SUCCESS,
    TRIVIAL_FACTOR,
    TRIVIAL_ROOT,
    AttemptRecord,
    ShorResult,
)
from ..errors import AttemptsExhaustedError
from ..utils import gcd, is_prime

logger = logging.getLogger(__name__)

PeriodFinder = Callable[[int, int], int]


def validate_number(number: int) -> None:
    """Reject inputs that have no proper factorization.

    Even numbers are accepted (they are handled before the retry loop), so
    2 passes and factors as 2 x 1.
    """
    if number < 2:
        raise ValueError(f"Cannot factor {number}: the number must be at least 2")
    if number % 2 != 0 and is_prime(number):
        raise ValueError(f"Cannot factor {number}: the number is prime")


def maybe_factors_from_period(modulus: int, generator: int, period: int) -> tuple[str, tuple[int, int]]:
    """Classify a period and extract factors when it is useful.

    Returns:
        (outcome, factors) where factors is (1, 1) unless outcome is SUCCESS.
    """
    if period % 2 != 0:
        logger.info("Estimated period %d was odd, trying again.", period)
        return ODD_PERIOD, (1, 1)

    half_power = pow(generator, period // 2, modulus)
    if half_power == modulus - 1:
        logger.info("%d^(%d/2) is -1 mod %d, trying again.", generator, period, modulus)
        return TRIVIAL_ROOT, (1, 1)

    factor = max(gcd(half_power - 1, modulus), gcd(half_power + 1, modulus))
    if factor != 1 and factor != modulus:
        logger.info("Found factor=%d", factor)
        return SUCCESS, (factor, modulus // factor)

    logger.info("Found trivial factors.")
    return TRIVIAL_FACTOR, (1, 1)


def factor_semiprime_integer(
    number: int,
    find_period: PeriodFinder,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
    method: str = "quantum",
) -> ShorResult:
    """Shor's retry loop.

    Algorithm Steps:
    1. Even numbers factor as 2 x number/2 immediately
    2. Pick a random base g in [1, number - 1]
    3. If gcd(g, number) > 1 it is a factor (lucky guess)
    4. Find the period r of g with ``find_period``
    5. If r is even and g^(r/2) != -1, gcd(g^(r/2) +- 1, number) is a factor
    6. Otherwise repeat with a fresh base

    Args:
        number: Odd composite number (even numbers take the fast path).
        find_period: Callable (generator, modulus) -> period.
        rng: Source of random bases. Defaults to a fresh ``random.Random``.
        max_attempts: Optional ceiling on loop iterations; unbounded if None.
        method: Label recorded in the result.

    Returns:
        ShorResult with ``success=True`` and the factors.

    Raises:
        ValueError: If the number is below 2 or an odd prime.
        AttemptsExhaustedError: If ``max_attempts`` is reached.
    """
    validate_number(number)

    if number % 2 == 0:
        logger.info("An even number has been given; 2 is a factor.")
        return ShorResult(
            number=number,
            factors=(2, number // 2),
            success=True,
            method=f"{method}_trivial_even",
            base=2,
        )

    rng = rng or random.Random()
    history: list[AttemptRecord] = []
    attempt = 0

    while max_attempts is None or attempt < max_attempts:
        attempt += 1
        logger.info("*** Factorizing %d, attempt %d.", number, attempt)
        generator = rng.randint(1, number - 1)

        divisor = gcd(generator, number)
        if divisor != 1:
            logger.info("Guessed the divisor %d by accident. No quantum computation was done.", divisor)
            history.append(AttemptRecord(attempt, generator, LUCKY_GCD))
            return ShorResult(
                number=number,
                factors=(divisor, number // divisor),
                success=True,
                method=f"{method}_gcd",
                base=generator,
                attempts=attempt,
                history=history,
            )

        logger.info("Estimating period of %d.", generator)
        period = find_period(generator, number)
        outcome, factors = maybe_factors_from_period(number, generator, period)
        history.append(AttemptRecord(attempt, generator, outcome, period))

        if outcome == SUCCESS:
            return ShorResult(
                number=number,
                factors=factors,
                success=True,
                method=f"{method}_period_r={period}",
                base=generator,
                period=period,
                attempts=attempt,
                history=history,
            )
        logger.info("The estimated period did not yield a valid factor. Trying again.")

    raise AttemptsExhaustedError(f"Failed to factor {number} after {attempt} attempts", attempt)
