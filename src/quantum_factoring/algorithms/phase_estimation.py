"""Semiclassical phase estimation around the order-finding oracle."""

from __future__ import annotations

import logging
import math

from ..arithmetic import apply_xor_in_place
from ..circuit import Context
from .oracle import apply_order_finding_oracle

logger = logging.getLogger(__name__)


def bits_precision_for(bitsize: int) -> int:
    """Number of frequency bits estimated for a modulus of ``bitsize`` bits."""
    return 2 * bitsize + 1


def estimate_frequency(ctx: Context, generator: int, modulus: int, bitsize: int) -> int:
    """Estimate k such that k / 2^(2*bitsize+1) approximates s/r.

    A single phase qubit is reused for every bit: each round applies the
    oracle raised to 2^idx under its control, removes the phase contributed
    by the bits already measured, and measures the next bit, least
    significant first.

    Args:
        ctx: Context on the backend to run against (uncontrolled).
        generator: Base whose order modulo ``modulus`` is sought.
        modulus: The modulus N.
        bitsize: Width of the eigenstate register.

    Returns:
        The frequency estimate in [0, 2^(2*bitsize+1)). Zero carries no
        information about the order and should be retried by the caller.
    """
    frequency_estimate = 0
    bits_precision = bits_precision_for(bitsize)
    logger.debug("Estimating frequency of %d mod %d with %d bits of precision", generator, modulus, bits_precision)

    with ctx.borrow(bitsize) as eigenstate_register:
        apply_xor_in_place(ctx, 1, eigenstate_register)

        with ctx.borrow(1) as (c,):
            for idx in range(bits_precision - 1, -1, -1):
                ctx.h(c)
                apply_order_finding_oracle.controlled(ctx, [c], generator, modulus, 1 << idx, eigenstate_register)
                known_bits = bits_precision - 1 - idx
                if frequency_estimate:
                    ctx.phase(-math.pi * frequency_estimate / 2 ** known_bits, c)
                ctx.h(c)
                if ctx.measure(c) == 1:
                    frequency_estimate += 1 << known_bits

        ctx.reset(eigenstate_register)

    logger.debug("Estimated frequency=%d", frequency_estimate)
    return frequency_estimate
