"""Order-finding oracle |k> -> |g^p * k mod N>."""

from __future__ import annotations

import math

from ..arithmetic import modular_multiply_by_constant
from ..circuit import Operation
from ..errors import ContractViolationError


class ApplyOrderFindingOracle(Operation):
    """Multiply the target register by generator^power modulo modulus.

    Its eigenvalues carry s/r for the order r of the generator, which is what
    phase estimation reads out. The adjoint multiplies by the inverse power.
    """

    def body(self, ctx, generator, modulus, power, target):
        if math.gcd(generator, modulus) != 1:
            raise ContractViolationError(f"generator {generator} and modulus {modulus} must be co-prime")
        modular_multiply_by_constant(ctx, modulus, pow(generator, power, modulus), target)


apply_order_finding_oracle = ApplyOrderFindingOracle()
