"""Reversible comparison of a register against a classical constant."""

from __future__ import annotations

from ..circuit import Operation
from ..errors import ContractViolationError
from ..utils import trailing_zeros
from .gadgets import apply_and, apply_low_t_cnot, apply_or_assuming_0_target


class CompareGreaterThanOrEqualConstant(Operation):
    """Toggle ``target`` iff the integer in ``x`` is >= c.

    The general case walks the bits of c from the bottom up, keeping
    ``x[0..i] >= c[0..i]`` in a borrowed carry qubit: a 1 bit in c needs
    x_i AND the lower result, a 0 bit is satisfied by x_i OR the lower result.
    """

    def body(self, ctx, c, x, target):
        bit_width = len(x)
        if c < 0:
            raise ContractViolationError(f"Constant must not be negative, got {c}")

        if c == 0:
            ctx.x(target)
        elif c >= 1 << bit_width:
            return
        elif c == 1 << (bit_width - 1):
            apply_low_t_cnot(ctx, x[-1], target)
        else:
            # normalize constant
            shift = trailing_zeros(c)
            c_normalized = c >> shift
            x_normalized = list(x[shift:])
            width = len(x_normalized)
            gates = [(c_normalized >> i) & 1 for i in range(1, width)]

            with ctx.borrow(width - 1) as carries:
                lhs = [x_normalized[0]] + carries[:-1]
                rhs = x_normalized[1:]

                def ladder(inner):
                    for bit, a, b, carry in zip(gates, lhs, rhs, carries):
                        gadget = apply_and if bit else apply_or_assuming_0_target
                        gadget(inner, a, b, carry)

                ctx.within(ladder, lambda inner: apply_low_t_cnot(inner, carries[-1], target))


compare_greater_than_or_equal_constant = CompareGreaterThanOrEqualConstant()
