"""In-place addition of a classical constant into a qubit register."""

from __future__ import annotations

from ..circuit import Operation
from ..errors import ContractViolationError
from ..utils import trailing_zeros
from .gadgets import apply_and, apply_xor_in_place


class RippleCarryIncrementer(Operation):
    """ys <- ys + xs (mod 2^n) for two registers of equal width.

    Gidney-style ripple carry: carries are computed into borrowed qubits with
    ApplyAnd and uncomputed on the way back down, writing the sum bits as
    they are released.
    """

    def body(self, ctx, xs, ys):
        n = len(xs)
        if len(ys) != n:
            raise ContractViolationError(f"Register widths differ: {n} and {len(ys)}")
        if n == 0:
            return
        if n == 1:
            ctx.cx(xs[0], ys[0])
            return

        with ctx.borrow(n - 1) as carries:
            apply_and(ctx, xs[0], ys[0], carries[0])
            for i in range(1, n - 1):
                ctx.cx(carries[i - 1], xs[i])
                ctx.cx(carries[i - 1], ys[i])
                apply_and(ctx, xs[i], ys[i], carries[i])
                ctx.cx(carries[i - 1], carries[i])

            # no carry out of the top bit
            ctx.cx(carries[n - 2], ys[n - 1])
            ctx.cx(xs[n - 1], ys[n - 1])

            for i in range(n - 2, 0, -1):
                ctx.cx(carries[i - 1], carries[i])
                apply_and.adjoint(ctx, xs[i], ys[i], carries[i])
                ctx.cx(carries[i - 1], xs[i])
                ctx.cx(xs[i], ys[i])
            apply_and.adjoint(ctx, xs[0], ys[0], carries[0])
            ctx.cx(xs[0], ys[0])


class AddConstant(Operation):
    """y <- y + c (mod 2^n), in place.

    If c has j trailing zero bits the low j bits of y are untouched, so the
    addition runs on y[j:] against c >> j with j fewer borrowed qubits.
    """

    def body(self, ctx, c, y):
        n = len(y)
        if n == 0:
            raise ContractViolationError("Bit width must be at least 1")
        if c < 0:
            raise ContractViolationError(f"Constant must not be negative, got {c}")
        if c >= 1 << n:
            raise ContractViolationError(f"Constant must be smaller than {1 << n}, got {c}")
        if c == 0:
            return

        j = trailing_zeros(c)
        with ctx.borrow(n - j) as xs:
            ctx.within(
                lambda inner: apply_xor_in_place(inner, c >> j, xs),
                lambda inner: ripple_carry_incrementer(inner, xs, y[j:]),
            )


ripple_carry_incrementer = RippleCarryIncrementer()
add_constant = AddConstant()
