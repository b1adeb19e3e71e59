"""Low-level reversible bit gadgets: AND, OR and a cheap controlled CNOT."""

from __future__ import annotations

from typing import Sequence

from ..circuit import Context, Operation
from ..errors import ContractViolationError


def apply_xor_in_place(ctx: Context, value: int, register: Sequence[int]) -> None:
    """XOR the classical ``value`` into ``register`` (little endian)."""
    if value < 0 or value >= 1 << len(register):
        raise ContractViolationError(f"{value} does not fit into {len(register)} qubits")
    for i, qubit in enumerate(register):
        if (value >> i) & 1:
            ctx.x(qubit)


class ApplyAnd(Operation):
    """target ^= control1 AND control2; used with target in |0>."""

    self_adjoint = True

    def body(self, ctx, control1, control2, target):
        ctx.ccx(control1, control2, target)


class ApplyOrAssuming0Target(Operation):
    """target ^= control1 OR control2, through De Morgan around ApplyAnd."""

    self_adjoint = True

    def body(self, ctx, control1, control2, target):
        def negate_inputs(inner):
            inner.x(control1)
            inner.x(control2)

        def nand_then_flip(inner):
            apply_and(inner, control1, control2, target)
            inner.x(target)

        ctx.within(negate_inputs, nand_then_flip)


class ApplyLowTCNOT(Operation):
    """CNOT(a, b) whose controlled form avoids a doubly-controlled NOT.

    Under one extra control ``c`` the AND of ``c`` and ``a`` is computed into
    a borrowed qubit, which then drives a plain CNOT. Callers never control
    this gadget with more than one qubit.
    """

    self_adjoint = True

    def body(self, ctx, a, b):
        ctx.cx(a, b)

    def controlled_body(self, ctx, controls, a, b):
        if len(controls) > 1:
            raise ContractViolationError(
                f"ApplyLowTCNOT allows at most one control qubit, got {len(controls)}"
            )
        if not controls:
            ctx.cx(a, b)
            return

        with ctx.borrow(1) as (helper,):
            ctx.within(
                lambda inner: apply_and(inner, controls[0], a, helper),
                lambda inner: inner.cx(helper, b),
            )


apply_and = ApplyAnd()
apply_or_assuming_0_target = ApplyOrAssuming0Target()
apply_low_t_cnot = ApplyLowTCNOT()
