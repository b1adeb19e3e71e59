"""Modular addition and multiplication by classical constants."""

from __future__ import annotations

from ..circuit import Operation
from ..errors import ContractViolationError
from ..utils import mod_inverse
from .adder import add_constant
from .comparator import compare_greater_than_or_equal_constant


class ModularAddConstant(Operation):
    """y <- (y + c) mod modulus, for 0 <= c < modulus and y < modulus."""

    def body(self, ctx, modulus, c, y):
        self.controlled_body(ctx, (), modulus, c, y)

    def controlled_body(self, ctx, controls, modulus, c, y):
        # Custom strategy: the adders and the comparison below are the costly
        # parts, so they must never see more than one control qubit.
        if not 0 <= c < modulus:
            raise ContractViolationError(f"Constant {c} is outside [0, {modulus})")
        if modulus >= 1 << len(y):
            raise ContractViolationError(f"Modulus {modulus} does not fit into {len(y)} qubits")

        if len(controls) >= 2:
            with ctx.borrow(1) as (control,):
                ctx.within(
                    lambda inner: inner.x(control, controls),
                    lambda inner: self.controlled_body(inner, (control,), modulus, c, y),
                )
            return

        with ctx.borrow(1) as (carry,):
            extended = list(y) + [carry]
            add_constant.controlled(ctx, controls, c, extended)
            add_constant.controlled_adjoint(ctx, controls, modulus, extended)
            # carry is set iff the subtraction went below zero
            add_constant.controlled(ctx, [carry], modulus, y)
            compare_greater_than_or_equal_constant.controlled(ctx, controls, c, y, carry)


class ModularMultiplyByConstant(Operation):
    """y <- (c * y) mod modulus, for c invertible modulo modulus.

    Double-and-add c * 2^i into a scratch register controlled on the bits of
    y, swap the registers, then clear the scratch register by subtracting
    c^-1 * 2^i controlled on the bits of the product.
    """

    def body(self, ctx, modulus, c, y):
        inverse = mod_inverse(c, modulus)
        if inverse is None:
            raise ContractViolationError(f"{c} has no inverse modulo {modulus}")

        with ctx.borrow(len(y)) as qs:
            for idx, qubit in enumerate(y):
                shifted = (c << idx) % modulus
                modular_add_constant.controlled(ctx, [qubit], modulus, shifted, qs)

            for a, b in zip(y, qs):
                ctx.swap(a, b)

            for idx, qubit in enumerate(y):
                shifted = (inverse << idx) % modulus
                modular_add_constant.controlled(ctx, [qubit], modulus, (modulus - shifted) % modulus, qs)


modular_add_constant = ModularAddConstant()
modular_multiply_by_constant = ModularMultiplyByConstant()
