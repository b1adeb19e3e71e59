"""Reversible arithmetic on qubit registers against classical constants."""

from .gadgets import (
    apply_and,
    apply_low_t_cnot,
    apply_or_assuming_0_target,
    apply_xor_in_place,
)
from .adder import add_constant, ripple_carry_incrementer
from .comparator import compare_greater_than_or_equal_constant
from .modular import modular_add_constant, modular_multiply_by_constant

__all__ = [
    "apply_and",
    "apply_low_t_cnot",
    "apply_or_assuming_0_target",
    "apply_xor_in_place",
    "add_constant",
    "ripple_carry_incrementer",
    "compare_greater_than_or_equal_constant",
    "modular_add_constant",
    "modular_multiply_by_constant",
]
