"""Tests for reversible arithmetic gadgets.

このファイルは古典定数に対する可逆算術回路をテストします。
すべてのテストはスパースシミュレータ上で計算基底状態を入力し、
結果のレジスタ値を読み出して古典的な計算結果と比較します。

1. ビットガジェット（AND / OR / LowTCNOT）
2. 定数加算（AddConstant）とその逆演算
3. 定数比較（CompareGreaterThanOrEqualConstant）
4. 剰余加算・剰余乗算
5. オラクル（ApplyOrderFindingOracle）
"""

import pytest

from quantum_factoring.algorithms import apply_order_finding_oracle
from quantum_factoring.arithmetic import (
    add_constant,
    apply_and,
    apply_low_t_cnot,
    apply_or_assuming_0_target,
    compare_greater_than_or_equal_constant,
    modular_add_constant,
    modular_multiply_by_constant,
    ripple_carry_incrementer,
)
from quantum_factoring.backends import SparseSimulatorBackend
from quantum_factoring.circuit import Context
from quantum_factoring.errors import ContractViolationError


class TestBitGadgets:
    """AND / OR / LowTCNOT の真理値表."""

    @pytest.mark.parametrize("a,b", [(0, 0), (0, 1), (1, 0), (1, 1)])
    def test_and(self, load_register, a, b):
        backend = SparseSimulatorBackend()
        (qa,) = load_register(backend, 1, a)
        (qb,) = load_register(backend, 1, b)
        (target,) = backend.allocate(1)
        apply_and(Context(backend), qa, qb, target)
        assert backend.basis_value([target]) == (a & b)

    @pytest.mark.parametrize("a,b", [(0, 0), (0, 1), (1, 0), (1, 1)])
    def test_or_restores_inputs(self, load_register, a, b):
        backend = SparseSimulatorBackend()
        (qa,) = load_register(backend, 1, a)
        (qb,) = load_register(backend, 1, b)
        (target,) = backend.allocate(1)
        apply_or_assuming_0_target(Context(backend), qa, qb, target)
        assert backend.basis_value([target]) == (a | b)
        assert backend.basis_value([qa, qb]) == a | (b << 1)

    @pytest.mark.parametrize("c,a", [(0, 0), (0, 1), (1, 0), (1, 1)])
    def test_low_t_cnot_with_one_control(self, load_register, c, a):
        backend = SparseSimulatorBackend()
        (qc,) = load_register(backend, 1, c)
        (qa,) = load_register(backend, 1, a)
        (qb,) = backend.allocate(1)
        apply_low_t_cnot.controlled(Context(backend), [qc], qa, qb)
        assert backend.basis_value([qb]) == (c & a)
        # the helper qubit was released clean
        assert backend.get_info()["live_qubits"] == 3

    def test_low_t_cnot_rejects_two_controls(self, simulator):
        c1, c2, a, b = simulator.allocate(4)
        with pytest.raises(ContractViolationError):
            apply_low_t_cnot.controlled(Context(simulator), [c1, c2], a, b)


class TestAddConstant:
    """定数加算 y ← y + c (mod 2^n) のテスト."""

    def test_ripple_carry_incrementer(self, load_register):
        for x in range(8):
            for y in range(8):
                backend = SparseSimulatorBackend()
                xs = load_register(backend, 3, x)
                ys = load_register(backend, 3, y)
                ripple_carry_incrementer(Context(backend), xs, ys)
                assert backend.basis_value(ys) == (x + y) % 8
                assert backend.basis_value(xs) == x

    def test_exhaustive_three_bits(self, load_register):
        for c in range(8):
            for y in range(8):
                backend = SparseSimulatorBackend()
                register = load_register(backend, 3, y)
                add_constant(Context(backend), c, register)
                assert backend.basis_value(register) == (y + c) % 8

    def test_adjoint_restores_register(self, load_register):
        """AddConstant の後に adjoint を適用すると y は元に戻る."""
        for c in (1, 4, 6, 11):
            backend = SparseSimulatorBackend()
            register = load_register(backend, 4, 9)
            ctx = Context(backend)
            add_constant(ctx, c, register)
            add_constant.adjoint(ctx, c, register)
            assert backend.basis_value(register) == 9

    def test_adjoint_subtracts(self, load_register):
        backend = SparseSimulatorBackend()
        register = load_register(backend, 4, 3)
        add_constant.adjoint(Context(backend), 5, register)
        assert backend.basis_value(register) == (3 - 5) % 16

    def test_zero_is_noop(self, load_register, simulator):
        register = load_register(simulator, 3, 5)
        gates = simulator.gate_count
        add_constant(Context(simulator), 0, register)
        assert simulator.gate_count == gates

    @pytest.mark.parametrize("control", [0, 1])
    def test_controlled(self, load_register, control):
        backend = SparseSimulatorBackend()
        (qc,) = load_register(backend, 1, control)
        register = load_register(backend, 4, 7)
        add_constant.controlled(Context(backend), [qc], 5, register)
        assert backend.basis_value(register) == (7 + 5 * control) % 16

    def test_superposition_stays_consistent(self, simulator):
        """重ね合わせ状態の各分岐に同じ加算が適用される."""
        register = simulator.allocate(3)
        ctx = Context(simulator)
        ctx.h(register[0])
        ctx.h(register[1])
        add_constant(ctx, 3, register)
        probs = simulator.probabilities(register)
        assert set(probs) == {3, 4, 5, 6}
        for p in probs.values():
            assert p == pytest.approx(0.25)

    @pytest.mark.parametrize("c", [-1, 8, 100])
    def test_out_of_range_constant(self, simulator, c):
        register = simulator.allocate(3)
        with pytest.raises(ContractViolationError):
            add_constant(Context(simulator), c, register)

    def test_empty_register(self, simulator):
        with pytest.raises(ContractViolationError):
            add_constant(Context(simulator), 0, [])


class TestComparator:
    """定数比較 target ^= [x >= c] のテスト.

    n=3 ビットで c ∈ [0, 8]（c = 2^n を含む）と全ての x を網羅します。
    c = 0, c = 2^(n-1), c >= 2^n はそれぞれ専用の分岐を通ります。
    """

    def test_exhaustive_three_bits(self, load_register):
        for c in range(9):
            for x in range(8):
                backend = SparseSimulatorBackend()
                register = load_register(backend, 3, x)
                (target,) = backend.allocate(1)
                compare_greater_than_or_equal_constant(Context(backend), c, register, target)
                assert backend.basis_value([target]) == int(x >= c), (c, x)
                assert backend.basis_value(register) == x

    def test_toggles_existing_target(self, load_register):
        backend = SparseSimulatorBackend()
        register = load_register(backend, 3, 6)
        (target,) = load_register(backend, 1, 1)
        compare_greater_than_or_equal_constant(Context(backend), 5, register, target)
        assert backend.basis_value([target]) == 0

    @pytest.mark.parametrize("control", [0, 1])
    def test_controlled(self, load_register, control):
        for c in (0, 3, 4, 6):
            backend = SparseSimulatorBackend()
            (qc,) = load_register(backend, 1, control)
            register = load_register(backend, 3, 5)
            (target,) = backend.allocate(1)
            compare_greater_than_or_equal_constant.controlled(Context(backend), [qc], c, register, target)
            assert backend.basis_value([target]) == int(control and 5 >= c)


class TestModularAdd:
    """剰余加算 y ← (y + c) mod N のテスト."""

    @pytest.mark.parametrize("modulus", [5, 7])
    def test_exhaustive(self, load_register, modulus):
        for c in range(modulus):
            for y in range(modulus):
                backend = SparseSimulatorBackend()
                register = load_register(backend, 3, y)
                modular_add_constant(Context(backend), modulus, c, register)
                assert backend.basis_value(register) == (y + c) % modulus, (c, y)

    @pytest.mark.parametrize("controls", [(0, 0), (0, 1), (1, 0), (1, 1)])
    def test_two_controls(self, load_register, controls):
        """2 つ以上の制御 qubit は 1 つの補助 qubit に AND 集約される."""
        backend = SparseSimulatorBackend()
        qubits = [load_register(backend, 1, bit)[0] for bit in controls]
        register = load_register(backend, 4, 9)
        modular_add_constant.controlled(Context(backend), qubits, 13, 7, register)
        expected = (9 + 7) % 13 if all(controls) else 9
        assert backend.basis_value(register) == expected
        assert backend.get_info()["live_qubits"] == 6

    def test_adjoint_subtracts(self, load_register):
        backend = SparseSimulatorBackend()
        register = load_register(backend, 3, 2)
        modular_add_constant.adjoint(Context(backend), 7, 4, register)
        assert backend.basis_value(register) == (2 - 4) % 7

    def test_constant_out_of_range(self, simulator):
        register = simulator.allocate(3)
        with pytest.raises(ContractViolationError):
            modular_add_constant(Context(simulator), 5, 5, register)

    def test_modulus_too_wide(self, simulator):
        register = simulator.allocate(3)
        with pytest.raises(ContractViolationError):
            modular_add_constant(Context(simulator), 8, 1, register)


class TestModularMultiply:
    """剰余乗算 y ← c·y mod N のテスト."""

    def test_multiply_by_seven_mod_fifteen(self, load_register):
        for y in range(1, 15):
            backend = SparseSimulatorBackend()
            register = load_register(backend, 4, y)
            modular_multiply_by_constant(Context(backend), 15, 7, register)
            assert backend.basis_value(register) == 7 * y % 15

    def test_multiply_then_inverse_restores(self, load_register):
        """c を掛けた後に c^-1 を掛けると元に戻る."""
        modulus, c = 21, 5
        inverse = pow(c, -1, modulus)
        for y in (1, 4, 13, 20):
            backend = SparseSimulatorBackend()
            register = load_register(backend, 5, y)
            ctx = Context(backend)
            modular_multiply_by_constant(ctx, modulus, c, register)
            assert backend.basis_value(register) == c * y % modulus
            modular_multiply_by_constant(ctx, modulus, inverse, register)
            assert backend.basis_value(register) == y

    def test_adjoint_multiplies_by_inverse(self, load_register):
        backend = SparseSimulatorBackend()
        register = load_register(backend, 4, 4)
        modular_multiply_by_constant.adjoint(Context(backend), 15, 7, register)
        assert backend.basis_value(register) == 4 * pow(7, -1, 15) % 15

    @pytest.mark.parametrize("control", [0, 1])
    def test_controlled(self, load_register, control):
        backend = SparseSimulatorBackend()
        (qc,) = load_register(backend, 1, control)
        register = load_register(backend, 4, 2)
        modular_multiply_by_constant.controlled(Context(backend), [qc], 15, 7, register)
        assert backend.basis_value(register) == (14 if control else 2)

    def test_non_invertible_constant(self, simulator):
        register = simulator.allocate(4)
        with pytest.raises(ContractViolationError):
            modular_multiply_by_constant(Context(simulator), 15, 3, register)


class TestOrderFindingOracle:
    """オラクル |k⟩ ↦ |g^p · k mod N⟩ のテスト."""

    @pytest.mark.parametrize("power", [1, 2, 3, 4, 8])
    def test_power(self, load_register, power):
        backend = SparseSimulatorBackend()
        register = load_register(backend, 4, 1)
        apply_order_finding_oracle(Context(backend), 7, 15, power, register)
        assert backend.basis_value(register) == pow(7, power, 15)

    def test_requires_coprime_generator(self, simulator):
        register = simulator.allocate(4)
        with pytest.raises(ContractViolationError):
            apply_order_finding_oracle(Context(simulator), 6, 15, 1, register)
