"""Sparse state-vector simulator backend."""

from __future__ import annotations

import heapq
import math
from typing import Any, Optional, Sequence

import numpy as np

from ..errors import ContractViolationError, QubitReleaseError
from .base import GATE_NAMES, QuantumBackend

SQRT1_2 = 1 / math.sqrt(2)


def _mask(qubits: Sequence[int]) -> int:
    mask = 0
    for q in qubits:
        mask |= 1 << q
    return mask


class SparseSimulatorBackend(QuantumBackend):
    """Exact simulator storing only the non-zero amplitudes.

    The state is a dict mapping basis index (bit ``q`` = qubit ``q``) to a
    complex amplitude. Reversible arithmetic permutes basis states, so the
    number of entries stays bounded by the number of branches created by
    Hadamard gates, which keeps order finding cheap to simulate.
    """

    def __init__(self, seed: Optional[int] = None, tolerance: float = 1e-12):
        """Initialize the simulator.

        Parameters
        ----------
        seed : int, optional
            Seed for the measurement random number generator
        tolerance : float
            Amplitudes with smaller magnitude are dropped
        """
        self._rng = np.random.default_rng(seed)
        self._tolerance = tolerance
        self._state: dict[int, complex] = {0: 1 + 0j}
        self._live: set[int] = set()
        self._free: list[int] = []
        self._next_id = 0
        self.gate_count = 0
        self.max_qubits = 0

    def allocate(self, n: int) -> list[int]:
        qubits = []
        for _ in range(n):
            if self._free:
                qubit = heapq.heappop(self._free)
            else:
                qubit = self._next_id
                self._next_id += 1
            self._live.add(qubit)
            qubits.append(qubit)
        self.max_qubits = max(self.max_qubits, len(self._live))
        return qubits

    def release(self, qubits: Sequence[int]) -> None:
        self._check_live(qubits)
        mask = _mask(qubits)
        if any(basis & mask for basis in self._state):
            raise QubitReleaseError(f"Qubits {list(qubits)} released while not in |0>")
        for qubit in qubits:
            self._live.remove(qubit)
            heapq.heappush(self._free, qubit)

    def apply_gate(
        self,
        name: str,
        targets: Sequence[int],
        controls: Sequence[int] = (),
        param: Optional[float] = None,
    ) -> None:
        if name not in GATE_NAMES:
            raise ContractViolationError(f"Unknown gate '{name}'")
        self._check_live(targets)
        self._check_live(controls)
        if set(targets) & set(controls) or len(set(controls)) != len(controls):
            raise ContractViolationError(f"Gate {name} has overlapping qubits: {targets}, {controls}")

        cm = _mask(controls)
        self.gate_count += 1

        if name == "x":
            bit = 1 << targets[0]
            self._state = {
                (basis ^ bit if basis & cm == cm else basis): amp
                for basis, amp in self._state.items()
            }
        elif name == "swap":
            a, b = targets
            self._state = {
                (self._swap_bits(basis, a, b) if basis & cm == cm else basis): amp
                for basis, amp in self._state.items()
            }
        elif name == "p":
            if param is None:
                raise ContractViolationError("Phase rotation needs an angle")
            factor = complex(np.exp(1j * param))
            mask = cm | (1 << targets[0])
            self._state = {
                basis: (amp * factor if basis & mask == mask else amp)
                for basis, amp in self._state.items()
            }
        else:
            self._apply_hadamard(targets[0], cm)

    def measure(self, qubit: int) -> int:
        self._check_live([qubit])
        bit = 1 << qubit
        p1 = sum(abs(amp) ** 2 for basis, amp in self._state.items() if basis & bit)
        if p1 < self._tolerance:
            outcome = 0
        elif p1 > 1 - self._tolerance:
            outcome = 1
        else:
            outcome = int(self._rng.random() < p1)

        kept = {
            basis: amp for basis, amp in self._state.items() if bool(basis & bit) == bool(outcome)
        }
        norm = math.sqrt(sum(abs(amp) ** 2 for amp in kept.values()))
        # collapse and reset to |0>
        self._state = {basis & ~bit: amp / norm for basis, amp in kept.items()}
        return outcome

    def basis_value(self, qubits: Sequence[int]) -> int:
        """Integer held by ``qubits`` (little endian) when it is definite.

        Raises
        ------
        ValueError
            If the register is entangled or in superposition
        """
        values = {self._read(basis, qubits) for basis in self._state}
        if len(values) != 1:
            raise ValueError(f"Register {list(qubits)} holds a superposition of {sorted(values)}")
        return values.pop()

    def probabilities(self, qubits: Sequence[int]) -> dict[int, float]:
        """Marginal distribution of the integer held by ``qubits``."""
        probs: dict[int, float] = {}
        for basis, amp in self._state.items():
            value = self._read(basis, qubits)
            probs[value] = probs.get(value, 0.0) + abs(amp) ** 2
        return probs

    @property
    def num_terms(self) -> int:
        return len(self._state)

    def name(self) -> str:
        return "sparse_simulator"

    @property
    def is_simulator(self) -> bool:
        return True

    def get_info(self) -> dict[str, Any]:
        info = super().get_info()
        info.update(
            {
                "live_qubits": len(self._live),
                "max_qubits": self.max_qubits,
                "gate_count": self.gate_count,
                "num_terms": self.num_terms,
            }
        )
        return info

    def _apply_hadamard(self, target: int, cm: int) -> None:
        bit = 1 << target
        state: dict[int, complex] = {}
        for basis, amp in self._state.items():
            if basis & cm != cm:
                state[basis] = state.get(basis, 0) + amp
                continue
            amp *= SQRT1_2
            zero, one = basis & ~bit, basis | bit
            state[zero] = state.get(zero, 0) + amp
            state[one] = state.get(one, 0) + (-amp if basis & bit else amp)
        self._state = {basis: amp for basis, amp in state.items() if abs(amp) > self._tolerance}

    def _check_live(self, qubits: Sequence[int]) -> None:
        for qubit in qubits:
            if qubit not in self._live:
                raise ContractViolationError(f"Qubit {qubit} is not allocated")

    @staticmethod
    def _swap_bits(basis: int, a: int, b: int) -> int:
        if ((basis >> a) ^ (basis >> b)) & 1:
            basis ^= (1 << a) | (1 << b)
        return basis

    @staticmethod
    def _read(basis: int, qubits: Sequence[int]) -> int:
        value = 0
        for i, qubit in enumerate(qubits):
            value |= ((basis >> qubit) & 1) << i
        return value
