"""Qiskit circuit backend: records gates into a QuantumCircuit."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from qiskit import ClassicalRegister, QuantumCircuit, QuantumRegister, transpile
from qiskit.circuit.library import HGate, PhaseGate, SwapGate, XGate
from qiskit_aer import AerSimulator

from ..errors import ContractViolationError
from .base import GATE_NAMES, QuantumBackend

TWO_QUBIT_GATES = {
    "cx", "cy", "cz", "cp", "cu", "cu1", "cu3",
    "ecr", "iswap", "swap", "cswap",
    "rxx", "ryy", "rzz", "xx_plus_yy", "xx_minus_yy",
}


def collect_circuit_metrics(qc: QuantumCircuit) -> tuple[int, int, int, dict]:
    """Collect circuit metrics like depth and gate counts."""
    gate_counts = dict(qc.count_ops())
    total_gates = int(sum(gate_counts.values()))
    two_qubit_gates = int(sum(count for gate, count in gate_counts.items() if gate in TWO_QUBIT_GATES))
    depth = qc.depth()
    return depth, total_gates, two_qubit_gates, gate_counts


class QiskitCircuitBackend(QuantumBackend):
    """Backend that builds a Qiskit circuit instead of simulating.

    Released qubits are reused, so the circuit width equals the peak number
    of live qubits. Measurements are recorded as mid-circuit measure + reset;
    since nothing is executed while recording, ``measure`` returns a fixed
    placeholder outcome. This is enough for resource estimation, and
    measurement-free reversible circuits can still be executed afterwards with
    :meth:`sample`.
    """

    def __init__(self, measurement_outcome: int = 0):
        """Initialize the recorder.

        Parameters
        ----------
        measurement_outcome : int
            Outcome reported by every ``measure`` call (0 or 1)
        """
        if measurement_outcome not in (0, 1):
            raise ValueError("measurement_outcome must be 0 or 1")
        self._circuit = QuantumCircuit()
        self._qubits: list = []
        self._free: list[int] = []
        self._live: set[int] = set()
        self._measurement_outcome = measurement_outcome
        self._measurements = 0

    @property
    def circuit(self) -> QuantumCircuit:
        return self._circuit

    def allocate(self, n: int) -> list[int]:
        reused = [self._free.pop() for _ in range(min(n, len(self._free)))]
        missing = n - len(reused)
        if missing:
            register = QuantumRegister(missing, f"q{len(self._qubits)}")
            self._circuit.add_register(register)
            start = len(self._qubits)
            self._qubits.extend(register)
            reused.extend(range(start, start + missing))
        self._live.update(reused)
        return reused

    def release(self, qubits: Sequence[int]) -> None:
        # Nothing is simulated here, so the |0> condition cannot be checked.
        for qubit in qubits:
            self._live.discard(qubit)
            self._free.append(qubit)

    def apply_gate(
        self,
        name: str,
        targets: Sequence[int],
        controls: Sequence[int] = (),
        param: Optional[float] = None,
    ) -> None:
        if name not in GATE_NAMES:
            raise ContractViolationError(f"Unknown gate '{name}'")
        if name == "x":
            gate = XGate()
        elif name == "h":
            gate = HGate()
        elif name == "swap":
            gate = SwapGate()
        else:
            if param is None:
                raise ContractViolationError("Phase rotation needs an angle")
            gate = PhaseGate(param)

        if controls:
            gate = gate.control(len(controls))
        self._circuit.append(gate, [self._qubits[q] for q in (*controls, *targets)])

    def measure(self, qubit: int) -> int:
        clbits = ClassicalRegister(1, f"m{self._measurements}")
        self._circuit.add_register(clbits)
        self._circuit.measure(self._qubits[qubit], clbits[0])
        self._circuit.reset(self._qubits[qubit])
        self._measurements += 1
        return self._measurement_outcome

    def metrics(self) -> dict[str, Any]:
        """Depth and gate counts of the recorded circuit.

        The circuit is transpiled for AerSimulator at optimization level 0, so
        the counts reflect the gates as issued.
        """
        qc_transpiled = transpile(self._circuit, AerSimulator(), optimization_level=0)
        depth, total_gates, two_qubit_gates, gate_counts = collect_circuit_metrics(qc_transpiled)
        return {
            "num_qubits": self._circuit.num_qubits,
            "measurements": self._measurements,
            "circuit_depth": depth,
            "total_gates": total_gates,
            "two_qubit_gates": two_qubit_gates,
            "gate_counts": gate_counts,
        }

    def sample(self, registers: Sequence[Sequence[int]], shots: int = 1) -> list[tuple[int, ...]]:
        """Measure ``registers`` at the end of the circuit and run it on Aer.

        Returns
        -------
        list[tuple[int, ...]]
            One tuple of register values (little endian) per shot
        """
        circuit = self._circuit.copy()
        flat = [q for register in registers for q in register]
        readout = ClassicalRegister(len(flat), "readout")
        circuit.add_register(readout)
        circuit.measure([self._qubits[q] for q in flat], readout)

        simulator = AerSimulator()
        result = simulator.run(transpile(circuit, simulator), shots=shots, memory=True).result()

        samples = []
        for memory in result.get_memory():
            # the register added last is printed first
            value = int(memory.split()[0], 2)
            values = []
            for register in registers:
                values.append(value & ((1 << len(register)) - 1))
                value >>= len(register)
            samples.append(tuple(values))
        return samples

    def name(self) -> str:
        return "qiskit_circuit"

    @property
    def is_simulator(self) -> bool:
        return True

    def get_info(self) -> dict[str, Any]:
        info = super().get_info()
        info.update({"num_qubits": self._circuit.num_qubits, "size": self._circuit.size()})
        return info
