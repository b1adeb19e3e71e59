"""Execution backends for the factoring circuits."""

from .base import QuantumBackend
from .simulator import SparseSimulatorBackend
from .qiskit_circuit import QiskitCircuitBackend, collect_circuit_metrics

__all__ = ["QuantumBackend", "SparseSimulatorBackend", "QiskitCircuitBackend", "collect_circuit_metrics"]
