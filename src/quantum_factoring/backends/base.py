"""Base class for quantum backends."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

GATE_NAMES = frozenset({"x", "h", "p", "swap"})


class QuantumBackend(ABC):
    """Abstract base class for quantum backends.

    A backend is the execution substrate the factoring circuits are issued
    against, one primitive gate at a time. Qubits are plain integer ids.
    """

    @abstractmethod
    def allocate(self, n: int) -> list[int]:
        """Allocate ``n`` qubits in the |0> state.

        Parameters
        ----------
        n : int
            Number of qubits

        Returns
        -------
        list[int]
            Qubit ids, least significant first when used as a register
        """
        pass

    @abstractmethod
    def release(self, qubits: Sequence[int]) -> None:
        """Return qubits to the backend. They must be back in |0>."""
        pass

    @abstractmethod
    def apply_gate(
        self,
        name: str,
        targets: Sequence[int],
        controls: Sequence[int] = (),
        param: Optional[float] = None,
    ) -> None:
        """Apply a primitive gate.

        Parameters
        ----------
        name : str
            One of "x", "h", "p" (phase rotation of |1> by ``param``), "swap"
        targets : Sequence[int]
            Target qubits (two for "swap", one otherwise)
        controls : Sequence[int]
            Control qubits; the gate acts only where all of them are |1>
        param : float, optional
            Rotation angle for "p"
        """
        pass

    @abstractmethod
    def measure(self, qubit: int) -> int:
        """Measure a qubit in the computational basis and reset it to |0>."""
        pass

    @abstractmethod
    def name(self) -> str:
        """Return the backend name."""
        pass

    @property
    @abstractmethod
    def is_simulator(self) -> bool:
        """Return True if this is a simulator backend."""
        pass

    def get_info(self) -> dict[str, Any]:
        """Return backend information."""
        return {
            "name": self.name(),
            "is_simulator": self.is_simulator,
        }
