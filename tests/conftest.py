"""Shared fixtures for the factoring test suite."""

import pytest

from quantum_factoring.arithmetic import apply_xor_in_place
from quantum_factoring.backends import SparseSimulatorBackend
from quantum_factoring.circuit import Context


@pytest.fixture
def simulator():
    """決定的な測定結果のためにシード付きのスパースシミュレータを返す."""
    return SparseSimulatorBackend(seed=1234)


@pytest.fixture
def load_register():
    """整数値を書き込んだレジスタを確保するヘルパー."""

    def _load(backend, width, value):
        register = backend.allocate(width)
        apply_xor_in_place(Context(backend), value, register)
        return register

    return _load
