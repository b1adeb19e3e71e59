"""Core abstractions for Shor's algorithm implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

# Attempt outcomes reported by the retry loop
LUCKY_GCD = "lucky_gcd"
ODD_PERIOD = "odd_period"
TRIVIAL_ROOT = "trivial_root"
TRIVIAL_FACTOR = "trivial_factor"
SUCCESS = "success"


@dataclass
class AttemptRecord:
    """One pass through the factoring retry loop."""
    attempt: int
    base: int
    outcome: str
    period: int | None = None


@dataclass
class ShorResult:
    """Result of Shor's algorithm execution."""
    number: int
    factors: tuple[int, int] | None
    success: bool
    method: str
    base: int | None = None
    period: int | None = None
    attempts: int = 0
    history: list[AttemptRecord] = field(default_factory=list)
    backend_name: str | None = None
    backend_info: dict[str, Any] | None = None


class ShorAlgorithm(ABC):
    """Abstract base class for Shor's algorithm implementations."""

    @abstractmethod
    def run(self, number: int, **kwargs: Any) -> ShorResult:
        """Run the algorithm to factorize the given number.

        Args:
            number: The integer to factorize.
            **kwargs: Additional implementation-specific arguments.

        Returns:
            ShorResult containing the factorization results.
        """
        pass
