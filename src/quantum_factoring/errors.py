"""Exceptions raised by the factoring toolkit."""


class ContractViolationError(ValueError):
    """An operation was called outside its contract (programmer error)."""


class QubitReleaseError(RuntimeError):
    """A borrowed qubit was released while not in the all-zero state."""


class AttemptsExhaustedError(RuntimeError):
    """A retry loop reached its configured ``max_attempts`` ceiling."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts
