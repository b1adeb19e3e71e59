"""Reversible operation framework.

Gadgets are written once as a ``body`` that issues primitive gates through a
:class:`Context`. The framework derives the other three forms from it:

- controlled: the context carries extra control qubits that every primitive
  gate (and every nested operation) picks up, unless the operation supplies
  its own ``controlled_body``;
- adjoint: the body is recorded on a :class:`Tape` and replayed backwards
  with every gate inverted;
- controlled adjoint: both of the above.

``Context.within(setup, body)`` runs ``setup``, then ``body`` under the
current controls, then the inverse of ``setup``. Only ``body`` is controlled.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional, Sequence

from .errors import ContractViolationError

if TYPE_CHECKING:
    from .backends.base import QuantumBackend


# Virtual qubit ids are negative so they never collide with backend ids.
_virtual_ids = itertools.count(-1, -1)


@dataclass(frozen=True)
class Instruction:
    """One recorded step: a primitive gate or an allocate/release marker."""

    name: str
    targets: tuple[int, ...]
    controls: tuple[int, ...] = ()
    param: float | None = None

    def inverse(self) -> Instruction:
        if self.name == "allocate":
            return replace(self, name="release")
        if self.name == "release":
            return replace(self, name="allocate")
        if self.name == "p":
            return replace(self, param=-self.param)
        # x, h and swap are their own inverses
        return self


class Tape:
    """Sink that records instructions instead of executing them.

    A tape exposes the allocation and gate part of the backend interface, so
    a :class:`Context` can be pointed at it transparently.
    """

    def __init__(self):
        self.instructions: list[Instruction] = []

    def __len__(self) -> int:
        return len(self.instructions)

    def allocate(self, n: int) -> list[int]:
        qubits = [next(_virtual_ids) for _ in range(n)]
        self.instructions.append(Instruction("allocate", tuple(qubits)))
        return qubits

    def release(self, qubits: Sequence[int]) -> None:
        self.instructions.append(Instruction("release", tuple(qubits)))

    def apply_gate(
        self,
        name: str,
        targets: Sequence[int],
        controls: Sequence[int] = (),
        param: Optional[float] = None,
    ) -> None:
        self.instructions.append(Instruction(name, tuple(targets), tuple(controls), param))

    def measure(self, qubit: int) -> int:
        raise ContractViolationError("Measurement is not allowed inside a reversible operation")

    def replay(self, sink: Any, adjoint: bool = False) -> None:
        """Issue the recorded instructions on ``sink``.

        Qubits allocated on this tape are mapped onto fresh allocations of the
        sink; all other qubit ids pass through unchanged.
        """
        mapping: dict[int, int] = {}

        def resolve(qubits: tuple[int, ...]) -> tuple[int, ...]:
            return tuple(mapping.get(q, q) for q in qubits)

        steps = reversed(self.instructions) if adjoint else iter(self.instructions)
        for step in steps:
            if adjoint:
                step = step.inverse()
            if step.name == "allocate":
                mapping.update(zip(step.targets, sink.allocate(len(step.targets))))
            elif step.name == "release":
                sink.release(list(resolve(step.targets)))
            else:
                sink.apply_gate(step.name, resolve(step.targets), resolve(step.controls), step.param)


class Context:
    """Issues gates on a sink (backend or tape) under a list of controls."""

    def __init__(self, sink: QuantumBackend | Tape, controls: Sequence[int] = ()):
        self.sink = sink
        self.controls = tuple(controls)

    def __repr__(self) -> str:
        return f"Context(sink={type(self.sink).__name__}, controls={self.controls})"

    def with_controls(self, controls: Sequence[int]) -> Context:
        return Context(self.sink, self.controls + tuple(controls))

    def uncontrolled(self) -> Context:
        return Context(self.sink)

    def on(self, sink: QuantumBackend | Tape) -> Context:
        return Context(sink, self.controls)

    # -- primitive gates --------------------------------------------------

    def x(self, target: int, controls: Sequence[int] = ()) -> None:
        self.sink.apply_gate("x", (target,), self.controls + tuple(controls))

    def cx(self, control: int, target: int) -> None:
        self.x(target, (control,))

    def ccx(self, control1: int, control2: int, target: int) -> None:
        self.x(target, (control1, control2))

    def h(self, target: int) -> None:
        self.sink.apply_gate("h", (target,), self.controls)

    def phase(self, theta: float, target: int) -> None:
        """Rotate the phase of the |1> component of ``target`` by ``theta``."""
        self.sink.apply_gate("p", (target,), self.controls, theta)

    def swap(self, qubit1: int, qubit2: int) -> None:
        self.sink.apply_gate("swap", (qubit1, qubit2), self.controls)

    def measure(self, qubit: int) -> int:
        """Measure ``qubit`` in the computational basis and reset it to zero."""
        if self.controls:
            raise ContractViolationError("Measurement cannot be controlled")
        return self.sink.measure(qubit)

    def reset(self, qubits: Sequence[int]) -> None:
        for qubit in qubits:
            self.measure(qubit)

    # -- scoping ------------------------------------------------------------

    @contextmanager
    def borrow(self, n: int) -> Iterator[list[int]]:
        """Borrow ``n`` zeroed qubits; they must be zero again on exit."""
        qubits = self.sink.allocate(n)
        yield qubits
        self.sink.release(qubits)

    def record(self, operation: Callable[[Context], None]) -> Tape:
        tape = Tape()
        operation(self.on(tape))
        return tape

    def within(self, setup: Callable[[Context], None], body: Callable[[Context], None]) -> None:
        tape = self.uncontrolled().record(setup)
        tape.replay(self.sink)
        try:
            body(self)
        finally:
            tape.replay(self.sink, adjoint=True)


class Operation(ABC):
    """A reversible operation with adjoint and controlled forms.

    Subclasses implement ``body``. Operations with a cheaper controlled
    strategy than distributing the controls over every gate override
    ``controlled_body``. ``self_adjoint`` operations skip the tape.
    """

    self_adjoint = False

    @abstractmethod
    def body(self, ctx: Context, *args: Any) -> None:
        """Issue the uncontrolled form of the operation on ``ctx``."""

    def controlled_body(self, ctx: Context, controls: tuple[int, ...], *args: Any) -> None:
        self.body(ctx.with_controls(controls), *args)

    def apply(self, ctx: Context, *args: Any) -> None:
        if ctx.controls:
            self.controlled_body(ctx.uncontrolled(), ctx.controls, *args)
        else:
            self.body(ctx, *args)

    __call__ = apply

    def adjoint(self, ctx: Context, *args: Any) -> None:
        if self.self_adjoint:
            self.apply(ctx, *args)
            return
        tape = ctx.record(lambda inner: self.apply(inner, *args))
        tape.replay(ctx.sink, adjoint=True)

    def controlled(self, ctx: Context, controls: Sequence[int], *args: Any) -> None:
        self.apply(ctx.with_controls(controls), *args)

    def controlled_adjoint(self, ctx: Context, controls: Sequence[int], *args: Any) -> None:
        self.adjoint(ctx.with_controls(controls), *args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
