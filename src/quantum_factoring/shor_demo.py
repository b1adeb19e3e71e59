"""Shor's algorithm experiment CLI.

Factor numbers with the quantum (simulated) or classical period finder, and
report circuit resources recorded on the Qiskit backend.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import ShorResult
from .runner import DEFAULT_NUMBER, estimate_resources, run_shor

app = typer.Typer(help="Quantum Factoring Lab - Shor's Algorithm Experiment CLI")
console = Console()


class Method(str, Enum):
    QUANTUM = "quantum"
    CLASSICAL = "classical"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def run(
    number: int = typer.Option(DEFAULT_NUMBER, "--number", "-n", help="Number to factorize (N)"),
    method: Method = typer.Option(Method.QUANTUM, "--method", "-m", help="Execution method"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    max_attempts: Optional[int] = typer.Option(None, "--max-attempts", help="Give up after this many bases"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every attempt"),
):
    """Run Shor's algorithm for a single instance."""
    _configure_logging(verbose)
    console.print("[bold blue]Running Shor's Algorithm[/bold blue]")
    console.print(f"N = {number}, Method = {method.value}")

    try:
        result = run_shor(number=number, method=method.value, seed=seed, max_attempts=max_attempts)
    except (ValueError, RuntimeError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    _print_result(result)


@app.command()
def demo(
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every attempt"),
):
    """Factor N=15 and N=21 with both period finders."""
    _configure_logging(verbose)
    console.print("[bold green]=== Shor's Algorithm Demo ===[/bold green]\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("N")
    table.add_column("Method")
    table.add_column("Factors")
    table.add_column("Base (a)")
    table.add_column("Period (r)")
    table.add_column("Attempts")

    for number in (15, 21):
        for method in Method:
            res = run_shor(number, method=method.value, seed=seed)
            table.add_row(
                str(number),
                method.value,
                str(res.factors),
                str(res.base),
                str(res.period),
                str(res.attempts),
            )

    console.print(table)


@app.command()
def resources(
    number: int = typer.Option(DEFAULT_NUMBER, "--number", "-n", help="Modulus (N)"),
    base: int = typer.Option(7, "--base", "-a", help="Generator co-prime to N"),
):
    """Report the circuit cost of one frequency-estimation round."""
    try:
        metrics = estimate_resources(base, number)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"Frequency estimation, a={base}, N={number}", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Value")
    for key in ("num_qubits", "measurements", "circuit_depth", "total_gates", "two_qubit_gates"):
        table.add_row(key, str(metrics[key]))
    for gate, count in sorted(metrics["gate_counts"].items()):
        table.add_row(f"  {gate}", str(count))
    console.print(table)


def _print_result(result: ShorResult):
    """Print the result in a nice format."""
    if result.success:
        console.print(f"[bold green]Success![/bold green] Factors: {result.factors}")
        console.print(f"Base (a): {result.base}, Period (r): {result.period}")
        console.print(f"Attempts: {result.attempts} ({result.method})")
    else:
        console.print(f"[bold red]Failed.[/bold red] Method: {result.method}")


if __name__ == "__main__":
    app()
