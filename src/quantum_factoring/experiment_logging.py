"""Experiment utilities for collecting factoring run metrics into pandas DataFrames."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from .errors import AttemptsExhaustedError
from .runner import run_shor


@dataclass(frozen=True)
class FactoringSetting:
    """Conditions for a sweep (method / retry ceiling / seed)."""

    label: str
    method: str = "quantum"
    max_attempts: Optional[int] = None
    seed: Optional[int] = None


def sweep_factorizations(
    numbers: Sequence[int],
    repeats: int = 1,
    settings: Optional[Sequence[FactoringSetting]] = None,
) -> pd.DataFrame:
    """Factor each number repeatedly and collect metrics into a DataFrame.

    Parameters
    ----------
    numbers : Sequence[int]
        Composite numbers to factor.
    repeats : int
        How many times to repeat each (setting, number) pair.
    settings : Sequence[FactoringSetting]
        Scenarios to compare. Defaults to [quantum].

    Runs that hit ``max_attempts`` are recorded as failures rather than
    aborting the sweep.
    """

    if settings is None:
        settings = (FactoringSetting(label="quantum"),)

    records: list[dict] = []

    for setting in settings:
        for number in numbers:
            for repeat in range(repeats):
                seed = None if setting.seed is None else setting.seed + repeat
                try:
                    result = run_shor(
                        number=number,
                        method=setting.method,
                        seed=seed,
                        max_attempts=setting.max_attempts,
                    )
                except AttemptsExhaustedError as e:
                    records.append(
                        {
                            "label": setting.label,
                            "number": number,
                            "repeat": repeat,
                            "success": False,
                            "factors": None,
                            "base": None,
                            "period": None,
                            "attempts": e.attempts,
                            "method": f"{setting.method}_exhausted",
                        }
                    )
                    continue

                outcomes = Counter(record.outcome for record in result.history)
                records.append(
                    {
                        "label": setting.label,
                        "number": number,
                        "repeat": repeat,
                        "success": result.success,
                        "factors": result.factors,
                        "base": result.base,
                        "period": result.period,
                        "attempts": result.attempts,
                        "method": result.method,
                        **{f"n_{outcome}": count for outcome, count in outcomes.items()},
                    }
                )

    return pd.DataFrame.from_records(records)


def summarize_attempts(df: pd.DataFrame) -> pd.DataFrame:
    """Aggregate success rate and mean attempts per label/number pair."""

    if df.empty:
        return df

    summary = df.groupby(["label", "number"], as_index=False).agg(
        success_rate=("success", "mean"),
        mean_attempts=("attempts", "mean"),
        runs=("success", "size"),
    )
    return summary
