#!/usr/bin/env python3
"""因数分解スイープ実験スクリプト

量子版（スパースシミュレータ）と古典版の周期発見で同じ N を繰り返し因数分解し、
試行回数と成功率を CSV / JSON に保存する。

使用方法:
    # 既定（N=15, 21 を各 5 回）
    python scripts/run_factoring_sweep.py

    # 対象と繰り返し回数を指定
    python scripts/run_factoring_sweep.py --numbers 15 21 33 --reps 10

    # 試行回数の上限つき
    python scripts/run_factoring_sweep.py --max-attempts 3 --seed 7
"""

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path

from quantum_factoring.experiment_logging import (
    FactoringSetting,
    summarize_attempts,
    sweep_factorizations,
)

RESULTS_DIR = Path(__file__).parent.parent / "results"


def main():
    parser = argparse.ArgumentParser(description="Shor factoring sweep")
    parser.add_argument("--numbers", type=int, nargs="+", default=[15, 21], help="Numbers to factor")
    parser.add_argument("--reps", type=int, default=5, help="Repetitions per number")
    parser.add_argument("--seed", type=int, default=None, help="Base seed (incremented per repetition)")
    parser.add_argument("--max-attempts", type=int, default=None, help="Retry ceiling per run")
    parser.add_argument("--skip-quantum", action="store_true", help="Only run the classical reference")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    settings = [
        FactoringSetting(label="classical", method="classical", max_attempts=args.max_attempts, seed=args.seed)
    ]
    if not args.skip_quantum:
        settings.append(
            FactoringSetting(label="quantum", method="quantum", max_attempts=args.max_attempts, seed=args.seed)
        )

    df = sweep_factorizations(args.numbers, repeats=args.reps, settings=settings)
    summary = summarize_attempts(df)
    print(summary.to_string(index=False))

    RESULTS_DIR.mkdir(exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    csv_path = RESULTS_DIR / f"factoring_sweep_{stamp}.csv"
    df.to_csv(csv_path, index=False)

    meta = {
        "timestamp": stamp,
        "numbers": args.numbers,
        "reps": args.reps,
        "seed": args.seed,
        "max_attempts": args.max_attempts,
        "summary": summary.to_dict(orient="records"),
    }
    with open(RESULTS_DIR / f"factoring_sweep_{stamp}.json", "w") as f:
        json.dump(meta, f, indent=2, default=str)

    print(f"\nSaved: {csv_path}")


if __name__ == "__main__":
    main()
