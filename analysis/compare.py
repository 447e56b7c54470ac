"""
analysis/compare.py

Exhaustively compare one-step-ahead rules over a Mastermind code space.
Every key of the space is played to the end by every rule; the result per
rule is the exact distribution of guesses needed, not a sample.

Metrics per rule:
- expected: mean number of guesses over all keys
- worst: largest number of guesses any key needs
- distribution: keys solved in exactly n guesses, for each n

Usage:
  python -m analysis.compare
  python -m analysis.compare --colors 6 --length 4 --rules worst-case expected-size --workers 4
  python -m analysis.compare --colors 4 --length 3 --allow-inconsistent --out small_results.csv
"""

from __future__ import annotations

import argparse
import time
from typing import Dict, List, Optional

import pandas as pd

from mastermind.aggregate import expected_guesses, format_distribution, worst_case_guesses
from mastermind.codes import CodeSpace, GameConfig
from mastermind.strategy import STRATEGY_NAMES, strategy_for
from mastermind.tree import summarize


def compare_rules(
    space: CodeSpace,
    rules: List[str],
    *,
    allow_inconsistent: bool = False,
    workers: Optional[int] = None,
    progress: bool = False,
) -> List[Dict[str, object]]:
    """
    Analyze each rule over the whole space.

    Returns
    -------
    list[dict]
        Sorted list (best first) of records with keys:
        'rule', 'expected', 'worst', 'distribution', 'seconds'
        plus one integer column per guess count ('1', '2', ...).
    """
    results: List[Dict[str, object]] = []
    for name in rules:
        strategy = strategy_for(name, space.config, allow_inconsistent=allow_inconsistent)
        t0 = time.perf_counter()
        dist = summarize(strategy, space.codes(), workers=workers)
        dt = time.perf_counter() - t0
        row: Dict[str, object] = {
            "rule": name,
            "expected": expected_guesses(dist),
            "worst": worst_case_guesses(dist),
            "distribution": format_distribution(dist),
            "seconds": round(dt, 3),
        }
        for d in sorted(dist):
            row[str(d)] = dist[d]
        results.append(row)
        if progress:
            print(f"{name}: expected={row['expected']:.4f} worst={row['worst']} in {dt:.2f}s", flush=True)

    results.sort(key=lambda r: (r["expected"], r["worst"]))
    return results


def _print_table(results: List[Dict[str, object]]) -> None:
    print(f"\n{'rank':>4}  {'rule':<16}  {'expected':>9}  {'worst':>5}  distribution")
    for idx, r in enumerate(results, start=1):
        print(f"{idx:>4}  {r['rule']:<16}  {r['expected']:>9.4f}  {r['worst']:>5}  {r['distribution']}")


def _write_csv(results: List[Dict[str, object]], path: str) -> None:
    if not results:
        return
    df = pd.DataFrame(results)
    depth_cols = sorted((c for c in df.columns if c.isdigit()), key=int)
    df[depth_cols] = df[depth_cols].fillna(0).astype(int)
    df = df[["rule", "expected", "worst", "seconds"] + depth_cols + ["distribution"]]
    df.to_csv(path, index=False)


def _load_space(args: argparse.Namespace) -> CodeSpace:
    if args.alphabet:
        config = GameConfig(args.alphabet, args.length)
    else:
        config = GameConfig.standard(args.colors, args.length)
    if args.csv:
        return CodeSpace.from_csv(args.csv, config, column=args.column)
    return CodeSpace.from_config(config)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Exact guess-count distributions of one-step-ahead Mastermind rules.")
    ap.add_argument("--colors", type=int, default=6, help="Number of colors (alphabet A, B, C, ...)")
    ap.add_argument("--alphabet", default=None, help="Explicit alphabet, overrides --colors (e.g. 123456)")
    ap.add_argument("--length", type=int, default=4, help="Number of pegs per code")
    ap.add_argument("--csv", default=None, help="Restrict the space to the codes listed in this CSV")
    ap.add_argument("--column", default="code", help="CSV column holding the codes")
    ap.add_argument(
        "--rules", nargs="*", choices=STRATEGY_NAMES, default=list(STRATEGY_NAMES),
        help="Rules to compare (default: all)",
    )
    ap.add_argument(
        "--allow-inconsistent", action="store_true",
        help="Let rules guess any code, not only codes consistent with the feedback so far",
    )
    ap.add_argument("--workers", type=int, default=None, help="Process-pool size for the subtrees below the first guess")
    ap.add_argument("--out", default="compare_results.csv", help="Output CSV filename")
    ap.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show progress during analysis (use --no-progress to disable)",
    )
    args = ap.parse_args(argv)

    space = _load_space(args)
    print(
        f"Analyzing {len(args.rules)} rules over {len(space)} codes "
        f"(alphabet={space.config.alphabet}, length={space.config.length}, "
        f"inconsistent guesses={'on' if args.allow_inconsistent else 'off'})...",
        flush=True,
    )
    t0 = time.perf_counter()
    results = compare_rules(
        space, args.rules, allow_inconsistent=args.allow_inconsistent, workers=args.workers, progress=args.progress
    )
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)

    _print_table(results)
    _write_csv(results, args.out)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
