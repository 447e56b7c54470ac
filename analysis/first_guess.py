"""
analysis/first_guess.py

Score every opening guess against the full set of keys with each scoring rule.

Columns per guess:
- partitions: number of distinct feedbacks induced (branching factor)
- group_size: number of guesses with exactly the same feedback histogram
- one column per scoring rule (lower is better)

Guesses sharing a histogram are interchangeable, so only the smallest code of
each group is listed.

Usage:
  python -m analysis.first_guess
  python -m analysis.first_guess --colors 6 --length 4 --sort-by shannon-fano --top 10
"""

from __future__ import annotations

import argparse
import time
from typing import Dict, List, Optional

import pandas as pd

from mastermind.codes import CodeSpace, GameConfig
from mastermind.partition import partition_by
from mastermind.scorers import SCORERS
from mastermind.strategy import histogram_of


def evaluate_first_guesses(
    space: CodeSpace,
    guesses: Optional[List[str]] = None,
    *,
    sort_by: str = "worst-case",
    progress: bool = False,
) -> List[Dict[str, object]]:
    """
    Evaluate candidate opening guesses against every key of `space`.

    Parameters
    ----------
    space : CodeSpace
        The possible keys.
    guesses : list[str] | None
        Candidate guesses to score. If None, uses the codes of `space`.
    sort_by : str
        Rule name to rank by (ties broken by code).
    progress : bool
        If True, prints a tiny progress indicator every 100 groups.

    Returns
    -------
    list[dict]
        Sorted list (best first) of records with keys:
        'guess', 'partitions', 'group_size' and one key per rule in SCORERS.
    """
    if sort_by not in SCORERS:
        raise KeyError(f"unknown rule: {sort_by}")
    keys = space.codes()
    pool = guesses if guesses is not None else keys
    for g in pool:
        space.config.validate_code(g)

    scorers = {name: factory(space.config) for name, factory in SCORERS.items()}
    groups = partition_by(lambda g: histogram_of(g, keys), pool)

    results: List[Dict[str, object]] = []
    for i, (hist, members) in enumerate(groups.items()):
        histogram = dict(hist)
        row: Dict[str, object] = {
            "guess": min(members),
            "partitions": len(histogram),
            "group_size": len(members),
        }
        for name, scorer in scorers.items():
            row[name] = float(scorer(histogram, len(members)))
        results.append(row)
        if progress and (i + 1) % 100 == 0:
            print(f"Scored {i+1}/{len(groups)} guess groups...", flush=True)

    results.sort(key=lambda r: (r[sort_by], r["guess"]))
    return results


def _print_top(results: List[Dict[str, object]], k: int = 20) -> None:
    names = list(SCORERS)
    print(f"\nTop {k} opening guesses:")
    print(f"{'rank':>4}  {'guess':<8}  {'parts':>5}  {'group':>5}  " + "  ".join(f"{n:>14}" for n in names))
    for idx, r in enumerate(results[:k], start=1):
        scores = "  ".join(f"{r[n]:>14.3f}" for n in names)
        print(f"{idx:>4}  {r['guess']:<8}  {r['partitions']:>5}  {r['group_size']:>5}  {scores}")


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Rank Mastermind opening guesses by every one-step-ahead rule.")
    ap.add_argument("--colors", type=int, default=6, help="Number of colors (alphabet A, B, C, ...)")
    ap.add_argument("--alphabet", default=None, help="Explicit alphabet, overrides --colors")
    ap.add_argument("--length", type=int, default=4, help="Number of pegs per code")
    ap.add_argument("--sort-by", choices=list(SCORERS), default="worst-case", help="Rule to rank by")
    ap.add_argument("--out", default="first_guess_results.csv", help="Output CSV filename")
    ap.add_argument("--top", type=int, default=15, help="How many top rows to print")
    ap.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show progress during evaluation (use --no-progress to disable)",
    )
    args = ap.parse_args(argv)

    config = GameConfig(args.alphabet, args.length) if args.alphabet else GameConfig.standard(args.colors, args.length)
    space = CodeSpace.from_config(config)

    print(f"Scoring {len(space)} guesses against {len(space)} keys...", flush=True)
    t0 = time.perf_counter()
    results = evaluate_first_guesses(space, sort_by=args.sort_by, progress=args.progress)
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)

    _print_top(results, k=args.top)
    pd.DataFrame(results).to_csv(args.out, index=False)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
