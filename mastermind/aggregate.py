"""
aggregate.py

Reducing a guess-count distribution (guess count -> number of keys) to
summary numbers and report-ready forms.
"""

from __future__ import annotations

from typing import Mapping

import numpy as np
import pandas as pd

from mastermind.errors import EmptyDomainError


def _check(distribution: Mapping[int, int]) -> None:
    if not distribution or sum(distribution.values()) <= 0:
        raise EmptyDomainError("guess distribution is empty")


def expected_guesses(distribution: Mapping[int, int]) -> float:
    """Mean number of guesses over all keys: sum(n * count(n)) / sum(count(n))."""
    _check(distribution)
    depths = np.fromiter(distribution.keys(), dtype=float)
    counts = np.fromiter(distribution.values(), dtype=float)
    return float(np.average(depths, weights=counts))


def worst_case_guesses(distribution: Mapping[int, int]) -> int:
    """Largest guess count reached by at least one key."""
    _check(distribution)
    return max(d for d, n in distribution.items() if n > 0)


def format_distribution(distribution: Mapping[int, int]) -> str:
    """Render as "{1:1, 2:4, 3:25}", guess counts ascending."""
    return "{" + ", ".join(f"{d}:{distribution[d]}" for d in sorted(distribution)) + "}"


def distribution_frame(distribution: Mapping[int, int]) -> pd.DataFrame:
    """
    One row per guess count, ascending.

    Columns: guesses, keys, share (fraction of all keys), cumulative share.
    """
    _check(distribution)
    df = pd.DataFrame(
        {"guesses": sorted(distribution), "keys": [distribution[d] for d in sorted(distribution)]}
    )
    total = df["keys"].sum()
    df["share"] = df["keys"] / total
    df["cumulative"] = df["share"].cumsum()
    return df
