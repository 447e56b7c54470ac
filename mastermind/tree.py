"""
tree.py

Exhaustive analysis of a strategy over a whole consistent set.

The strategy induces a decision tree: at each node it guesses, the feedback
splits the remaining keys into cells, and each cell is a child node. Walking
the full tree gives, for every key, the number of guesses needed to find it.
"""

from __future__ import annotations

import itertools
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, Iterable, Optional, Sequence, Tuple

from mastermind.errors import NoProgressError
from mastermind.feedback import feedback
from mastermind.partition import partition_by
from mastermind.strategy import Strategy, consistent_set


def _split(strategy: Strategy, cons: Sequence[str]) -> Tuple[str, bool, Dict]:
    """Guess once: (guess, whether it is a key in cons, feedback -> remaining keys)."""
    guess = strategy(cons)
    solved = guess in set(cons)
    remainder = [c for c in cons if c != guess]
    cells = partition_by(lambda key: feedback(guess, key), remainder)
    for cell in cells.values():
        if len(cell) == len(cons):
            raise NoProgressError(f"guess {guess!r} does not split {len(cons)} consistent codes")
    return guess, solved, cells


def _shift(depths: Counter) -> Counter:
    return Counter({d + 1: n for d, n in depths.items()})


def _summarize(strategy: Strategy, cons: Sequence[str]) -> Counter:
    guess, solved, cells = _split(strategy, cons)
    depths: Counter = Counter()
    if solved:
        depths[0] += 1
    for cell in cells.values():
        depths.update(_summarize(strategy, cell))
    return _shift(depths)


def summarize(strategy: Strategy, cons: Iterable[str], *, workers: Optional[int] = None) -> Counter:
    """
    Number of keys solved in exactly n guesses, for every n.

    Parameters
    ----------
    strategy : Strategy
        Picks the next guess from a consistent set.
    cons : iterable of codes
        The keys to analyze (usually the whole code space).
    workers : int, optional
        When greater than 1, the subtrees below the first guess are analyzed
        in a process pool of that size. The result is the same as the
        sequential one; the strategy must then be picklable.

    Returns
    -------
    collections.Counter
        guess count -> number of keys; the counts sum to len(cons).

    Raises
    ------
    EmptyDomainError
        If `cons` is empty.
    NoProgressError
        If the strategy makes a guess that leaves the consistent set unchanged.
    """
    cons = consistent_set(cons)
    if not workers or workers <= 1:
        return _summarize(strategy, cons)

    guess, solved, cells = _split(strategy, cons)
    depths: Counter = Counter()
    if solved:
        depths[0] += 1
    with ProcessPoolExecutor(max_workers=workers) as ex:
        for sub in ex.map(_summarize, itertools.repeat(strategy), list(cells.values())):
            depths.update(sub)
    return _shift(depths)


def guess_tree(strategy: Strategy, cons: Iterable[str]) -> dict:
    """
    The explicit decision tree as nested dicts.

    Each node is {"guess": code, "solved": bool, "children": {Feedback: node}},
    where "solved" tells whether the guess itself is one of the node's keys.
    Children are ordered by feedback.
    """
    cons = consistent_set(cons)
    guess, solved, cells = _split(strategy, cons)
    children = {fb: guess_tree(strategy, cells[fb]) for fb in sorted(cells)}
    return {"guess": guess, "solved": solved, "children": children}


def guesses_per_key(strategy: Strategy, cons: Iterable[str]) -> Dict[str, int]:
    """Number of guesses needed for each individual key."""
    out: Dict[str, int] = {}

    def visit(node: dict, depth: int) -> None:
        if node["solved"]:
            out[node["guess"]] = depth
        for child in node["children"].values():
            visit(child, depth + 1)

    visit(guess_tree(strategy, cons), 1)
    return out
