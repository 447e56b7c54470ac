"""
partition.py

Grouping helpers shared by the strategy generalizer and the tree analyzer.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def partition_by(classify: Callable[[T], K], items: Iterable[T]) -> Dict[K, List[T]]:
    """
    Group `items` by `classify(item)`.

    Every item lands in exactly one cell and items keep their relative
    order inside a cell. The order of the cells themselves carries no meaning.
    """
    cells: Dict[K, List[T]] = defaultdict(list)
    for item in items:
        cells[classify(item)].append(item)
    return dict(cells)


def count_by(classify: Callable[[T], K], items: Iterable[T]) -> Counter:
    """Histogram form of `partition_by`: key -> number of items."""
    counts: Counter = Counter()
    for item in items:
        counts[classify(item)] += 1
    return counts
