"""Move subset enumeration.

Produces every non-empty subset of a small move list, largest subsets
first. Subsets of one size come out in lexicographic order over the item
positions, so the first subset of each size keeps the earliest moves.

The number of subsets is 2**n - 1. That is fine for the four move slots a
record has; do not feed this anything much larger without replacing the
search that consumes it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from itertools import combinations
from typing import Any, TypeVar

T = TypeVar("T")


def _distinct(items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping first occurrences in order."""
    seen: set[T] = set()
    result: list[T] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def k_subsets(items: Sequence[T], k: int) -> Iterator[tuple[T, ...]]:
    """Yield every subset of exactly *k* items, in positional order."""
    if k < 1 or k > len(items):
        return iter(())
    return combinations(items, k)


def descending_subsets(
    items: Iterable[T],
    key: Callable[[T], Any] | None = None,
) -> Iterator[tuple[T, ...]]:
    """Yield all non-empty subsets of *items*, sizes n down to 1.

    Duplicated items are collapsed first. If *key* is given the items are
    put in that total order before enumerating, otherwise input order is kept.
    """
    pool = _distinct(items)
    if key is not None:
        pool.sort(key=key)
    for size in range(len(pool), 0, -1):
        yield from k_subsets(pool, size)
