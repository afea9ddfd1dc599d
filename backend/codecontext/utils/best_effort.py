"""Partial-failure helpers."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def map_best_effort(
    items: Sequence[T],
    fn: Callable[[T], R],
    max_workers: int = 1,
) -> Tuple[List[Tuple[T, R]], List[Tuple[T, Exception]]]:
    """Apply ``fn`` to every item, collecting failures instead of raising.

    Args:
        items: Inputs to process
        fn: Function applied to each item
        max_workers: Thread pool size; 1 runs sequentially in the caller's thread

    Returns:
        (successes, failures) as lists of (item, result) and (item, error),
        both in input order
    """
    items = list(items)

    def attempt(item: T) -> Tuple[bool, object]:
        try:
            return True, fn(item)
        except Exception as e:
            return False, e

    if max_workers <= 1 or len(items) <= 1:
        outcomes = [attempt(item) for item in items]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(attempt, items))

    successes: List[Tuple[T, R]] = []
    failures: List[Tuple[T, Exception]] = []
    for item, (ok, value) in zip(items, outcomes):
        if ok:
            successes.append((item, value))  # type: ignore[arg-type]
        else:
            failures.append((item, value))  # type: ignore[arg-type]
    return successes, failures
