"""Bounded concurrent fan-out of per-key primitive calls."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MAX_WORKERS: int = 16


def run_fanout(
    items: Iterable[T],
    func: Callable[[T], R],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[R]:
    """
    Apply func to every item concurrently and wait for all calls to settle.

    Rules:
        - At most max_workers calls are in flight at once.
        - Results come back in item order.
        - If any call failed, the first failure (in item order) is re-raised
          after every call has finished; completed calls are not undone.
    """
    work = list(items)
    if not work:
        return []
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1")

    with ThreadPoolExecutor(max_workers=min(max_workers, len(work))) as executor:
        futures = [executor.submit(func, item) for item in work]
        wait(futures)

    failures = [f.exception() for f in futures if f.exception() is not None]
    if failures:
        logger.warning("fan-out: %d of %d calls failed", len(failures), len(work))
        raise failures[0]  # type: ignore[misc]

    return [f.result() for f in futures]
