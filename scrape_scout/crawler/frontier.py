"""
Breadth-first crawl frontier: a FIFO of ``(url, depth)`` entries plus the visited set.

Owned by a single crawl run; nothing here is shared between tasks, so no
locking is needed.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Set, Tuple

from scrape_scout.errors import DepthExceededError

__all__ = ["Frontier", "FrontierEntry"]

FrontierEntry = Tuple[str, int]


class Frontier:
    """FIFO queue with a monotonically growing visited set."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        self._queue: Deque[FrontierEntry] = deque()
        self.visited: Set[str] = set()

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def __iter__(self) -> Iterator[FrontierEntry]:
        return iter(self._queue)

    def push(self, url: str, depth: int) -> None:
        """Append at the tail so earlier depths are always served first."""
        self._queue.append((url, depth))

    def pop(self) -> FrontierEntry:
        return self._queue.popleft()

    def is_visited(self, url: str) -> bool:
        return url in self.visited

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)

    def check_depth(self, depth: int) -> None:
        """Raise :class:`DepthExceededError` for entries beyond ``max_depth``."""
        if depth > self.max_depth:
            raise DepthExceededError(self.max_depth)
