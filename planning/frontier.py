"""
planning/frontier.py
--------------------
Open set for A*: a binary heap of SearchNodes ordered by fScore.

Entries for the same cell may coexist. The planner treats the CostMap as the
source of truth and skips superseded ("stale") entries when they surface,
so nothing is ever removed from the middle of the heap.
"""

from __future__ import annotations

import heapq
from itertools import count
from typing import List, Tuple

from planning.nodes import SearchNode


class Frontier:
    def __init__(self):
        # (f_score, insertion_seq, node); the sequence number breaks ties in
        # insertion order and keeps nodes themselves out of the comparison
        self._heap: List[Tuple[int, int, SearchNode]] = []
        self._seq = count()

    def insert(self, node: SearchNode) -> None:
        heapq.heappush(self._heap, (node.f_score, next(self._seq), node))

    def extract_min(self) -> SearchNode:
        """Pop the node with the smallest fScore. Raises IndexError when empty."""
        if not self._heap:
            raise IndexError("extract_min from an empty Frontier")
        _, _, node = heapq.heappop(self._heap)
        return node

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
