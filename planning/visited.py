"""
planning/visited.py
-------------------
Closed set: cells whose cost has been finalized.

Membership is by (row, col) via `cell_key`, never by node identity or cost.
With uniform non-negative step costs the first finalization of a cell is
optimal, so a closed cell is never reopened.
"""

from __future__ import annotations

from typing import Set

from planning.nodes import CellLike, Coord, cell_key


class VisitedSet:
    def __init__(self):
        self._cells: Set[Coord] = set()

    def add(self, item: CellLike) -> None:
        self._cells.add(cell_key(item))

    def contains(self, item: CellLike) -> bool:
        return cell_key(item) in self._cells

    def __contains__(self, item: CellLike) -> bool:
        return self.contains(item)

    def __len__(self) -> int:
        return len(self._cells)
