"""
planning/cost_map.py
--------------------
Best known SearchNode per cell (gScore map + came-from map in one).

Each stored node carries its own `parent`, so following parents from the
goal entry rebuilds the path; there is no separate came-from table.

`put` overwrites unconditionally. The planner only calls it after
`improves(...)` said yes.
"""

from __future__ import annotations

from typing import Dict, Optional

from planning.nodes import CellLike, Coord, SearchNode, cell_key


class CostMap:
    def __init__(self):
        self._best: Dict[Coord, SearchNode] = {}

    def get(self, item: CellLike) -> Optional[SearchNode]:
        return self._best.get(cell_key(item))

    def put(self, node: SearchNode) -> None:
        self._best[cell_key(node)] = node

    def improves(self, item: CellLike, g_score: int) -> bool:
        """True if the cell is unseen or `g_score` beats the stored cost strictly."""
        existing = self._best.get(cell_key(item))
        return existing is None or g_score < existing.g_score

    def is_stale(self, node: SearchNode) -> bool:
        """True if a strictly cheaper node for the same cell has been recorded."""
        best = self._best.get(cell_key(node))
        return best is not None and best.g_score < node.g_score

    def __contains__(self, item: CellLike) -> bool:
        return cell_key(item) in self._best

    def __len__(self) -> int:
        return len(self._best)
