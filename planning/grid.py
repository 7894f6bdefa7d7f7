"""
planning/grid.py
================

Fixed-size occupancy grid: the boundary-and-obstacle oracle the planner asks
"may I stand here?".

How this file fits in:
- The planner only ever calls `is_valid_cell(row, col)`; it never mutates a Grid.
- The console driver and the sweep script build grids with `Grid.random(...)`.
- Tests build small hand-drawn maps with `Grid.from_strings(...)`.

Key design choices:
- Occupancy is a NumPy bool array (True = obstacle), indexed [row, col].
- Out-of-range queries return False instead of raising.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

# Type alias for grid coordinates
Coord = Tuple[int, int]


class Grid:
    """
    Rectangular occupancy map with fixed dimensions.

    A cell is *valid* iff it is inside the map and not an obstacle.
    """

    def __init__(self, num_rows: int, num_cols: int, obstacles: Optional[Iterable[Coord]] = None):
        if not isinstance(num_rows, (int, np.integer)) or num_rows <= 0:
            raise ValueError(f"num_rows must be a positive integer (got {num_rows!r}).")
        if not isinstance(num_cols, (int, np.integer)) or num_cols <= 0:
            raise ValueError(f"num_cols must be a positive integer (got {num_cols!r}).")

        self._num_rows = int(num_rows)
        self._num_cols = int(num_cols)
        self._occupied = np.zeros((self._num_rows, self._num_cols), dtype=bool)

        for cell in obstacles or ():
            r, c = cell
            if not self.in_bounds(r, c):
                raise ValueError(
                    f"Obstacle {tuple(cell)} lies outside a {self._num_rows}x{self._num_cols} grid."
                )
            self._occupied[r, c] = True

    # ──────────────────────────────────────────────────────────────────────
    # Alternate constructors
    # ──────────────────────────────────────────────────────────────────────
    @classmethod
    def from_strings(cls, lines: Iterable[str], obstacle: str = "#") -> "Grid":
        """
        Build a grid from a text map, one string per row.

        Example:
            Grid.from_strings([
                ".#.",
                ".#.",
                "...",
            ])

        Any character other than `obstacle` is free space.
        """
        rows: List[str] = [line for line in lines]
        if not rows or not rows[0]:
            raise ValueError("Text map must contain at least one non-empty row.")
        width = len(rows[0])
        for i, line in enumerate(rows):
            if len(line) != width:
                raise ValueError(
                    f"Text map rows must all have length {width} (row {i} has {len(line)})."
                )

        obstacles = [
            (r, c)
            for r, line in enumerate(rows)
            for c, ch in enumerate(line)
            if ch == obstacle
        ]
        return cls(len(rows), width, obstacles)

    @classmethod
    def random(cls, num_rows: int, num_cols: int, density: float, seed: Optional[int] = None) -> "Grid":
        """
        Place `int(num_rows * num_cols * density)` obstacles on distinct random cells.

        Args:
            density: fraction of cells to block, in [0, 1].
            seed:    optional seed for reproducible placement.
        """
        density = float(density)
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be within [0, 1] (got {density}).")

        grid = cls(num_rows, num_cols)
        rng = np.random.default_rng(seed)

        total = grid._num_rows * grid._num_cols
        obstacle_count = int(total * density)

        # Keep drawing until enough *distinct* cells are blocked
        placed = 0
        while placed < obstacle_count:
            r = int(rng.integers(grid._num_rows))
            c = int(rng.integers(grid._num_cols))
            if not grid._occupied[r, c]:
                grid._occupied[r, c] = True
                placed += 1
        return grid

    # ──────────────────────────────────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────────────────────────────────
    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_cols(self) -> int:
        return self._num_cols

    @property
    def occupancy(self) -> np.ndarray:
        """Copy of the (rows, cols) bool array; True = obstacle."""
        return self._occupied.copy()

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._num_rows and 0 <= col < self._num_cols

    def is_obstacle(self, row: int, col: int) -> bool:
        """True only for in-bounds blocked cells."""
        return self.in_bounds(row, col) and bool(self._occupied[row, col])

    def is_valid_cell(self, row: int, col: int) -> bool:
        """In bounds AND not an obstacle. Never raises."""
        return self.in_bounds(row, col) and not self._occupied[row, col]

    def obstacles(self) -> Set[Coord]:
        return {(int(r), int(c)) for r, c in np.argwhere(self._occupied)}

    def free_cell_count(self) -> int:
        return int(self._occupied.size - np.count_nonzero(self._occupied))

    # ──────────────────────────────────────────────────────────────────────
    # Caller-side edits (the planner never calls these)
    # ──────────────────────────────────────────────────────────────────────
    def clear_cell(self, row: int, col: int) -> None:
        """Remove an obstacle, e.g. so a randomly generated map keeps S/G free."""
        if not self.in_bounds(row, col):
            raise ValueError(f"Cell {(row, col)} lies outside the grid.")
        self._occupied[row, col] = False

    def __repr__(self) -> str:
        return (f"Grid(num_rows={self._num_rows}, num_cols={self._num_cols}, "
                f"obstacles={int(np.count_nonzero(self._occupied))})")
