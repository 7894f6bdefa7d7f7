# display/grid_view.py
# --------------------------------------------------------------------
# Presentation helpers for a grid + planned path.
# --------------------------------------------------------------------
# PURPOSE:
#   - Text view used by the console driver:
#         S = start, G = goal, * = path, . = free, ? = obstacle
#   - Matplotlib view of the same information (occupancy image + path line).
#
# CONNECTIONS TO OTHER FILES:
#   - Reads planning/grid.Grid through its public queries only.
#   - Called from scripts/plan_path.py (print / --plot / --save-plot) and
#     scripts/experiment.py (example grid figure).
#   - The planner itself never imports this module.
# --------------------------------------------------------------------

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

import matplotlib.pyplot as plt

from planning.grid import Grid
from planning.nodes import RobotState, cell_key

Coord = Tuple[int, int]
Endpoint = Union[RobotState, Coord]

START_CHAR = "S"
GOAL_CHAR = "G"
PATH_CHAR = "*"
FREE_CHAR = "."
OBSTACLE_CHAR = "?"


def render_grid(grid: Grid, start: Endpoint, goal: Endpoint, path: Iterable = ()) -> str:
    """
    One text line per row, cells separated by a single space.
    Start and goal markers win over path/obstacle markers.
    """
    start_cell = cell_key(start)
    goal_cell = cell_key(goal)
    on_path: Set[Coord] = {cell_key(p) for p in path}

    lines: List[str] = []
    for r in range(grid.num_rows):
        row_chars: List[str] = []
        for c in range(grid.num_cols):
            if (r, c) == start_cell:
                row_chars.append(START_CHAR)
            elif (r, c) == goal_cell:
                row_chars.append(GOAL_CHAR)
            elif grid.is_obstacle(r, c):
                row_chars.append(OBSTACLE_CHAR)
            elif (r, c) in on_path:
                row_chars.append(PATH_CHAR)
            else:
                row_chars.append(FREE_CHAR)
        lines.append(" ".join(row_chars))
    return "\n".join(lines)


def format_path(path: Iterable) -> str:
    """`(row, col)` per line, start first."""
    return "\n".join(f"({r}, {c})" for r, c in (cell_key(p) for p in path))


def plot_grid(
    grid: Grid,
    start: Endpoint,
    goal: Endpoint,
    path: Sequence = (),
    ax=None,
    title: Optional[str] = None,
):
    """
    Draw obstacles (dark), the path (line) and S/G markers.

    Returns:
        The matplotlib Axes drawn on (a new figure is created when `ax` is None).
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    # imshow puts row 0 at the top, matching the text view
    ax.imshow(grid.occupancy, cmap="Greys", vmin=0, vmax=1, interpolation="nearest")

    cells = [cell_key(p) for p in path]
    if cells:
        rows = [r for r, _ in cells]
        cols = [c for _, c in cells]
        ax.plot(cols, rows, color="tab:blue", linewidth=2, label=f"path ({len(cells) - 1} steps)")

    sr, sc = cell_key(start)
    gr, gc = cell_key(goal)
    ax.scatter([sc], [sr], color="tab:green", s=80, marker="o", label="start", zorder=3)
    ax.scatter([gc], [gr], color="tab:red", s=80, marker="X", label="goal", zorder=3)

    ax.set_xticks(range(grid.num_cols))
    ax.set_yticks(range(grid.num_rows))
    ax.tick_params(labelsize=6)
    ax.set_xlabel("col")
    ax.set_ylabel("row")
    ax.set_title(title or f"{grid.num_rows}x{grid.num_cols} grid")
    ax.legend(loc="upper right", fontsize=8)
    return ax
