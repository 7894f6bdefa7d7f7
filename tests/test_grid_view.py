# tests/test_grid_view.py
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless backend for CI
import matplotlib.pyplot as plt

# --- Ensure the repo root is importable when running this file directly or via pytest ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from display.grid_view import format_path, plot_grid, render_grid
from planning.grid import Grid
from planning.nodes import RobotState
from planning.pathfinding import find_path, search


def test_render_grid_marks_start_goal_path_and_obstacles():
    grid = Grid(3, 3, obstacles=[(0, 1)])
    path = [(0, 0), (1, 0), (1, 1), (1, 2), (0, 2)]
    text = render_grid(grid, (0, 0), (0, 2), path)
    assert text.splitlines() == [
        "S ? G",
        "* * *",
        ". . .",
    ]


def test_render_grid_without_path():
    grid = Grid.from_strings([
        ".#.",
        ".#.",
        ".#.",
    ])
    text = render_grid(grid, RobotState(0, 0), RobotState(0, 2), find_path(grid, (0, 0), (0, 2)))
    assert text.splitlines() == [
        "S ? G",
        ". ? .",
        ". ? .",
    ]


def test_render_grid_accepts_search_nodes():
    grid = Grid(2, 2)
    result = search(grid, (0, 0), (1, 1))
    text = render_grid(grid, (0, 0), (1, 1), result.nodes)
    assert text.count("*") == 1, "Exactly one intermediate cell on a 2x2 diagonal path"


def test_format_path_one_cell_per_line():
    assert format_path([(0, 0), (0, 1)]) == "(0, 0)\n(0, 1)"
    assert format_path([]) == ""


def test_plot_grid_draws_path_and_markers():
    grid = Grid(4, 4, obstacles=[(1, 1)])
    path = find_path(grid, (0, 0), (3, 3))
    ax = plot_grid(grid, (0, 0), (3, 3), path, title="demo")
    try:
        assert ax.get_title() == "demo"
        lines = ax.get_lines()
        assert len(lines) == 1
        xs, ys = lines[0].get_data()
        assert list(zip(ys, xs)) == path, "Line is drawn through (col, row) of each path cell"
        labels = [t.get_text() for t in ax.get_legend().get_texts()]
        assert "start" in labels and "goal" in labels
    finally:
        plt.close(ax.figure)
