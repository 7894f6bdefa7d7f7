# Section 0: Standard library imports
import sys
import argparse
from pathlib import Path
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

# Add project root to Python path for imports
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import matplotlib.pyplot as plt

# Project imports
from planning.grid import Grid
from planning.nodes import RobotState
from planning.pathfinding import SearchStatus, search
from display.grid_view import format_path, plot_grid, render_grid

Coord = Tuple[int, int]

MAX_DIMENSION = 50  # rows/cols accepted by the console prompts


@dataclass
class PlannerConfig:
    """Configuration for a single console planning run."""
    rows: int
    cols: int
    density: float                      # fraction of blocked cells, 0.0-1.0
    seed: Optional[int] = None          # Optional: set for a reproducible map
    start: Optional[Coord] = None       # defaults to (0, 0)
    goal: Optional[Coord] = None        # defaults to (rows - 1, cols - 1)
    max_expansions: Optional[int] = None
    time_limit: Optional[float] = None
    plot: bool = False
    save_plot: Optional[str] = None

    def __post_init__(self):
        if self.start is None:
            self.start = (0, 0)
        if self.goal is None:
            self.goal = (self.rows - 1, self.cols - 1)

    def validate(self) -> None:
        """Raise ValueError naming the first bad field."""
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if not 1 <= value <= MAX_DIMENSION:
                raise ValueError(f"{name} must be between 1 and {MAX_DIMENSION} (got {value}).")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError(f"density must be within [0, 1] (got {self.density}).")
        for name in ("start", "goal"):
            r, c = getattr(self, name)
            if not (0 <= r < self.rows and 0 <= c < self.cols):
                raise ValueError(f"{name} {(r, c)} lies outside a {self.rows}x{self.cols} grid.")
        if self.max_expansions is not None and (
                isinstance(self.max_expansions, bool) or not isinstance(self.max_expansions, int)
                or self.max_expansions <= 0):
            raise ValueError(f"max_expansions must be a positive integer (got {self.max_expansions}).")
        if self.time_limit is not None and not self.time_limit > 0:
            raise ValueError(f"time_limit must be positive (got {self.time_limit}).")


# Section 1: Interactive prompts (used for any value not given on the command line)
def prompt_dimension(label: str, input_fn: Callable[[str], str] = input) -> int:
    """Ask until the user types an integer in 1..MAX_DIMENSION."""
    while True:
        raw = input_fn(f"Enter the number of {label} (maximum {MAX_DIMENSION}): ").strip()
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if 1 <= value <= MAX_DIMENSION:
            return value
        print(f"Please enter a number between 1 and {MAX_DIMENSION}.")


def prompt_density(input_fn: Callable[[str], str] = input) -> float:
    """Ask for a percentage 0..100 and return it as a fraction."""
    while True:
        raw = input_fn("Enter the density of obstacles (0-100): ").strip()
        try:
            value = float(raw)
        except ValueError:
            value = -1.0
        if 0.0 <= value <= 100.0:
            return value / 100.0
        print("Please enter a number between 0 and 100.")


def _parse_cell(text: str) -> Coord:
    """'r,c' → (r, c) for argparse."""
    try:
        r, c = (int(part) for part in text.split(","))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected 'row,col' (got {text!r}).") from e
    return (r, c)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan a shortest path on a random occupancy grid with A*.")
    parser.add_argument("--rows", type=int, default=None,
                        help=f"Number of rows (1-{MAX_DIMENSION}); prompted if omitted")
    parser.add_argument("--cols", type=int, default=None,
                        help=f"Number of columns (1-{MAX_DIMENSION}); prompted if omitted")
    parser.add_argument("--density", type=float, default=None,
                        help="Obstacle density in percent (0-100); prompted if omitted")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for obstacle placement")
    parser.add_argument("--start", type=_parse_cell, default=None,
                        help="Start cell as 'row,col' (default 0,0)")
    parser.add_argument("--goal", type=_parse_cell, default=None,
                        help="Goal cell as 'row,col' (default bottom-right corner)")
    parser.add_argument("--max-expansions", type=int, default=None,
                        help="Abort the search after this many expanded cells")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Abort the search after this many seconds")
    parser.add_argument("--plot", action="store_true",
                        help="Show the grid and path in a matplotlib window")
    parser.add_argument("--save-plot", type=str, default=None,
                        help="Optional output path for the grid figure")
    return parser


def config_from_args(args: argparse.Namespace, input_fn: Callable[[str], str] = input) -> PlannerConfig:
    """Fill any missing rows/cols/density through prompts, then validate."""
    rows = args.rows if args.rows is not None else prompt_dimension("rows", input_fn)
    cols = args.cols if args.cols is not None else prompt_dimension("columns", input_fn)
    if args.density is not None:
        density = args.density / 100.0
    else:
        density = prompt_density(input_fn)

    config = PlannerConfig(
        rows=rows,
        cols=cols,
        density=density,
        seed=args.seed,
        start=args.start,
        goal=args.goal,
        max_expansions=args.max_expansions,
        time_limit=args.time_limit,
        plot=args.plot,
        save_plot=args.save_plot,
    )
    config.validate()
    return config


# Section 2: One planning run
def build_grid(config: PlannerConfig) -> Grid:
    """Random grid with the start and goal cells kept free."""
    grid = Grid.random(config.rows, config.cols, config.density, seed=config.seed)
    grid.clear_cell(*config.start)
    grid.clear_cell(*config.goal)
    return grid


def run(config: PlannerConfig, grid: Optional[Grid] = None) -> int:
    """
    Plan, print the grid and the outcome, optionally plot.

    Returns:
        0 if a path was found, 1 otherwise (no path, invalid endpoint, aborted).
    """
    if grid is None:
        grid = build_grid(config)

    start = RobotState(*config.start)
    goal = RobotState(*config.goal)
    result = search(grid, start, goal,
                    max_expansions=config.max_expansions,
                    time_limit=config.time_limit)

    print("Grid:")
    print(render_grid(grid, start, goal, result.path))

    if result.status is SearchStatus.FOUND:
        print("Optimal path found:")
        print(format_path(result.path))
        print(f"[Planner] {result.length} steps, {result.expansions} cells expanded")
    elif result.status is SearchStatus.NO_PATH:
        print("No path found.")
        print(f"[Planner] {result.expansions} cells expanded")
    else:
        # Invalid endpoint or aborted search
        print(f"[Planner] {result.message}")

    if config.plot or config.save_plot:
        _show_plot(grid, start, goal, result.path, config)

    return 0 if result.found else 1


def _show_plot(grid: Grid, start: RobotState, goal: RobotState, path: List[Coord], config: PlannerConfig) -> None:
    ax = plot_grid(grid, start, goal, path,
                   title=f"A* on {grid.num_rows}x{grid.num_cols} (density {config.density:.0%})")
    if config.save_plot:
        save_path = Path(config.save_plot)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        ax.figure.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Grid plot saved to: {save_path}")
    if config.plot:
        plt.show()
    plt.close(ax.figure)


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args, input_fn)
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 2
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
