"""
planning/pathfinding.py
=======================

A* shortest path on a 4-connected occupancy grid.

How this file fits in:
- The console driver (scripts/plan_path.py) and the sweep
  (scripts/experiment.py) call `search(...)` or `find_path(...)`.
- Everything a search needs (Frontier, VisitedSet, CostMap) is built inside
  the call and dropped on return. No I/O, no module-level state.

Key design choices:
- Manhattan heuristic + unit step cost → admissible and consistent, so the
  first time the goal is popped its path is optimal.
- Nodes are immutable. A cheaper route to a cell creates a new node; the old
  heap entry stays behind and is skipped when popped (lazy deletion).
- Per-cell state: Unseen (no CostMap entry) → Open (in CostMap, not visited)
  → Closed (in VisitedSet). Closed cells are never reopened.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral, Real
from typing import List, Optional, Tuple, Union

from planning.cost_map import CostMap
from planning.errors import InvalidEndpointError, PlanningError, SearchAbortedError
from planning.frontier import Frontier
from planning.grid import Grid
from planning.nodes import RobotState, SearchNode, as_robot_state
from planning.visited import VisitedSet

# Type alias for grid coordinates
Coord = Tuple[int, int]
Endpoint = Union[RobotState, Coord]

# Up, Left, Down, Right in (row, col); order only affects tie-breaking
NEIGHBOR_OFFSETS: Tuple[Coord, ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))

STEP_COST = 1


class SearchStatus(Enum):
    FOUND = "found"
    NO_PATH = "no_path"
    INVALID_ENDPOINT = "invalid_endpoint"
    ABORTED = "aborted"


@dataclass
class SearchResult:
    """
    Outcome of one `search(...)` call.

    `path` is [start, ..., goal] when status is FOUND and [] otherwise.
    `nodes` holds the matching SearchNodes (start first).
    `expansions` counts cells that were popped and finalized.
    `error` is set for INVALID_ENDPOINT and ABORTED.
    """
    status: SearchStatus
    path: List[Coord] = field(default_factory=list)
    nodes: List[SearchNode] = field(default_factory=list)
    expansions: int = 0
    error: Optional[PlanningError] = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def length(self) -> int:
        """Number of moves (edges); -1 when there is no path."""
        return len(self.path) - 1 if self.path else -1


# ──────────────────────────────────────────────────────────────────────────────
# Heuristic + reconstruction
# ──────────────────────────────────────────────────────────────────────────────
def manhattan_distance(a: Endpoint, b: Endpoint) -> int:
    ra, ca = as_robot_state(a).cell
    rb, cb = as_robot_state(b).cell
    return abs(ra - rb) + abs(ca - cb)


def reconstruct_path(node: SearchNode) -> List[SearchNode]:
    """Follow `parent` links back to the root and return the chain start → goal."""
    chain: List[SearchNode] = []
    current: Optional[SearchNode] = node
    while current is not None:
        chain.append(current)
        current = current.parent
    chain.reverse()
    return chain


def _check_endpoint(grid: Grid, state: RobotState, name: str) -> None:
    r, c = state.cell
    if not grid.in_bounds(r, c):
        raise InvalidEndpointError(name, state.cell, "out of bounds")
    if grid.is_obstacle(r, c):
        raise InvalidEndpointError(name, state.cell, "obstacle")


def _check_budget(max_expansions: Optional[int], time_limit: Optional[float]) -> None:
    if max_expansions is not None and (
            isinstance(max_expansions, bool) or not isinstance(max_expansions, Integral) or max_expansions <= 0):
        raise ValueError(f"max_expansions must be a positive integer (got {max_expansions!r}).")
    # "not >" also rejects NaN
    if time_limit is not None and (
            isinstance(time_limit, bool) or not isinstance(time_limit, Real) or not time_limit > 0):
        raise ValueError(f"time_limit must be positive seconds (got {time_limit!r}).")


# ──────────────────────────────────────────────────────────────────────────────
# A* search
# ──────────────────────────────────────────────────────────────────────────────
def search(
    grid: Grid,
    start: Endpoint,
    goal: Endpoint,
    *,
    max_expansions: Optional[int] = None,   # safety valve, None = unbounded
    time_limit: Optional[float] = None,     # seconds, None = unbounded
) -> SearchResult:
    """
    Run A* from start → goal and report how it ended.

    Never raises for a well-formed grid: invalid endpoints and exhausted
    budgets come back as INVALID_ENDPOINT / ABORTED results.

    Raises:
        ValueError if a budget is given but not positive, or an endpoint
        has non-integer coordinates.
    """
    _check_budget(max_expansions, time_limit)
    start_state = as_robot_state(start)
    goal_state = as_robot_state(goal)

    try:
        _check_endpoint(grid, start_state, "start")
        _check_endpoint(grid, goal_state, "goal")
    except InvalidEndpointError as e:
        return SearchResult(SearchStatus.INVALID_ENDPOINT, error=e)

    goal_cell = goal_state.cell
    deadline = None if time_limit is None else time.perf_counter() + float(time_limit)

    frontier = Frontier()
    visited = VisitedSet()
    cost_map = CostMap()

    start_node = SearchNode(
        start_state.row, start_state.col, start_state.orientation,
        g_score=0, h_score=manhattan_distance(start_state, goal_state),
    )
    frontier.insert(start_node)
    cost_map.put(start_node)

    expansions = 0
    while not frontier.is_empty():
        current = frontier.extract_min()

        # Superseded by a cheaper entry, or already finalized
        if cost_map.is_stale(current) or visited.contains(current):
            continue

        if current.cell == goal_cell:
            nodes = reconstruct_path(current)
            return SearchResult(
                SearchStatus.FOUND,
                path=[n.cell for n in nodes],
                nodes=nodes,
                expansions=expansions,
            )

        visited.add(current)
        expansions += 1

        if max_expansions is not None and expansions > max_expansions:
            return SearchResult(
                SearchStatus.ABORTED, expansions=expansions,
                error=SearchAbortedError(expansions, f"expansion budget of {max_expansions} exhausted"),
            )
        if deadline is not None and time.perf_counter() > deadline:
            return SearchResult(
                SearchStatus.ABORTED, expansions=expansions,
                error=SearchAbortedError(expansions, f"time limit of {time_limit}s exceeded"),
            )

        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = current.row + dr, current.col + dc

            # Skip walls / out of bounds / closed cells
            if not grid.is_valid_cell(nr, nc) or visited.contains((nr, nc)):
                continue

            tentative = current.g_score + STEP_COST
            if cost_map.improves((nr, nc), tentative):
                neighbor = SearchNode(
                    nr, nc, current.orientation,
                    g_score=tentative,
                    h_score=manhattan_distance((nr, nc), goal_state),
                    parent=current,
                )
                cost_map.put(neighbor)
                frontier.insert(neighbor)

    return SearchResult(SearchStatus.NO_PATH, expansions=expansions)  # frontier exhausted


def find_path(
    grid: Grid,
    start: Endpoint,
    goal: Endpoint,
    *,
    max_expansions: Optional[int] = None,
    time_limit: Optional[float] = None,
) -> List[Coord]:
    """
    Shortest path as [start, ..., goal], or [] if the goal is unreachable.

    Raises:
        InvalidEndpointError: start/goal out of bounds or on an obstacle.
        SearchAbortedError:   a budget ran out before the search finished.
    """
    result = search(grid, start, goal, max_expansions=max_expansions, time_limit=time_limit)
    if result.error is not None:
        raise result.error
    return result.path
