"""
planning/nodes.py
-----------------
Value types shared by the planner and its containers.

- `RobotState` describes a query endpoint (where the agent is / wants to be).
- `SearchNode` is one immutable search record for a cell.

Cell identity is (row, col) only. Orientation and the cost fields are never
part of it, so every container goes through `cell_key(...)` instead of
relying on `==`.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Optional, Tuple, Union

Coord = Tuple[int, int]

# Orientation codes (carried through the search, never used by it)
NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3


def _as_index(value, name: str) -> int:
    """Integral coordinate as a plain int; anything else is a ValueError."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValueError(f"{name} must be an integer (got {value!r}).")
    return int(value)


@dataclass(frozen=True)
class RobotState:
    row: int
    col: int
    orientation: int = NORTH

    def __post_init__(self):
        object.__setattr__(self, "row", _as_index(self.row, "row"))
        object.__setattr__(self, "col", _as_index(self.col, "col"))

    @property
    def cell(self) -> Coord:
        return (self.row, self.col)


# eq=False: default field-wise equality would drag g/h/parent into comparisons
@dataclass(frozen=True, eq=False)
class SearchNode:
    row: int
    col: int
    orientation: int
    g_score: int                       # path cost from start
    h_score: int                       # heuristic estimate to goal
    parent: Optional["SearchNode"] = None

    @property
    def f_score(self) -> int:
        return self.g_score + self.h_score

    @property
    def cell(self) -> Coord:
        return (self.row, self.col)

    def __repr__(self) -> str:
        return (f"SearchNode(cell={self.cell}, g={self.g_score}, h={self.h_score}, "
                f"f={self.f_score})")


CellLike = Union[SearchNode, RobotState, Coord]


def cell_key(item: CellLike) -> Coord:
    """(row, col) for a node, a robot state or a plain coordinate."""
    if isinstance(item, (SearchNode, RobotState)):
        return item.cell
    r, c = item
    return (_as_index(r, "row"), _as_index(c, "col"))


def same_cell(a: CellLike, b: CellLike) -> bool:
    return cell_key(a) == cell_key(b)


def as_robot_state(endpoint: Union[RobotState, Coord]) -> RobotState:
    """Accept either a RobotState or a (row, col) tuple."""
    if isinstance(endpoint, RobotState):
        return endpoint
    r, c = endpoint
    return RobotState(r, c)
