"""
planning/errors.py
------------------
Outcome kinds a search can end with that are *not* a path.

"No path exists" is deliberately absent: it is an ordinary result (an empty
path / `SearchStatus.NO_PATH`), not an error.

Both errors subclass ValueError so callers that already guard planner input
with `except ValueError` keep working.
"""

from __future__ import annotations
from typing import Tuple

Coord = Tuple[int, int]


class PlanningError(ValueError):
    """Base class for planner outcomes that are reported instead of a path."""


class InvalidEndpointError(PlanningError):
    """Start or goal is out of bounds or sits on an obstacle."""

    def __init__(self, endpoint: str, cell: Coord, reason: str):
        self.endpoint = endpoint  # "start" or "goal"
        self.cell = cell
        self.reason = reason      # "out of bounds" or "obstacle"
        super().__init__(f"Invalid {endpoint} cell {cell}: {reason}.")


class SearchAbortedError(PlanningError):
    """The optional expansion/time budget ran out before the search finished."""

    def __init__(self, expansions: int, reason: str):
        self.expansions = expansions
        self.reason = reason
        super().__init__(f"Search aborted after {expansions} expansions: {reason}.")
