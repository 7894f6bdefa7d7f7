# tests/test_containers.py
import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import numpy as np
import pytest

# --- Ensure the repo root is importable when running this file directly or via pytest ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planning.nodes import RobotState, SearchNode, cell_key, same_cell, as_robot_state, EAST
from planning.frontier import Frontier
from planning.visited import VisitedSet
from planning.cost_map import CostMap


def _node(r, c, g=0, h=0, parent=None, orientation=0):
    return SearchNode(r, c, orientation, g_score=g, h_score=h, parent=parent)


# --- SearchNode / RobotState ---

def test_f_score_is_derived():
    node = _node(1, 2, g=3, h=4)
    assert node.f_score == 7
    assert node.cell == (1, 2)


def test_search_node_is_immutable():
    node = _node(0, 0)
    with pytest.raises(FrozenInstanceError):
        node.g_score = 5  # type: ignore[misc]


def test_cell_identity_ignores_cost_and_orientation():
    a = _node(2, 3, g=1, h=9, orientation=0)
    b = _node(2, 3, g=7, h=0, orientation=EAST)
    assert same_cell(a, b)
    assert cell_key(a) == cell_key(b) == (2, 3)
    assert same_cell(a, (2, 3))
    assert same_cell(RobotState(2, 3, EAST), a)
    assert not same_cell(a, _node(3, 2))


def test_as_robot_state_accepts_tuples():
    state = as_robot_state((4, 5))
    assert state == RobotState(4, 5)
    assert state.orientation == 0
    existing = RobotState(1, 1, EAST)
    assert as_robot_state(existing) is existing


def test_fractional_coordinates_rejected():
    with pytest.raises(ValueError):
        RobotState(0.5, 1)
    with pytest.raises(ValueError):
        cell_key((1.5, 2))
    with pytest.raises(ValueError):
        as_robot_state((0.9, 0))
    with pytest.raises(ValueError):
        as_robot_state((True, 0))
    # Integral floats are still not coordinates
    with pytest.raises(ValueError):
        cell_key((1.0, 2))


def test_numpy_integers_are_plain_ints():
    state = RobotState(np.int64(2), np.int32(3))
    assert state.cell == (2, 3)
    assert type(state.row) is int and type(state.col) is int
    assert cell_key((np.int64(1), 4)) == (1, 4)


# --- Frontier ---

def test_frontier_extracts_minimum_f_score():
    frontier = Frontier()
    for f in [5, 1, 4, 2, 3]:
        frontier.insert(_node(f, 0, g=f))
    popped = [frontier.extract_min().f_score for _ in range(5)]
    assert popped == [1, 2, 3, 4, 5]
    assert frontier.is_empty()


def test_frontier_breaks_ties_by_insertion_order():
    frontier = Frontier()
    first = _node(0, 0, g=1, h=1)
    second = _node(0, 1, g=0, h=2)
    third = _node(0, 2, g=2, h=0)
    for n in (first, second, third):
        frontier.insert(n)
    assert frontier.extract_min() is first
    assert frontier.extract_min() is second
    assert frontier.extract_min() is third


def test_frontier_allows_duplicate_cells():
    frontier = Frontier()
    frontier.insert(_node(1, 1, g=5))
    frontier.insert(_node(1, 1, g=2))
    assert len(frontier) == 2
    assert frontier.extract_min().g_score == 2
    assert frontier.extract_min().g_score == 5


def test_frontier_empty_pop_raises():
    frontier = Frontier()
    assert not frontier
    with pytest.raises(IndexError):
        frontier.extract_min()


# --- VisitedSet ---

def test_visited_set_membership_by_cell():
    visited = VisitedSet()
    visited.add(_node(1, 1, g=3))
    visited.add(_node(1, 1, g=9))  # idempotent
    assert len(visited) == 1
    assert visited.contains((1, 1))
    assert _node(1, 1, g=100) in visited
    assert not visited.contains((1, 2))


# --- CostMap ---

def test_cost_map_get_put_overwrite():
    cost_map = CostMap()
    assert cost_map.get((0, 0)) is None
    first = _node(0, 0, g=4)
    cost_map.put(first)
    assert cost_map.get((0, 0)) is first
    better = _node(0, 0, g=2)
    cost_map.put(better)
    assert cost_map.get(first) is better, "Lookup is by cell, not by node identity"
    assert len(cost_map) == 1


def test_cost_map_improves_is_strict():
    cost_map = CostMap()
    assert cost_map.improves((3, 3), 10), "Unseen cell always improves"
    cost_map.put(_node(3, 3, g=4))
    assert cost_map.improves((3, 3), 3)
    assert not cost_map.improves((3, 3), 4), "Equal cost is not an improvement"
    assert not cost_map.improves((3, 3), 5)


def test_cost_map_detects_stale_nodes():
    cost_map = CostMap()
    old = _node(2, 2, g=6)
    cost_map.put(old)
    assert not cost_map.is_stale(old)
    cost_map.put(_node(2, 2, g=3))
    assert cost_map.is_stale(old)
    assert not cost_map.is_stale(_node(5, 5, g=1)), "Unknown cell is never stale"


def test_cost_map_stores_predecessor_chain():
    cost_map = CostMap()
    root = _node(0, 0)
    child = _node(0, 1, g=1, parent=root)
    cost_map.put(root)
    cost_map.put(child)
    assert cost_map.get((0, 1)).parent is root
