"""Tests for cell map primitives."""

import numpy as np
import pytest

from py_hexmap.core.alea_prng import AleaPRNG
from py_hexmap.core.cell_map import WATER, Bounds, Frontier, claim_cell, count_owned_neighbors


@pytest.fixture
def empty_map():
    """A 10x10 map of unclaimed water."""
    return np.full((10, 10), WATER, dtype=np.int32)


class TestBounds:
    """Test usable grid areas."""

    def test_playable_excludes_frame(self):
        """Test the playable area leaves out the outer frame."""
        bounds = Bounds.playable(10, 8)
        assert bounds.contains(1, 1)
        assert bounds.contains(8, 6)
        assert not bounds.contains(0, 3)
        assert not bounds.contains(9, 3)
        assert not bounds.contains(3, 7)

    def test_coarse_keeps_last_row(self):
        """Test the coarse area keeps the last row and column."""
        bounds = Bounds.coarse(8, 7)
        assert bounds.contains(7, 6)
        assert not bounds.contains(0, 0)

    def test_edges(self):
        """Test the outermost ring of the area counts as edge."""
        bounds = Bounds.playable(10, 10)
        assert bounds.is_edge(1, 5)
        assert bounds.is_edge(8, 5)
        assert bounds.is_edge(4, 8)
        assert not bounds.is_edge(4, 4)
        assert not bounds.is_edge(0, 0)

    def test_cells(self):
        """Test cells are iterated column by column."""
        bounds = Bounds.playable(5, 4)
        cells = list(bounds.cells())
        assert len(cells) == 3 * 2
        assert cells[0] == (1, 1)
        assert cells[1] == (1, 2)


class TestFrontier:
    """Test the frontier set."""

    def test_no_duplicates(self):
        """Test a cell is added to the frontier only once."""
        frontier = Frontier()
        assert frontier.add((1, 1))
        assert not frontier.add((1, 1))
        assert len(frontier) == 1

    def test_pop_random_removes(self):
        """Test random pops drain the frontier."""
        frontier = Frontier()
        cells = [(1, 1), (2, 2), (3, 3)]
        for cell in cells:
            frontier.add(cell)

        prng = AleaPRNG("frontier")
        popped = [frontier.pop_random(prng) for _ in range(3)]
        assert sorted(popped) == cells
        assert len(frontier) == 0
        assert (1, 1) not in frontier

    def test_readd_after_pop(self):
        """Test a popped cell can be added again."""
        frontier = Frontier()
        frontier.add((4, 4))
        frontier.pop_random(AleaPRNG("readd"))
        assert frontier.add((4, 4))


class TestClaimCell:
    """Test claiming cells."""

    def test_claim_extends_frontier(self, empty_map):
        """Test claiming a cell adds its six neighbors."""
        frontier = Frontier()
        bounds = Bounds.playable(10, 10)
        assert claim_cell(empty_map, 4, 4, 1, frontier, bounds)

        assert empty_map[4, 4] == 1
        assert len(frontier) == 6
        assert (4, 4) not in frontier

    def test_claim_owned_cell_fails(self, empty_map):
        """Test an owned cell cannot be claimed again."""
        bounds = Bounds.playable(10, 10)
        claim_cell(empty_map, 4, 4, 1, Frontier(), bounds)
        assert not claim_cell(empty_map, 4, 4, 2, Frontier(), bounds)
        assert empty_map[4, 4] == 1

    def test_frontier_stays_in_bounds(self, empty_map):
        """Test out-of-bounds neighbors never join the frontier."""
        frontier = Frontier()
        bounds = Bounds.playable(10, 10)
        claim_cell(empty_map, 1, 1, 1, frontier, bounds)
        assert all(bounds.contains(x, y) for x, y in frontier)
        assert len(frontier) < 6

    def test_claimed_neighbors_not_added(self, empty_map):
        """Test neighbors owned by others never join the frontier."""
        empty_map[4, 5] = 2
        frontier = Frontier()
        claim_cell(empty_map, 4, 4, 1, frontier, Bounds.playable(10, 10))
        assert (4, 5) not in frontier
        assert len(frontier) == 5

    def test_strict_requires_two_owned_neighbors(self, empty_map):
        """Strict claims only add cells that touch two cells of the owner."""
        bounds = Bounds.playable(10, 10)
        frontier = Frontier()
        claim_cell(empty_map, 4, 4, 1, frontier, bounds, strict=True)
        assert len(frontier) == 0

        empty_map[:] = WATER
        empty_map[4, 5] = 1
        frontier = Frontier()
        claim_cell(empty_map, 4, 4, 1, frontier, bounds, strict=True)
        assert set(frontier) == {(3, 4), (5, 4)}

    def test_count_owned_neighbors(self, empty_map):
        """Test neighbor counting per owner."""
        bounds = Bounds.playable(10, 10)
        empty_map[3, 4] = 1
        empty_map[5, 4] = 1
        empty_map[4, 5] = 2
        assert count_owned_neighbors(empty_map, 4, 4, 1, bounds) == 2
        assert count_owned_neighbors(empty_map, 4, 4, 2, bounds) == 1
