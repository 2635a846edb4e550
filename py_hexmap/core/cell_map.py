"""
Cell grid primitives shared by every generation phase.

A cell map is a 2D ``numpy`` integer array indexed ``[x, y]`` whose values are
owning province ids. The same claim/frontier machinery drives the coarse
center-placement grid and the fine province grid.
"""

from typing import Iterator, List, NamedTuple, Set

import numpy as np

from .alea_prng import AleaPRNG
from .hex_geometry import Cell, hex_neighbors

# Cell id sentinels
WATER = 0  # unassigned; becomes a lake or ocean after repair
DEEP_OCEAN = -1


class Bounds(NamedTuple):
    """Half-open rectangle ``[x_min, x_max) x [y_min, y_max)`` of usable cells."""

    x_min: int
    y_min: int
    x_max: int
    y_max: int

    @classmethod
    def playable(cls, width: int, height: int) -> "Bounds":
        """Fine-grid area: every cell except the one-cell frame around the map."""
        return cls(1, 1, width - 1, height - 1)

    @classmethod
    def coarse(cls, width: int, height: int) -> "Bounds":
        """Coarse-grid area: the first row and column are never used."""
        return cls(1, 1, width, height)

    def contains(self, x: int, y: int) -> bool:
        return self.x_min <= x < self.x_max and self.y_min <= y < self.y_max

    def is_edge(self, x: int, y: int) -> bool:
        """Whether (x, y) lies on the outermost ring of this area."""
        return self.contains(x, y) and (
            x in (self.x_min, self.x_max - 1) or y in (self.y_min, self.y_max - 1)
        )

    def cells(self) -> Iterator[Cell]:
        """Iterate cells column by column."""
        for x in range(self.x_min, self.x_max):
            for y in range(self.y_min, self.y_max):
                yield x, y


class Frontier:
    """Ordered set of candidate cells bordering a territory."""

    def __init__(self) -> None:
        self._cells: List[Cell] = []
        self._members: Set[Cell] = set()

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._members

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def add(self, cell: Cell) -> bool:
        if cell in self._members:
            return False
        self._cells.append(cell)
        self._members.add(cell)
        return True

    def pop_random(self, prng: AleaPRNG) -> Cell:
        """Remove and return a uniformly chosen cell."""
        cell = self._cells.pop(prng.pick_index(len(self._cells)))
        self._members.discard(cell)
        return cell

    def clear(self) -> None:
        self._cells.clear()
        self._members.clear()


def count_owned_neighbors(
    cell_map: np.ndarray, x: int, y: int, owner: int, bounds: Bounds
) -> int:
    """Count hex neighbors of (x, y) owned by ``owner``."""
    return sum(
        1
        for nx, ny in hex_neighbors(x, y)
        if bounds.contains(nx, ny) and cell_map[nx, ny] == owner
    )


def claim_cell(
    cell_map: np.ndarray,
    x: int,
    y: int,
    owner: int,
    frontier: Frontier,
    bounds: Bounds,
    strict: bool = False,
) -> bool:
    """
    Mark a cell as owned and extend the owner's frontier.

    Args:
        cell_map: Grid to modify in place
        x: Column of the cell to claim
        y: Row of the cell to claim
        owner: Positive id written into the grid
        frontier: Owner's frontier, extended with unclaimed neighbors
        bounds: Usable area of the grid
        strict: Only add neighbors that already touch at least two owned cells

    Returns:
        False if the cell was already owned by a province, True otherwise
    """
    if cell_map[x, y] > 0:
        return False

    cell_map[x, y] = owner
    for nx, ny in hex_neighbors(x, y):
        if not bounds.contains(nx, ny) or cell_map[nx, ny] > 0:
            continue
        if strict and count_owned_neighbors(cell_map, nx, ny, owner, bounds) < 2:
            continue
        frontier.add((nx, ny))
    return True
