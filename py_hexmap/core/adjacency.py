"""
Province adjacency graph and all-pairs distances.

Distances are measured in province hops: direct neighbors are 1 apart, and two
provinces with no connecting path are ``UNREACHABLE`` apart. The graph is built
in two phases, collecting every direct border from the cell map and then
relaxing all pairs at once. Borders discovered later (while repairing the map)
are folded in incrementally.
"""

from typing import List, Set, Tuple

import numpy as np
import structlog

from .cell_map import Bounds
from .errors import AdjacencyError, ProvinceIdError
from .hex_geometry import hex_neighbors

logger = structlog.get_logger()

# Larger than any real distance; the sum of two of these still fits in int64
UNREACHABLE = int(np.iinfo(np.int32).max)


class AdjacencyGraph:
    """Borders between provinces and the matrix of distances between them."""

    def __init__(self, province_count: int):
        self.province_count = province_count
        self.distances = np.full(
            (province_count, province_count), UNREACHABLE, dtype=np.int64
        )
        np.fill_diagonal(self.distances, 0)
        self.edges: Set[Tuple[int, int]] = set()

    @classmethod
    def from_cell_map(
        cls, cell_map: np.ndarray, bounds: Bounds, province_count: int
    ) -> "AdjacencyGraph":
        """
        Build the graph of a finished cell map.

        Args:
            cell_map: Grid of province ids
            bounds: Playable area of the grid
            province_count: Number of provinces N; ids must lie in [1, N]

        Returns:
            Graph with all direct borders and relaxed distances
        """
        graph = cls(province_count)
        for x, y in bounds.cells():
            if cell_map[x, y] > 0:
                graph.scan_cell(cell_map, x, y, bounds)
        graph.relax()
        logger.info(
            f"Found {len(graph.edges)} borders between {province_count} provinces"
        )
        return graph

    def _index(self, province_id: int) -> int:
        if not 1 <= province_id <= self.province_count:
            raise ProvinceIdError(province_id, self.province_count)
        return province_id - 1

    def scan_cell(
        self,
        cell_map: np.ndarray,
        x: int,
        y: int,
        bounds: Bounds,
        incremental: bool = False,
    ) -> bool:
        """
        Record borders between the owner of (x, y) and its foreign neighbors.

        Args:
            cell_map: Grid of province ids
            x: Column of a land cell
            y: Row of a land cell
            bounds: Playable area of the grid
            incremental: Update distances right away for every new border

        Returns:
            True if the cell touches at least one other province
        """
        owner = int(cell_map[x, y])
        found = False
        for nx, ny in hex_neighbors(x, y):
            if not bounds.contains(nx, ny):
                continue
            other = int(cell_map[nx, ny])
            if other > 0 and other != owner:
                if incremental:
                    self.connect(owner, other)
                else:
                    self.mark_neighbors(owner, other)
                found = True
        return found

    def mark_neighbors(self, first: int, second: int) -> bool:
        """
        Record a direct border without touching other distances.

        Returns:
            True if the border is new

        Raises:
            AdjacencyError: For a self-border or an id outside [1, N]
        """
        if first == second:
            logger.error(f"Province {first} can't be its own neighbor")
            raise AdjacencyError(f"Province {first} can't be its own neighbor")

        n = self.province_count
        if not (1 <= first <= n and 1 <= second <= n):
            message = (
                f"Expected both {first} and {second} be greater than zero "
                f"and no greater than {n}"
            )
            logger.error(message)
            raise AdjacencyError(message)

        edge = (min(first, second), max(first, second))
        if edge in self.edges:
            return False

        self.edges.add(edge)
        i, j = first - 1, second - 1
        self.distances[i, j] = 1
        self.distances[j, i] = 1
        return True

    def relax(self) -> None:
        """Run all-pairs shortest paths over the current distances."""
        d = self.distances
        # sums through an unreachable pair exceed the sentinel, so minimum drops them
        for k in range(self.province_count):
            np.minimum(d, d[:, k : k + 1] + d[k : k + 1, :], out=d)

    def connect(self, first: int, second: int) -> bool:
        """
        Record a border and update every distance it shortens.

        Adding one unit edge (a, b) can only shorten paths that use it, so
        ``d[i, k] = min(d[i, k], d[i, a] + 1 + d[b, k], d[i, b] + 1 + d[a, k])``
        brings an already relaxed matrix up to date.

        Returns:
            True if the border is new
        """
        if not self.mark_neighbors(first, second):
            return False

        a, b = first - 1, second - 1
        d = self.distances
        through_ab = d[:, a : a + 1] + 1 + d[b : b + 1, :]
        through_ba = d[:, b : b + 1] + 1 + d[a : a + 1, :]
        np.minimum(d, np.minimum(through_ab, through_ba), out=d)
        return True

    def distance(self, first: int, second: int) -> int:
        return int(self.distances[self._index(first), self._index(second)])

    def is_reachable(self, first: int, second: int) -> bool:
        return self.distance(first, second) < UNREACHABLE

    def distances_from(self, province_id: int) -> List[int]:
        """Distances from one province to every province, in id order."""
        return [int(d) for d in self.distances[self._index(province_id)]]

    def neighbors(self, province_id: int) -> List[int]:
        """Ids of provinces sharing a border with the given one."""
        row = self.distances[self._index(province_id)]
        return [int(i) + 1 for i in np.flatnonzero(row == 1)]

    def unreachable_from(self, province_id: int) -> List[int]:
        row = self.distances[self._index(province_id)]
        return [int(i) + 1 for i in np.flatnonzero(row >= UNREACHABLE)]

    def validate(self) -> None:
        """
        Check the matrix invariants.

        Raises:
            AdjacencyError: If the matrix is not square, symmetric and
                zero-diagonal, or breaks the triangle inequality for a
                finite triple
        """
        d = self.distances
        if d.ndim != 2 or d.shape[0] != d.shape[1]:
            raise AdjacencyError(f"Distance matrix is not square: {d.shape}")
        if not np.array_equal(d, d.T):
            raise AdjacencyError("Distance matrix is not symmetric")
        if np.any(np.diagonal(d) != 0):
            raise AdjacencyError("Distance matrix has a non-zero diagonal")

        finite = d < UNREACHABLE
        for j in range(d.shape[0]):
            via = d[:, j : j + 1] + d[j : j + 1, :]
            both = finite[:, j : j + 1] & finite[j : j + 1, :]
            if np.any(both & (d > via)):
                raise AdjacencyError(
                    f"Triangle inequality broken through province {j + 1}"
                )
