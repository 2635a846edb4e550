"""
Topological repair of a grown province map.

This module handles:
- Connecting island provinces to the mainland by growing them inward
- Deepening the ocean: water reachable from the map edge becomes ``DEEP_OCEAN``
- Drying lakes: water left enclosed by land is handed to a bordering province
"""

from collections import deque
from dataclasses import dataclass, field
from typing import List

import structlog

from .cell_map import DEEP_OCEAN, WATER, claim_cell
from .context import MapContext
from .errors import MapGenerationError
from .hex_geometry import Cell, cell_distance, hex_neighbors

logger = structlog.get_logger()


@dataclass
class RepairReport:
    """Summary of what a repair pass changed."""

    connected_islands: List[int] = field(default_factory=list)
    remaining_islands: List[int] = field(default_factory=list)
    ocean_cells: int = 0
    dried_cells: int = 0


class TopologyRepair:
    """Repairs islands, oceans and lakes of a context with a built graph."""

    def __init__(self, context: MapContext):
        if context.graph is None:
            raise MapGenerationError("Adjacency graph must be built before repair")
        self.context = context
        self.graph = context.graph
        self.prng = context.prng
        self.bounds = context.bounds

    def repair(self) -> RepairReport:
        """
        Run all repair steps in order.

        Returns:
            RepairReport describing the changes
        """
        report = RepairReport()

        logger.info("Connecting islands to the mainland")
        for province_id in self.context.provinces.ids():
            if province_id == 1 or self.graph.is_reachable(1, province_id):
                continue
            if self.connect_island(province_id) and self.graph.is_reachable(1, province_id):
                report.connected_islands.append(province_id)
        report.remaining_islands = self.graph.unreachable_from(1)
        if report.remaining_islands:
            logger.warning(
                "Provinces remain unreachable from the world center",
                provinces=report.remaining_islands,
            )

        report.ocean_cells = self.deepen_ocean()
        report.dried_cells = self.dry_lakes()
        logger.info(
            f"Repair marked {report.ocean_cells} ocean cells and dried {report.dried_cells} lake cells"
        )
        return report

    def connect_island(self, province_id: int) -> bool:
        """
        Grow an island province toward the world center until it touches others.

        Only frontier cells no farther from the world center than the
        province's own center are taken. Each claimed cell that borders a
        foreign province counts as one connection.

        Args:
            province_id: Province to connect

        Returns:
            True if the target number of connections was made, False if the
            frontier ran out first
        """
        logger.debug(f"Connecting province #{province_id} to the mainland")
        seed = self.context.provinces[province_id]
        world_center = self.context.world_center
        limit = cell_distance(world_center, seed.center)
        cell_map = self.context.cell_map

        connections = 0
        while connections < self.context.options.island_connections:
            cell = self._pop_inward_cell(seed.frontier, limit)
            if cell is None:
                return False

            x, y = cell
            claim_cell(cell_map, x, y, province_id, seed.frontier, self.bounds, strict=True)
            seed.cell_count += 1
            if self.graph.scan_cell(cell_map, x, y, self.bounds, incremental=True):
                connections += 1
        return True

    def _pop_inward_cell(self, frontier, limit: int):
        world_center = self.context.world_center
        cell_map = self.context.cell_map
        while len(frontier) > 0:
            x, y = frontier.pop_random(self.prng)
            if cell_map[x, y] > 0:
                continue
            if cell_distance(world_center, (x, y)) <= limit:
                return x, y
        return None

    def deepen_ocean(self) -> int:
        """
        Flood-fill water from the edges of the playable area.

        Returns:
            Number of cells marked as deep ocean
        """
        cell_map = self.context.cell_map
        queue = deque()
        for x, y in self.bounds.cells():
            if self.bounds.is_edge(x, y) and cell_map[x, y] == WATER:
                cell_map[x, y] = DEEP_OCEAN
                queue.append((x, y))

        marked = len(queue)
        while queue:
            x, y = queue.popleft()
            for nx, ny in hex_neighbors(x, y):
                if self.bounds.contains(nx, ny) and cell_map[nx, ny] == WATER:
                    cell_map[nx, ny] = DEEP_OCEAN
                    queue.append((nx, ny))
                    marked += 1
        return marked

    def dry_lakes(self) -> int:
        """
        Give every enclosed water cell to a random bordering province.

        Must run after ``deepen_ocean``: any cell still ``WATER`` then is
        landlocked. New borders created this way are added to the graph.

        Returns:
            Number of cells turned into land
        """
        cell_map = self.context.cell_map
        dried: List[Cell] = []
        for x, y in self.bounds.cells():
            if cell_map[x, y] != WATER:
                continue
            owners = [
                int(cell_map[nx, ny])
                for nx, ny in hex_neighbors(x, y)
                if self.bounds.contains(nx, ny) and cell_map[nx, ny] > 0
            ]
            if not owners:
                logger.error(f"Lake cell [{x}, {y}] has no land neighbors")
                continue
            cell_map[x, y] = self.prng.choice(owners)
            self.context.provinces[int(cell_map[x, y])].cell_count += 1
            dried.append((x, y))

        for x, y in dried:
            self.graph.scan_cell(cell_map, x, y, self.bounds, incremental=True)
        return len(dried)
