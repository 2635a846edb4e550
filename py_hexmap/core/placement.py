"""
Province center placement.

Centers are spread over a low-resolution coarse grid first, one coarse cell per
province, so that provinces end up roughly evenly spaced. Each claimed coarse
cell is then projected onto the fine grid with a small random jitter.

Process:
1. estimate_province_count() - desired count with +/- 5% variance
2. place the world center (province #1) at the middle of the coarse grid
3. grow the set of claimed coarse cells one random adjacent cell at a time
4. stop after too many consecutive failures; the placed count is final
"""

from typing import Optional

import structlog

from .alea_prng import AleaPRNG
from .cell_map import claim_cell
from .context import MapContext, MapOptions
from .hex_geometry import Cell

logger = structlog.get_logger()


def estimate_province_count(options: MapOptions, prng: AleaPRNG) -> int:
    """
    Estimate how many provinces the land area can hold.

    The estimate is ``area * land_fraction / cells_per_province`` scaled by a
    factor drawn from ``0.95, 0.96, ..., 1.04``. It is not capped here.

    Args:
        options: Map generation options
        prng: Random source

    Returns:
        Desired number of provinces
    """
    variance = 0.95 + prng.uniform_int(0, 10) * 0.01
    area = options.width * options.height
    return int(area * options.land_fraction / options.nominal_province_size * variance)


class CenterPlacer:
    """Places province centers using the coarse grid of the context."""

    def __init__(self, context: MapContext):
        self.context = context
        self.options = context.options
        self.prng = context.prng

        coarse_x, coarse_y = context.coarse_map.shape
        self.coarse_mid = (int(0.5 * coarse_x), int(0.5 * coarse_y))
        self.fine_mid = (int(0.5 * context.width), int(0.5 * context.height))

    @property
    def capacity(self) -> int:
        """Most provinces the coarse grid can space out."""
        coarse_x, coarse_y = self.context.coarse_map.shape
        return coarse_x * coarse_y

    def place(self) -> int:
        """
        Place province centers and claim their seed cells.

        Returns:
            Number of provinces actually placed
        """
        desired = min(estimate_province_count(self.options, self.prng), self.capacity)
        self.context.desired_provinces = desired
        logger.info(f"The world will have {desired} provinces")

        provinces = self.context.provinces
        failures = 0
        while len(provinces) < desired and failures < self.options.max_placement_failures:
            center = self._select_center(len(provinces) + 1)
            if center is None:
                failures += 1
                continue

            seed = provinces.create(center)
            claim_cell(
                self.context.cell_map,
                center[0],
                center[1],
                seed.id,
                seed.frontier,
                self.context.bounds,
            )
            logger.debug("Province center placed", province=seed.id, center=center)
            failures = 0

        if len(provinces) < desired:
            logger.warning(
                f"The number of provinces changes from {desired} to {len(provinces)}"
            )
        return len(provinces)

    def _select_center(self, province_id: int) -> Optional[Cell]:
        """Claim a coarse cell for the province and project it to the fine grid."""
        if province_id == 1:
            coarse = self.coarse_mid
            claim_cell(
                self.context.coarse_map,
                coarse[0],
                coarse[1],
                province_id,
                self.context.coarse_frontier,
                self.context.coarse_bounds,
            )
        else:
            coarse = self._claim_adjacent_coarse_cell(province_id)
            if coarse is None:
                return None

        center = self._project(coarse)
        x, y = center
        if not self.context.bounds.contains(x, y) or self.context.cell_map[x, y] > 0:
            logger.debug("Projected center rejected", province=province_id, center=center)
            return None
        return center

    def _claim_adjacent_coarse_cell(self, province_id: int) -> Optional[Cell]:
        frontier = self.context.coarse_frontier
        coarse_map = self.context.coarse_map
        while len(frontier) > 0:
            x, y = frontier.pop_random(self.prng)
            if claim_cell(
                coarse_map, x, y, province_id, frontier, self.context.coarse_bounds
            ):
                return x, y
        return None

    def _project(self, coarse: Cell) -> Cell:
        step = 2 * self.options.radius
        jitter = self.options.center_jitter
        return (
            step * (coarse[0] - self.coarse_mid[0])
            + self.fine_mid[0]
            + self.prng.uniform_int(-jitter, jitter + 1),
            step * (coarse[1] - self.coarse_mid[1])
            + self.fine_mid[1]
            + self.prng.uniform_int(-jitter, jitter + 1),
        )
