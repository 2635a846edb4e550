"""
Province growth from seed cells.

Every province grows outward from its center, one random frontier cell per
round, until it reaches its target size or runs out of frontier. Provinces grow
in lockstep so that no single province can swallow its neighbors.
"""

import structlog

from .cell_map import claim_cell
from .context import MapContext, ProvinceSeed

logger = structlog.get_logger()


class GrowthEngine:
    """Grows all provinces of a context to their target sizes."""

    def __init__(self, context: MapContext):
        """
        Initialize growth engine.

        Args:
            context: Generation context with placed province centers
        """
        self.context = context
        self.options = context.options
        self.prng = context.prng

    def assign_targets(self) -> int:
        """
        Draw a target cell count for every province.

        Provinces centered away from the map edges get a bonus, since edge
        provinces cannot grow into the impassable border.

        Returns:
            The largest target, which bounds the number of growth rounds
        """
        base = self.options.nominal_province_size
        largest = 0
        for seed in self.context.provinces:
            target = base + self.prng.uniform_int(-4, 6)
            if self._is_interior(seed):
                target += self.prng.uniform_int(4, 10)
            seed.target_cells = target
            largest = max(largest, target)
        return largest

    def _is_interior(self, seed: ProvinceSeed) -> bool:
        margin = self.options.edge_margin_factor * self.options.radius
        x, y = seed.center
        return (
            margin < x < self.context.width - margin
            and margin < y < self.context.height - margin
        )

    def grow(self) -> None:
        """Run synchronized growth rounds until every province stops."""
        rounds = self.assign_targets()
        logger.info(f"Growing {len(self.context.provinces)} provinces", rounds=rounds)

        for _ in range(1, rounds):
            for seed in self.context.provinces:
                if seed.is_complete or len(seed.frontier) == 0:
                    continue
                if self.grow_once(seed):
                    seed.cell_count += 1

        stunted = [s.id for s in self.context.provinces if not s.is_complete]
        if stunted:
            logger.debug("Provinces stopped below target", provinces=stunted)

    def grow_once(self, seed: ProvinceSeed) -> bool:
        """
        Pop one random frontier cell and claim it if it is still free.

        The popped cell leaves the frontier either way; a cell taken by a faster
        neighbor is simply lost to this province.

        Returns:
            True if a cell was claimed
        """
        x, y = seed.frontier.pop_random(self.prng)
        return claim_cell(
            self.context.cell_map,
            x,
            y,
            seed.id,
            seed.frontier,
            self.context.bounds,
        )
