"""Exceptions raised by map generation."""


class MapGenerationError(RuntimeError):
    """Base class for defects that stop a generation run."""


class MapConfigurationError(MapGenerationError):
    """Inputs (dimensions, templates) cannot produce a meaningful map."""


class ProvinceIdError(MapGenerationError, IndexError):
    """A province id outside ``[1, N]`` reached a bounds-checked boundary."""

    def __init__(self, province_id: int, province_count: int):
        self.province_id = province_id
        self.province_count = province_count
        super().__init__(
            f"Province id {province_id} is outside [1, {province_count}]"
        )


class AdjacencyError(MapGenerationError):
    """An invalid border was recorded between provinces."""


class CapitalPlacementError(MapConfigurationError):
    """No candidate province exists for a major faction capital (map too small for the layout)."""
