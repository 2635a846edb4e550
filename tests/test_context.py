"""Tests for map options and the generation context."""

import pytest
from pydantic import ValidationError

from py_hexmap.core.alea_prng import AleaPRNG
from py_hexmap.core.context import MapContext, MapOptions, ProvinceArena
from py_hexmap.core.errors import MapGenerationError, ProvinceIdError


class TestMapOptions:
    """Test map options configuration."""

    def test_default_options(self):
        """Test default option values."""
        options = MapOptions()
        assert options.width == 48
        assert options.height == 42
        assert options.radius == 3
        assert options.land_fraction == 0.6
        assert options.max_placement_failures == 10
        assert options.island_connections == 3
        assert options.legacy_selection is True

    def test_nominal_province_size(self):
        """A hex of radius r holds 3r(r+1)+1 cells unless overridden."""
        assert MapOptions().nominal_province_size == 37
        assert MapOptions(radius=1).nominal_province_size == 7
        assert MapOptions(cells_per_province=58).nominal_province_size == 58

    def test_coarse_shape(self):
        """Test coarse grid dimensions."""
        assert MapOptions().coarse_shape == (8, 7)
        assert MapOptions(width=72, height=60).coarse_shape == (12, 10)
        assert MapOptions(width=8, height=8, radius=10).coarse_shape == (1, 1)

    def test_invalid_options(self):
        """Test out-of-range options are rejected."""
        with pytest.raises(ValidationError):
            MapOptions(width=4)
        with pytest.raises(ValidationError):
            MapOptions(radius=0)
        with pytest.raises(ValidationError):
            MapOptions(land_fraction=0.0)

    def test_options_are_frozen(self):
        """Test options cannot be changed after creation."""
        options = MapOptions()
        with pytest.raises(ValidationError):
            options.width = 100


class TestProvinceArena:
    """Test province records addressed by id."""

    def test_ids_start_at_one(self):
        """Test ids are assigned from 1 in creation order."""
        arena = ProvinceArena()
        first = arena.create((5, 5))
        second = arena.create((9, 9))
        assert first.id == 1
        assert second.id == 2
        assert list(arena.ids()) == [1, 2]
        assert arena[2] is second

    def test_out_of_range_id(self):
        """Test lookups outside [1, N] raise ProvinceIdError."""
        arena = ProvinceArena()
        arena.create((5, 5))
        for bad_id in (0, 2, -1):
            with pytest.raises(ProvinceIdError) as exc_info:
                arena[bad_id]
            assert exc_info.value.province_id == bad_id

    def test_id_error_is_index_error(self):
        """Callers catching IndexError or MapGenerationError both see it."""
        arena = ProvinceArena()
        with pytest.raises(IndexError):
            arena.index_of(1)
        with pytest.raises(MapGenerationError, match=r"outside \[1, 0\]"):
            arena.index_of(1)

    def test_new_seed_state(self):
        """Test a new province starts with its center cell only."""
        seed = ProvinceArena().create((3, 4))
        assert seed.cell_count == 1
        assert len(seed.frontier) == 0
        seed.target_cells = 1
        assert seed.is_complete


class TestMapContext:
    """Test context buffers."""

    def test_create(self):
        """Test a new context starts with empty buffers."""
        context = MapContext.create(MapOptions(), AleaPRNG("context"))
        assert context.cell_map.shape == (48, 42)
        assert context.coarse_map.shape == (8, 7)
        assert not context.cell_map.any()
        assert len(context.provinces) == 0
        assert context.graph is None

    def test_world_center(self):
        """Test the world center is province 1's center."""
        context = MapContext.create(MapOptions(), AleaPRNG("context"))
        context.provinces.create((24, 21))
        context.provinces.create((30, 21))
        assert context.world_center == (24, 21)

    def test_bounds(self):
        """Test the fine and coarse usable areas."""
        context = MapContext.create(MapOptions(), AleaPRNG("context"))
        assert context.bounds.contains(1, 1)
        assert context.bounds.contains(46, 40)
        assert not context.bounds.contains(47, 40)
        assert context.coarse_bounds.contains(7, 6)
