"""End-to-end tests for hex map generation."""

import random

import pytest
import numpy as np
from py_hexmap.config import Settings
from py_hexmap.core import MapConfig, generate_map
from py_hexmap.core.adjacency import adjacency_edges, build_adjacency
from py_hexmap.core.random_source import MinStdRandom
from py_hexmap.core.terrain import WATER


def assert_map_invariants(hex_map):
    """Check totality, adjacency well-formedness and colouring validity."""
    config = hex_map.config
    n_cells = config.width * config.height

    assert hex_map.regions.shape == (n_cells,)
    assert np.all((hex_map.regions >= 0) & (hex_map.regions < config.num_regions))
    assert hex_map.region_sizes().sum() == n_cells

    assert len(hex_map.adjacency) == config.num_regions
    for region, neighbors in enumerate(hex_map.adjacency):
        assert region not in neighbors
        assert len(neighbors) == len(set(neighbors))

    terrain = hex_map.terrain.terrain
    assert len(terrain) == config.num_regions
    assert np.all((terrain >= 0) & (terrain < config.num_terrains))
    for a, b in adjacency_edges(hex_map.adjacency):
        if terrain[a] == terrain[b]:
            assert max(a, b) in hex_map.terrain.clashes


class TestMapConfig:
    """Test map configuration."""

    def test_defaults(self):
        """Test the standard map size."""
        config = MapConfig()
        assert (config.width, config.height) == (16, 9)
        assert config.num_regions == 18
        assert config.num_terrains == 6
        assert config.relaxation_rounds == 4

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"height": -1},
        {"num_regions": 0},
        {"num_terrains": 0},
        {"num_terrains": 7},
        {"relaxation_rounds": -1},
    ])
    def test_invalid(self, kwargs):
        """Test that invalid configurations are rejected."""
        with pytest.raises(ValueError):
            MapConfig(**kwargs)

    def test_from_settings(self):
        """Test building a config from Settings."""
        settings = Settings(grid_width=10, grid_height=6, num_regions=8, num_terrains=4, relaxation_rounds=2)
        config = MapConfig.from_settings(settings)
        assert config == MapConfig(width=10, height=6, num_regions=8, num_terrains=4, relaxation_rounds=2)


class TestGenerateMap:
    """Test the full generation pipeline."""

    def test_requires_randomness(self):
        """Test that the generator never falls back to the clock."""
        with pytest.raises(ValueError):
            generate_map(MapConfig())

    def test_reproducibility(self):
        """Test that the same seed produces identical maps."""
        map1 = generate_map(MapConfig(), seed="test_seed")
        map2 = generate_map(MapConfig(), seed="test_seed")

        np.testing.assert_array_equal(map1.regions, map2.regions)
        assert map1.adjacency == map2.adjacency
        np.testing.assert_array_equal(map1.terrain.terrain, map2.terrain.terrain)
        assert map1.terrain.clashes == map2.terrain.clashes

    def test_injected_random_source(self):
        """Test that an injected source is used instead of a seed."""
        map1 = generate_map(rng=MinStdRandom(77))
        map2 = generate_map(seed=77)
        np.testing.assert_array_equal(map1.regions, map2.regions)

        stdlib_map = generate_map(rng=random.Random(77))
        assert_map_invariants(stdlib_map)

    def test_different_seeds(self):
        """Test that different seeds produce different maps."""
        map1 = generate_map(seed=1)
        map2 = generate_map(seed=2)
        assert not np.array_equal(map1.regions, map2.regions)

    @pytest.mark.parametrize("seed", range(100))
    def test_invariants_across_seeds(self, seed):
        """Test structural invariants for many seeds."""
        assert_map_invariants(generate_map(seed=seed))

    @pytest.mark.parametrize("config", [
        MapConfig(width=7, height=5, num_regions=4),
        MapConfig(width=24, height=14, num_regions=30),
        MapConfig(width=3, height=3, num_regions=12, num_terrains=3),
        MapConfig(width=1, height=1, num_regions=3),
        MapConfig(width=10, height=10, num_regions=10, num_terrains=2, relaxation_rounds=0),
    ])
    def test_other_grid_sizes(self, config):
        """Test that the pipeline works beyond the standard size."""
        for seed in range(5):
            assert_map_invariants(generate_map(config, seed=seed))

    def test_adjacency_matches_regions(self):
        """Test that the stored adjacency is the one built from the regions."""
        hex_map = generate_map(seed="adjacency")
        assert hex_map.adjacency == build_adjacency(hex_map.grid, hex_map.regions, 18)


class TestHexMapAccessors:
    """Test the lookups a renderer uses."""

    @pytest.fixture
    def hex_map(self):
        return generate_map(seed="accessors")

    def test_region_and_terrain_lookups(self, hex_map):
        """Test cell -> region -> terrain lookups."""
        for cell in range(hex_map.grid.size):
            region = hex_map.region_of(cell)
            assert region == hex_map.regions[cell]
            assert hex_map.cell_terrain(cell) == hex_map.terrain_of(region)
            assert hex_map.is_water(region) == (hex_map.terrain_of(region) == WATER)

    @pytest.mark.parametrize("accessor", ["region_of", "cell_terrain", "neighbors_of"])
    def test_cell_out_of_range(self, hex_map, accessor):
        """Test that cell lookups reject ids outside the grid."""
        for cell in (-1, hex_map.grid.size):
            with pytest.raises(IndexError):
                getattr(hex_map, accessor)(cell)

    @pytest.mark.parametrize("accessor", ["terrain_of", "adjacency_of", "is_water", "region_cells"])
    def test_region_out_of_range(self, hex_map, accessor):
        """Test that region lookups reject unknown ids instead of wrapping."""
        for region in (-1, hex_map.config.num_regions):
            with pytest.raises(IndexError):
                getattr(hex_map, accessor)(region)

    def test_outputs_read_only(self, hex_map):
        """Test that the region and terrain arrays cannot be modified."""
        with pytest.raises(ValueError):
            hex_map.regions[0] = 1
        with pytest.raises(ValueError):
            hex_map.terrain.terrain[0] = 1

    def test_neighbors_of(self, hex_map):
        """Test that cell neighbors come from the grid."""
        assert hex_map.neighbors_of(0) == hex_map.grid.neighbors(0)

    def test_adjacency_of_is_a_copy(self, hex_map):
        """Test that callers cannot mutate the stored adjacency."""
        neighbors = hex_map.adjacency_of(0)
        neighbors.append(99)
        assert 99 not in hex_map.adjacency[0]

    def test_region_cells(self, hex_map):
        """Test that region cell lists partition the grid."""
        cells = []
        for region in range(hex_map.config.num_regions):
            owned = hex_map.region_cells(region)
            assert len(owned) == hex_map.region_sizes()[region]
            cells.extend(owned)
        assert sorted(cells) == list(range(hex_map.grid.size))

    def test_empty_regions(self, hex_map):
        """Test that empty regions own no cells and have no neighbors."""
        for region in hex_map.empty_regions():
            assert hex_map.region_cells(region) == []
            assert hex_map.adjacency_of(region) == []

    def test_format_adjacency(self, hex_map):
        """Test the adjacency dump format."""
        lines = hex_map.format_adjacency().split("\n")
        assert len(lines) == 18
        for region, line in enumerate(lines):
            expected = f"{region}: " + "".join(f"{n}," for n in hex_map.adjacency[region])
            assert line == expected

    def test_summary(self, hex_map):
        """Test generation statistics."""
        summary = hex_map.summary()
        assert summary["seed"] == "accessors"
        assert summary["cells"] == 144
        assert summary["regions"] == 18
        assert summary["empty_regions"] == len(hex_map.empty_regions())
        assert summary["terrain_clashes"] == hex_map.terrain.clash_count
        assert summary["adjacent_pairs"] == len(adjacency_edges(hex_map.adjacency))

    def test_coastline_cached(self, hex_map):
        """Test that the coastline is computed once."""
        assert hex_map.coastline() is hex_map.coastline()
        assert len(hex_map.coastline()) == hex_map.grid.size
