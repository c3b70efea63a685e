"""
Hex map generation pipeline.

Runs the stages in order, each consuming the previous stage's output:
grid coordinates -> region map -> region adjacency -> terrain per region.
The resulting HexMap is what a renderer reads to paint tiles and
shoreline overlays.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

import numpy as np
import structlog

from .adjacency import adjacency_edges, build_adjacency
from .coastline import coastline_directions
from .hex_grid import CellIndex, Direction, HexCoord, HexGrid
from .random_source import MinStdRandom
from .regions import RELAXATION_ROUNDS, RegionId, RegionPartitioner
from .terrain import WATER, TerrainAssignment, TerrainType, assign_terrain

logger = structlog.get_logger()


@dataclass(frozen=True)
class MapConfig:
    """Configuration for map generation."""

    width: int = 16
    height: int = 9
    num_regions: int = 18
    num_terrains: int = 6
    relaxation_rounds: int = RELAXATION_ROUNDS

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.width}x{self.height}")
        if self.num_regions < 1:
            raise ValueError(f"Need at least one region, got {self.num_regions}")
        if not 1 <= self.num_terrains <= len(TerrainType):
            raise ValueError(f"num_terrains must be in 1..{len(TerrainType)}, got {self.num_terrains}")
        if self.relaxation_rounds < 0:
            raise ValueError(f"Relaxation rounds cannot be negative, got {self.relaxation_rounds}")

    @classmethod
    def from_settings(cls, settings) -> "MapConfig":
        """Build a config from application Settings."""
        return cls(
            width=settings.grid_width,
            height=settings.grid_height,
            num_regions=settings.num_regions,
            num_terrains=settings.num_terrains,
            relaxation_rounds=settings.relaxation_rounds,
        )


@dataclass
class HexMap:
    """A generated map: region per cell, adjacency and terrain per region."""

    config: MapConfig
    grid: HexGrid
    regions: np.ndarray  # regions[cell] = region id
    centers: List[Optional[HexCoord]]
    adjacency: List[List[int]]  # adjacency[region] = neighboring regions
    terrain: TerrainAssignment
    seed: Optional[Union[int, str]] = None
    _coastline: Optional[List[List[Direction]]] = field(default=None, repr=False)

    def _check_cell(self, cell: CellIndex) -> None:
        if not 0 <= cell < self.grid.size:
            raise IndexError(f"Cell index {cell} out of range for {self.grid.size} cells")

    def _check_region(self, region: RegionId) -> None:
        if not 0 <= region < self.config.num_regions:
            raise IndexError(f"Region id {region} out of range for {self.config.num_regions} regions")

    def region_of(self, cell: CellIndex) -> RegionId:
        self._check_cell(cell)
        return RegionId(int(self.regions[cell]))

    def neighbors_of(self, cell: CellIndex) -> List[CellIndex]:
        return self.grid.neighbors(cell)

    def adjacency_of(self, region: RegionId) -> List[RegionId]:
        self._check_region(region)
        return list(self.adjacency[region])

    def terrain_of(self, region: RegionId) -> TerrainType:
        self._check_region(region)
        return TerrainType(int(self.terrain.terrain[region]))

    def cell_terrain(self, cell: CellIndex) -> TerrainType:
        """Terrain of the region a cell belongs to."""
        return self.terrain_of(self.region_of(cell))

    def is_water(self, region: RegionId) -> bool:
        return self.terrain_of(region) == WATER

    def region_cells(self, region: RegionId) -> List[CellIndex]:
        """Cell indices owned by a region."""
        self._check_region(region)
        return [int(i) for i in np.flatnonzero(self.regions == region)]

    def region_sizes(self) -> np.ndarray:
        return np.bincount(self.regions, minlength=self.config.num_regions)

    def empty_regions(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(self.region_sizes() == 0)]

    def coastline(self) -> List[List[Direction]]:
        """Shoreline directions per cell, computed on first use."""
        if self._coastline is None:
            self._coastline = coastline_directions(self.grid, self.regions, self.terrain.terrain)
        return self._coastline

    def format_adjacency(self) -> str:
        """One "region: n1,n2," line per region, in region order."""
        lines = []
        for region, neighbors in enumerate(self.adjacency):
            lines.append(f"{region}: " + "".join(f"{n}," for n in neighbors))
        return "\n".join(lines)

    def summary(self) -> Dict[str, object]:
        """Generation statistics, suitable for structured logging."""
        terrain_counts = np.bincount(self.terrain.terrain, minlength=self.config.num_terrains)
        return {
            "seed": self.seed,
            "cells": self.grid.size,
            "regions": self.config.num_regions,
            "empty_regions": len(self.empty_regions()),
            "adjacent_pairs": len(adjacency_edges(self.adjacency)),
            "terrain_clashes": self.terrain.clash_count,
            "water_regions": int(terrain_counts[WATER]) if self.config.num_terrains > WATER else 0,
        }


def generate_map(
    config: Optional[MapConfig] = None,
    rng=None,
    seed: Optional[Union[int, str]] = None,
) -> HexMap:
    """
    Generate a complete hex map.

    Args:
        config: Map configuration (defaults to the standard 16x9 map)
        rng: Random source with a randrange(stop) method
        seed: Seed for a MinStdRandom, used when rng is not given

    Returns:
        HexMap with regions, adjacency and terrain
    """
    config = config or MapConfig()
    if rng is None:
        if seed is None:
            raise ValueError("generate_map() needs either a random source or a seed")
        rng = MinStdRandom(seed)

    logger.info(
        "Generating hex map",
        width=config.width,
        height=config.height,
        num_regions=config.num_regions,
        num_terrains=config.num_terrains,
        seed=seed,
    )

    grid = HexGrid(config.width, config.height)
    partition = RegionPartitioner(grid, config.num_regions, config.relaxation_rounds).run(rng)
    adjacency = build_adjacency(grid, partition.regions, config.num_regions)
    terrain = assign_terrain(adjacency, config.num_terrains)
    partition.regions.setflags(write=False)
    terrain.terrain.setflags(write=False)

    hex_map = HexMap(
        config=config,
        grid=grid,
        regions=partition.regions,
        centers=partition.centers,
        adjacency=adjacency,
        terrain=terrain,
        seed=seed,
    )

    logger.info("Hex map generated", **hex_map.summary())
    return hex_map
