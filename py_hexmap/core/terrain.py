"""
Terrain assignment for map regions.

Regions are coloured greedily in ascending id order: each region takes
the lowest terrain not already used by a neighbor that has been assigned.
When every terrain is taken the region falls back to terrain 0 and is
recorded as a clash, so callers can tell the colouring is not proper.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

import numpy as np
import structlog

logger = structlog.get_logger()


class TerrainType(IntEnum):
    """Terrain categories, in tile order."""

    GRASS = 0
    DIRT = 1
    DESERT = 2
    WATER = 3
    SWAMP = 4
    SNOW = 5


# Terrain names for display
TERRAIN_NAMES = {
    TerrainType.GRASS: "Grass",
    TerrainType.DIRT: "Dirt",
    TerrainType.DESERT: "Desert",
    TerrainType.WATER: "Water",
    TerrainType.SWAMP: "Swamp",
    TerrainType.SNOW: "Snow",
}

WATER = TerrainType.WATER
FALLBACK_TERRAIN = TerrainType.GRASS


@dataclass
class TerrainAssignment:
    """Terrain per region plus the regions that could not avoid a clash."""

    terrain: np.ndarray  # terrain[region] = terrain id
    clashes: List[int] = field(default_factory=list)

    @property
    def clash_count(self) -> int:
        return len(self.clashes)

    @property
    def has_clashes(self) -> bool:
        return bool(self.clashes)


def assign_terrain(adjacency: List[List[int]], num_terrains: int = len(TerrainType)) -> TerrainAssignment:
    """
    Assign a terrain type to each region using the given adjacency list.

    Args:
        adjacency: adjacency[r] = regions bordering region r
        num_terrains: Number of terrain ids to choose from

    Returns:
        TerrainAssignment with one terrain id per region
    """
    if not 1 <= num_terrains <= len(TerrainType):
        raise ValueError(f"num_terrains must be in 1..{len(TerrainType)}, got {num_terrains}")

    num_regions = len(adjacency)
    terrain = np.full(num_regions, -1, dtype=np.int8)
    clashes = []

    for region in range(num_regions):
        # Terrains already taken by assigned neighbors
        taken = set()
        for neighbor in adjacency[region]:
            if not 0 <= neighbor < num_regions:
                raise ValueError(f"Region {region} lists unknown neighbor {neighbor}")
            if terrain[neighbor] > -1:
                taken.add(int(terrain[neighbor]))

        free = [t for t in range(num_terrains) if t not in taken]
        if free:
            terrain[region] = free[0]
        else:
            terrain[region] = FALLBACK_TERRAIN
            clashes.append(region)
            logger.warning("Terrain clash", region=region, neighbors=len(adjacency[region]))

    return TerrainAssignment(terrain=terrain, clashes=clashes)
