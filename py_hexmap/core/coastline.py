"""
Coastline detection for generated maps.

A renderer draws a shoreline overlay on every cell edge where water
meets non-water: water cells on edges bordering land, land cells on edges
bordering water. This module works out those edges per cell and
classifies cells the same way the feature markup does.
"""

from typing import List

import numpy as np
import structlog

from .hex_grid import Direction, HexGrid
from .terrain import WATER

logger = structlog.get_logger()

# Cell type constants
INLAND = 0
LAND_COAST = 1
WATER_COAST = -1
DEEP_WATER = -2


def _water_cells(grid: HexGrid, regions: np.ndarray, terrain: np.ndarray, water: int) -> np.ndarray:
    if len(regions) != grid.size:
        raise ValueError(f"Region assignment has {len(regions)} cells, expected {grid.size}")
    return np.asarray(terrain)[regions] == water


def coastline_directions(
    grid: HexGrid, regions: np.ndarray, terrain: np.ndarray, water: int = WATER
) -> List[List[Direction]]:
    """
    Find the shoreline edges of every cell.

    Args:
        grid: Hex grid
        regions: Region id for every cell index
        terrain: Terrain id for every region
        water: Terrain id treated as water

    Returns:
        directions[cell] = directions whose neighbor is on the other side
        of the water line, in direction order
    """
    is_water = _water_cells(grid, regions, terrain, water)

    directions = []
    for i in range(grid.size):
        edges = []
        for direction in Direction:
            neighbor = grid.neighbor(i, direction)
            if neighbor is not None and is_water[neighbor] != is_water[i]:
                edges.append(direction)
        directions.append(edges)
    return directions


def classify_cells(grid: HexGrid, regions: np.ndarray, terrain: np.ndarray, water: int = WATER) -> np.ndarray:
    """
    Classify every cell relative to the coastline.

    Returns:
        int8 array of INLAND, LAND_COAST, WATER_COAST or DEEP_WATER per cell
    """
    is_water = _water_cells(grid, regions, terrain, water)
    cell_types = np.where(is_water, DEEP_WATER, INLAND).astype(np.int8)

    for i in range(grid.size):
        if any(is_water[n] != is_water[i] for n in grid.neighbors(i)):
            cell_types[i] = WATER_COAST if is_water[i] else LAND_COAST

    logger.debug(
        "Cells classified",
        land_coast=int(np.sum(cell_types == LAND_COAST)),
        water_coast=int(np.sum(cell_types == WATER_COAST)),
    )
    return cell_types
