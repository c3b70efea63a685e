"""Region adjacency list construction."""

from typing import List, Set, Tuple

import numpy as np
import structlog

from .hex_grid import HexGrid

logger = structlog.get_logger()


def build_adjacency(grid: HexGrid, regions: np.ndarray, num_regions: int) -> List[List[int]]:
    """
    Construct an adjacency list for each region.

    Every cell is scanned in index order and every neighbor in direction
    order. A neighbor in a different region is recorded once for the
    cell's region; the reverse edge is found when the scan reaches the
    neighboring cell. Each list keeps discovery order.

    Args:
        grid: Hex grid the regions were generated on
        regions: Region id for every cell index
        num_regions: Number of regions

    Returns:
        adjacency[r] = list of distinct regions bordering region r
    """
    regions = np.asarray(regions)
    if len(regions) != grid.size:
        raise ValueError(f"Region assignment has {len(regions)} cells, expected {grid.size}")
    if len(regions) and (regions.min() < 0 or regions.max() >= num_regions):
        raise ValueError(f"Region ids must be in [0, {num_regions})")

    adjacency: List[List[int]] = [[] for _ in range(num_regions)]
    seen: List[Set[int]] = [set() for _ in range(num_regions)]

    for i in range(grid.size):
        region = int(regions[i])
        for neighbor in grid.neighbors(i):
            neighbor_region = int(regions[neighbor])
            if neighbor_region != region and neighbor_region not in seen[region]:
                seen[region].add(neighbor_region)
                adjacency[region].append(neighbor_region)

    logger.debug("Adjacency built", edges=len(adjacency_edges(adjacency)))
    return adjacency


def adjacency_edges(adjacency: List[List[int]]) -> Set[Tuple[int, int]]:
    """Collect unique undirected (low, high) region pairs."""
    edges = set()
    for region, neighbors in enumerate(adjacency):
        for neighbor in neighbors:
            edges.add((region, neighbor) if region < neighbor else (neighbor, region))
    return edges
