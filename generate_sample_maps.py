#!/usr/bin/env python3
"""
Generate sample hex maps and print them as text.

This runs the full pipeline:
1. Region partitioning with relaxation
2. Region adjacency list
3. Greedy terrain colouring

Usage:
    python generate_sample_maps.py [seed]

If no seed is provided, the current time is used.
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

from py_hexmap.config import settings
from py_hexmap.core.map_generator import MapConfig, HexMap, generate_map
from py_hexmap.core.terrain import TERRAIN_NAMES, TerrainType
from py_hexmap.logging_config import configure_logging
from py_hexmap.utils.random import time_seed


def render_text(hex_map: HexMap) -> str:
    """Lay the map out as rows of terrain letters, odd columns marked lower."""
    lines = []
    for row in range(hex_map.grid.height):
        cells = []
        for col in range(hex_map.grid.width):
            index = row * hex_map.grid.width + col
            letter = TERRAIN_NAMES[TerrainType(hex_map.cell_terrain(index))][0]
            cells.append(letter.lower() if col % 2 else letter)
        lines.append(" ".join(cells))
    return "\n".join(lines)


def create_map(seed):
    """Generate one map and print its layout and adjacency."""
    config = MapConfig.from_settings(settings)
    hex_map = generate_map(config, seed=seed)

    print(f"\nSeed: {seed}")
    print(f"  Grid: {config.width}x{config.height}, {config.num_regions} regions")
    print(f"  Empty regions: {hex_map.empty_regions()}")
    print(f"  Terrain clashes: {hex_map.terrain.clashes}")
    print()
    print(render_text(hex_map))
    print()
    print(hex_map.format_adjacency())

    return hex_map


def main():
    """Generate sample maps for one or more seeds."""
    configure_logging(settings.log_level, settings.log_format)

    seeds = sys.argv[1:] or [time_seed()]
    for seed in seeds:
        create_map(int(seed) if str(seed).isdigit() else seed)


if __name__ == "__main__":
    main()
