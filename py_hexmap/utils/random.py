"""
Random source helpers for callers of the generator.

The core never reads the clock. Callers that want a different map on
every run take a seed from time_seed() and pass it (or a random source
built from it) into the generator, which keeps runs reproducible once
the seed is logged.
"""

import time
from typing import Optional, Union

from ..core.random_source import MinStdRandom


def time_seed() -> int:
    """
    Seed derived from the current wall-clock time.

    Returns:
        Whole seconds since the epoch
    """
    return int(time.time())


def make_random_source(seed: Optional[Union[int, str]] = None) -> MinStdRandom:
    """
    Build a random source, seeding from the clock when no seed is given.

    Args:
        seed: Integer or string seed

    Returns:
        MinStdRandom instance
    """
    if seed is None:
        seed = time_seed()
    return MinStdRandom(seed)
