"""
Seedable minimal-standard random number generator.

Implements the Park-Miller "minimal standard" Lehmer generator with
multiplier 48271 (the same sequence as C++ std::minstd_rand), so that
seeded map generation is reproducible across platforms and Python
versions. Python's global random module is not used by the core; any
object with a ``randrange(stop)`` method (random.Random included) can be
passed in instead.
"""

import zlib
from typing import Sequence, TypeVar, Union

T = TypeVar("T")

MODULUS = 2147483647  # 2^31 - 1
MULTIPLIER = 48271


def _seed_to_int(seed: Union[int, str]) -> int:
    """Fold an int or string seed into the generator's state range."""
    if isinstance(seed, str):
        seed = zlib.crc32(seed.encode("utf-8"))
    state = int(seed) % MODULUS
    # Zero is a fixed point of the recurrence
    return state if state != 0 else 1


class MinStdRandom:
    """
    Minimal standard Lehmer generator.

    Produces integers in [1, MODULUS - 1] and derived uniform values.
    """

    def __init__(self, seed: Union[int, str] = 1):
        """
        Initialize with seed string or number.

        Args:
            seed: Integer or string seed
        """
        self.seed = seed
        self.state = _seed_to_int(seed)
        self.call_count = 0

    def __repr__(self) -> str:
        return f"MinStdRandom(seed={self.seed!r}, calls={self.call_count})"

    def next_uint(self) -> int:
        """Advance the generator and return the raw value in [1, MODULUS - 1]."""
        self.call_count += 1
        self.state = (self.state * MULTIPLIER) % MODULUS
        return self.state

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        return (self.next_uint() - 1) / (MODULUS - 1)

    def randrange(self, stop: int) -> int:
        """Return a uniformly distributed integer in [0, stop)."""
        if stop <= 0:
            raise ValueError(f"randrange() stop must be positive, got {stop}")

        span = MODULUS - 1
        # Reject the tail so every bucket has the same number of raw values
        limit = span - (span % stop)
        while True:
            value = self.next_uint() - 1
            if value < limit:
                return value % stop

    def randint(self, a: int, b: int) -> int:
        """Return a uniformly distributed integer in [a, b]."""
        if b < a:
            raise ValueError(f"randint() empty range [{a}, {b}]")
        return a + self.randrange(b - a + 1)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randrange(len(seq))]
