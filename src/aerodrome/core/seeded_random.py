"""Deterministic pseudo-random streams for procedural generation.

Implements the Mulberry32 generator with explicit 32-bit wrap-around so a
given seed yields the exact same sequence of floats on every platform and
every runtime that implements the same algorithm.

Typical usage:
    from aerodrome.core.seeded_random import SeededRandom

    rng = SeededRandom(42)
    value = rng()  # float in [0, 1)
"""

from collections.abc import Callable

MASK_32 = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296.0

# A callable returning successive floats in [0, 1)
RandomStream = Callable[[], float]


def _imul(a: int, b: int) -> int:
    """Multiply two 32-bit integers, keeping the low 32 bits."""
    return (a * b) & MASK_32


class SeededRandom:
    """Mulberry32 random stream.

    Instances are callable and return the next float in [0, 1). The
    internal state is a single unsigned 32-bit integer, so two streams
    created from the same seed stay in lockstep forever.

    Examples:
        >>> rng = SeededRandom(10041)
        >>> a = rng()
        >>> SeededRandom(10041)() == a
        True
    """

    def __init__(self, seed: int) -> None:
        """Initialize the stream.

        Args:
            seed: Integer seed. Negative or oversized seeds are reduced
                modulo 2**32.
        """
        self.seed = int(seed)
        self._state = self.seed & MASK_32

    def next_uint32(self) -> int:
        """Advance the stream and return the raw unsigned 32-bit output."""
        self._state = (self._state + MULBERRY_INCREMENT) & MASK_32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
        return (t ^ (t >> 14)) & MASK_32

    def __call__(self) -> float:
        return self.next_uint32() / TWO_POW_32


def create_seeded_random(seed: int) -> RandomStream:
    """Create a seeded random stream.

    Args:
        seed: Integer seed.

    Returns:
        Callable producing floats in [0, 1).
    """
    return SeededRandom(seed)
