"""
Deterministic Random Module for the hexfleet naval skirmish bot.

Implements a reproducible random stream (wander destinations, shuffling):
- Xorshift128Plus: raw 64-bit xorshift128+ generator
- SeededRandom: unbiased bounded draws, ranged integer/real sampling,
  Fisher-Yates shuffle

The same seed yields the same 64-bit stream on every run and every
platform, which keeps bot behaviour replayable from a recorded input.
"""

from __future__ import annotations

from typing import Iterable, List, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


# =============================================================================
# CONSTANTS
# =============================================================================

UINT64_MASK = (1 << 64) - 1
UINT64_MAX = UINT64_MASK

DEFAULT_SEED0 = 0xDEAD177EA71511
DEFAULT_SEED1 = 0x12340978ABCDCDAA

# Real-valued draws use 53 random bits, the full precision of a double
REAL_RESOLUTION_BITS = 53
REAL_RESOLUTION = 1 << REAL_RESOLUTION_BITS


# =============================================================================
# EXCEPTIONS
# =============================================================================

class RandomRangeError(RuntimeError):
    """
    A ranged draw landed outside its interval.

    This is an internal invariant violation (a generator or arithmetic bug),
    never a normal runtime condition, so callers should let it propagate.
    """


# =============================================================================
# RAW GENERATOR
# =============================================================================

class Xorshift128Plus:
    """
    xorshift128+ pseudo-random generator over two 64-bit state words.

    An all-zero state would only ever produce zeros, so a zero seed pair
    has its second word forced to 1.
    """

    def __init__(self, seed0: int = DEFAULT_SEED0, seed1: int = DEFAULT_SEED1):
        self._s0 = seed0 & UINT64_MASK
        self._s1 = seed1 & UINT64_MASK
        if self._s0 == 0 and self._s1 == 0:
            self._s1 = 1

    @property
    def state(self) -> tuple:
        """Current (s0, s1) state words."""
        return (self._s0, self._s1)

    def next_uint64(self) -> int:
        """Advance the state and return the next 64-bit value."""
        x = self._s0
        y = self._s1
        self._s0 = y
        x ^= (x << 23) & UINT64_MASK
        x ^= x >> 17
        x ^= y
        x ^= y >> 26
        self._s1 = x
        return (self._s0 + self._s1) & UINT64_MASK


# =============================================================================
# SAMPLING
# =============================================================================

class SeededRandom:
    """
    Sampling helpers on top of a xorshift128+ stream.

    Example:
        >>> rng = SeededRandom()
        >>> rng.randint(0, 22)  # a column on the map
    """

    def __init__(
        self,
        seed0: int = DEFAULT_SEED0,
        seed1: int = DEFAULT_SEED1,
        generator: Optional[Xorshift128Plus] = None
    ):
        """
        Initialize the sampler.

        Args:
            seed0: First state word for a new generator.
            seed1: Second state word for a new generator.
            generator: Existing generator to draw from (seeds are ignored).
        """
        self.generator = generator or Xorshift128Plus(seed0, seed1)

    def next_uint64(self) -> int:
        """Next raw 64-bit value from the underlying generator."""
        return self.generator.next_uint64()

    def bounded(self, maximum: int) -> int:
        """
        Uniform integer in [0, maximum) without modulo bias.

        Raw draws below 2**64 mod maximum are rejected; the remaining range
        is an exact multiple of maximum.

        Args:
            maximum: Exclusive upper bound, 1 <= maximum <= 2**64.

        Returns:
            Integer in [0, maximum).

        Raises:
            ValueError: If maximum is out of bounds.
        """
        if maximum <= 0 or maximum > UINT64_MAX + 1:
            raise ValueError(f"bounded() maximum must be in 1..2**64, got {maximum}")

        threshold = ((UINT64_MAX + 1) - maximum) % maximum
        value = self.next_uint64()
        while value < threshold:
            value = self.next_uint64()
        return value % maximum

    def randint(self, low: int, high: int) -> int:
        """
        Uniform integer in the closed interval [low, high].

        Raises:
            ValueError: If high < low.
            RandomRangeError: If the result escapes the interval.
        """
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")

        value = low + self.bounded(high - low + 1)
        if not low <= value <= high:
            raise RandomRangeError(f"{value} outside [{low}, {high}]")
        return value

    @staticmethod
    def _interpolate(low: float, high: float, fraction: float) -> float:
        # Weighted sum rather than low + (high - low) * f: the difference
        # overflows to inf for ranges wider than the largest float.
        return low * (1.0 - fraction) + high * fraction

    def uniform(self, low: float, high: float) -> float:
        """
        Uniform real in the closed interval [low, high].

        Both endpoints are reachable. A draw that rounds past an endpoint
        is redrawn.

        Raises:
            ValueError: If high < low.
            RandomRangeError: If the result escapes the interval.
        """
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        if high == low:
            return low

        while True:
            step = self.bounded(REAL_RESOLUTION + 1)
            if step == REAL_RESOLUTION:
                value = high
            else:
                value = self._interpolate(low, high, step / REAL_RESOLUTION)
            if not 0 <= step <= REAL_RESOLUTION or low <= value <= high:
                break

        if not low <= value <= high:
            raise RandomRangeError(f"{value} outside [{low}, {high}]")
        return value

    def uniform_open(self, low: float, high: float) -> float:
        """
        Uniform real in the half-open interval [low, high).

        A draw that rounds onto high (a fraction just below 1) or below
        low is redrawn.

        Raises:
            ValueError: If high <= low.
            RandomRangeError: If the result escapes the interval.
        """
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")

        while True:
            step = self.bounded(REAL_RESOLUTION)
            value = self._interpolate(low, high, step / REAL_RESOLUTION)
            if not 0 <= step < REAL_RESOLUTION or low <= value < high:
                break

        if not low <= value < high:
            raise RandomRangeError(f"{value} outside [{low}, {high})")
        return value

    def shuffle(self, items: MutableSequence[T]) -> None:
        """
        Shuffle a mutable sequence in place (Fisher-Yates).

        Sequences of length 0 or 1 are left untouched and consume no draws.
        """
        count = len(items)
        if count < 2:
            return

        for first in range(count - 1):
            offset = self.randint(0, count - first - 1)
            if offset == 0:
                continue
            other = first + offset
            items[first], items[other] = items[other], items[first]

    def shuffled(self, items: Iterable[T]) -> List[T]:
        """Return a new list with the items in shuffled order."""
        result = list(items)
        self.shuffle(result)
        return result

    def choice(self, items: Sequence[T]) -> T:
        """
        Pick one element uniformly.

        Raises:
            IndexError: If items is empty.
        """
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.randint(0, len(items) - 1)]
