"""Mersenne Twister (MT19937) random numbers with a shared default generator."""

from __future__ import annotations

import random
import secrets
from typing import Optional

_MASK32 = 0xFFFFFFFF
_STATE_SIZE = 624


def _mt19937_state(seed: int) -> tuple:
    """Build the internal MT19937 state for a 32-bit seed (init_genrand)."""
    state = [seed & _MASK32]
    for i in range(1, _STATE_SIZE):
        prev = state[-1]
        state.append((1812433253 * (prev ^ (prev >> 30)) + i) & _MASK32)
    return tuple(state) + (_STATE_SIZE,)


class RandomGenerator:
    """A 32-bit Mersenne Twister seeded like ``std::mt19937``.

    Without a seed it is seeded from the operating system's entropy source.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random()
        self.reseed(seed)

    def reseed(self, seed: Optional[int] = None) -> None:
        """Restart the sequence from ``seed`` (a fresh random one if omitted)."""
        if seed is None:
            seed = secrets.randbits(32)
        self._rng.setstate((3, _mt19937_state(int(seed)), None))

    def get(self) -> int:
        """Return the next unsigned 32-bit value."""
        return self._rng.getrandbits(32)

    def uniform01(self) -> float:
        """Return a single-precision value uniformly drawn from [0, 1)."""
        return (self.get() >> 8) / float(1 << 24)


_default = RandomGenerator()


def reseed() -> None:
    """Reseed the shared generator from the entropy source."""
    _default.reseed()


def get() -> int:
    """Next unsigned 32-bit value of the shared generator."""
    return _default.get()


def get_uni01() -> float:
    """Next value in [0, 1) from the shared generator."""
    return _default.uniform01()