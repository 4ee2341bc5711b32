"""
Random sources: uniform unsigned 32-bit integers for the generator.

The generator never talks to a random number facility directly; it asks a
RandomSource for ``n`` words. The default source is the operating system
CSPRNG. When that is missing (some sandboxed or embedded interpreters) we
degrade to the Mersenne Twister and say so in the log.
"""

from __future__ import annotations

import logging
import os
import random
import secrets
from abc import ABC, abstractmethod
from typing import Iterable, List

logger = logging.getLogger(__name__)

WORD_BITS = 32
WORD_RANGE = 1 << WORD_BITS


class RandomSource(ABC):
    """Supplies independent, uniformly distributed 32-bit unsigned integers."""

    #: True only for sources fit for generating secrets.
    secure: bool = False

    @abstractmethod
    def next_uniform(self, n: int) -> List[int]:
        """Return ``n`` values in ``[0, 2**32)``. ``n < 1`` gives ``[]``."""


class SecureRandomSource(RandomSource):
    """Operating system CSPRNG via :mod:`secrets`."""

    secure = True

    def next_uniform(self, n: int) -> List[int]:
        return [secrets.randbits(WORD_BITS) for _ in range(max(0, n))]


class FallbackRandomSource(RandomSource):
    """
    General-purpose PRNG scaled to 32 bits.

    Only used when no secure source exists. Output is predictable to anyone
    who can observe enough of it.
    """

    secure = False

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def next_uniform(self, n: int) -> List[int]:
        return [int(self._rng.random() * WORD_RANGE) for _ in range(max(0, n))]


class SequenceRandomSource(RandomSource):
    """
    Replays a fixed list of values, cycling when exhausted.

    Deterministic stand-in for tests and reproducible output.
    """

    secure = False

    def __init__(self, values: Iterable[int]) -> None:
        self._values = [int(v) % WORD_RANGE for v in values] or [0]
        self._pos = 0

    def next_uniform(self, n: int) -> List[int]:
        out: List[int] = []
        for _ in range(max(0, n)):
            out.append(self._values[self._pos % len(self._values)])
            self._pos += 1
        return out


def secure_random_available() -> bool:
    """True when the platform provides an OS entropy source."""
    try:
        os.urandom(1)
    except NotImplementedError:
        return False
    return True


def default_random_source() -> RandomSource:
    """Secure source when possible, otherwise the logged fallback."""
    if secure_random_available():
        return SecureRandomSource()

    logger.warning(
        "No secure random source available; falling back to the "
        "Mersenne Twister. Generated passwords are NOT cryptographically secure."
    )
    return FallbackRandomSource()
