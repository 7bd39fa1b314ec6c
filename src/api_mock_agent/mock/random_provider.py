"""Random source used by mock data synthesis.

Everything that needs randomness takes a RandomProvider so tests can pass a
seeded or scripted source instead of the process-wide one.
"""

import random
import uuid
from collections.abc import Sequence
from typing import Any, Protocol


class RandomProvider(Protocol):
    """The randomness capability required by the synthesizer and strategies."""

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        ...

    def randint(self, low: int, high: int) -> int:
        """Return an integer in [low, high], both ends inclusive."""
        ...

    def choice(self, options: Sequence[Any]) -> Any:
        """Return one element of a non-empty sequence, uniformly."""
        ...

    def token(self) -> str:
        """Return a fresh unique identifier."""
        ...


class SystemRandomProvider:
    """RandomProvider backed by random.Random.

    Unseeded by default; pass a seed to get reproducible output.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        return self._random.random()

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)

    def choice(self, options: Sequence[Any]) -> Any:
        return self._random.choice(options)

    def token(self) -> str:
        return str(uuid.UUID(int=self._random.getrandbits(128), version=4))
