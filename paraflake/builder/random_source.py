"""Random source used by the snowflake builder.

The builder never touches the global ``random`` module.  It draws from an
object with a single ``randint(a, b)`` method (inclusive on both ends),
so a seeded :class:`random.Random` or a scripted fake can be injected to
make geometry reproducible.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Integer-in-range source.  ``random.Random`` satisfies it as-is."""

    def randint(self, a: int, b: int) -> int:
        """Return an integer N with ``a <= N <= b``."""
        ...


def make_random_source(seed: int | None = None) -> RandomSource:
    """Return a private ``random.Random``; ``None`` seeds from the OS."""
    return random.Random(seed)
