"""Shared fixtures: a scripted random source and a recording surface."""

from __future__ import annotations

import pytest


class ScriptedRandom:
    """Random source returning queued values, then the range minimum.

    Every call is recorded as ``(a, b)`` so tests can assert on the
    ranges the builder asked for.
    """

    def __init__(self, values: list[int] | None = None) -> None:
        self.values = list(values or [])
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self.values.pop(0) if self.values else a
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


class RecordingSurface:
    """Drawing surface that records every call as a tuple."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def begin_path(self) -> None:
        self.calls.append(("begin_path",))

    def move_to(self, x: float, y: float) -> None:
        self.calls.append(("move_to", x, y))

    def line_to(self, x: float, y: float) -> None:
        self.calls.append(("line_to", x, y))

    def close_path(self) -> None:
        self.calls.append(("close_path",))


@pytest.fixture()
def scripted_random():
    """Factory: ``scripted_random([10, 20])``."""
    return ScriptedRandom


@pytest.fixture()
def recorder() -> RecordingSurface:
    return RecordingSurface()
