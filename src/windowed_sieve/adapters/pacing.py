from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from windowed_sieve.ports.pacing import PaceEvent, PacingPolicy


class NoPacing(PacingPolicy):
    # Default policy: the engine runs at full speed.
    def advance(self, event: PaceEvent, operations: int = 1) -> None:
        return None


@dataclass(frozen=True, slots=True)
class Cadence:
    # Sleep `delay` seconds each time the running count crosses a multiple of `every`.
    every: int
    delay: float

    def __post_init__(self) -> None:
        if self.every <= 0:
            raise ValueError("Cadence.every must be positive")
        if self.delay < 0:
            raise ValueError("Cadence.delay must be non-negative")


DEFAULT_CADENCES: dict[str, Cadence] = {
    "mark": Cadence(every=1_000_000, delay=0.15),
    "discover": Cadence(every=100_000, delay=0.15),
    "export": Cadence(every=10_000, delay=0.25),
}


@dataclass
class SleepPacing(PacingPolicy):
    # Slows visible progress at fixed operation counts; results are unaffected.
    cadences: dict[str, Cadence] = field(default_factory=lambda: dict(DEFAULT_CADENCES))
    sleep: Callable[[float], None] = time.sleep
    _counts: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def advance(self, event: PaceEvent, operations: int = 1) -> None:
        cadence = self.cadences.get(event)
        if cadence is None or operations <= 0:
            return
        before = self._counts.get(event, 0)
        after = before + operations
        self._counts[event] = after
        for _ in range(after // cadence.every - before // cadence.every):
            self.sleep(cadence.delay)

    def count(self, event: PaceEvent) -> int:
        return self._counts.get(event, 0)
