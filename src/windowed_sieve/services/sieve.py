from __future__ import annotations

from dataclasses import dataclass, field

from windowed_sieve.adapters.pacing import NoPacing
from windowed_sieve.domain.records import U64_LIMIT, PrimeRecord
from windowed_sieve.observability.domain.logging import LogMessage
from windowed_sieve.ports.log_sink import LogSink
from windowed_sieve.ports.pacing import PaceEvent, PacingPolicy
from windowed_sieve.ports.record_store import PrimeRecordStore

DEFAULT_WINDOW_SIZE = 100_000
DEFAULT_UPPER_LIMIT = 1_000_000


@dataclass(frozen=True, slots=True)
class WindowSummary:
    # What one window pass did to the store.
    start: int
    end: int
    marked_records: int
    discovered: int
    record_count: int


@dataclass(frozen=True, slots=True)
class SieveReport:
    window_size: int
    upper_limit: int
    record_count: int
    windows: tuple[WindowSummary, ...]


@dataclass
class WindowedSieve:
    """Segmented sieve of Eratosthenes over an external record store.

    Memory use is one window of `window_size` flags. Each window replays every
    stored record to strike known multiples (mark phase), then scans the
    survivors for new primes and appends them (discover phase). Every record
    carries its own cursor, so a prime whose next multiple lies beyond the
    current window is read but not rewritten.
    """

    store: PrimeRecordStore
    window_size: int = DEFAULT_WINDOW_SIZE
    upper_limit: int = DEFAULT_UPPER_LIMIT
    pacing: PacingPolicy = field(default_factory=NoPacing)
    progress: LogSink | None = None

    def __post_init__(self) -> None:
        if self.window_size < 1:
            raise ValueError(f"window_size must be positive, got {self.window_size}")
        if self.upper_limit < 0:
            raise ValueError(f"upper_limit must be non-negative, got {self.upper_limit}")
        # Cursors may run up to twice past the last window end.
        if 2 * (self.upper_limit + self.window_size) >= U64_LIMIT:
            raise ValueError("upper_limit and window_size exceed the 64-bit record range")

    def run(self) -> SieveReport:
        size = self.window_size
        fresh = b"\x01" * size
        is_prime = bytearray(fresh)
        summaries: list[WindowSummary] = []
        record_count = 0

        start = 0
        while start < self.upper_limit:
            end = start + size
            is_prime[:] = fresh
            marked = self._mark_known(is_prime, start, end)
            discovered = self._discover(is_prime, start, end)
            record_count += discovered

            summary = WindowSummary(
                start=start,
                end=end,
                marked_records=marked,
                discovered=discovered,
                record_count=record_count,
            )
            summaries.append(summary)
            self._report(summary)
            start = end

        self.store.rewind()
        return SieveReport(
            window_size=size,
            upper_limit=self.upper_limit,
            record_count=record_count,
            windows=tuple(summaries),
        )

    def _mark_known(self, is_prime: bytearray, start: int, end: int) -> int:
        # One full pass over the store; returns how many records were rewritten.
        # Every cursor is at or past `start`: the previous window advanced all cursors below its end.
        self.store.rewind()
        rewritten = 0
        while True:
            record = self.store.read_next()
            if record is None:
                return rewritten
            if record.nextval >= end:
                continue
            nextval = self._strike(is_prime, start, record.nextval, record.p, "mark")
            self.store.rewrite_last(record.advanced_to(nextval))
            rewritten += 1

    def _discover(self, is_prime: bytearray, start: int, end: int) -> int:
        # Candidates at or beyond upper_limit are never recorded.
        found = 0
        for candidate in range(max(2, start), min(end, self.upper_limit)):
            if not is_prime[candidate - start]:
                continue
            # Strike the rest of this window before later candidates are tested.
            nextval = self._strike(is_prime, start, candidate + candidate, candidate, "discover")
            self.store.append(PrimeRecord(p=candidate, nextval=nextval))
            found += 1
        return found

    def _strike(self, is_prime: bytearray, start: int, first: int, step: int, event: PaceEvent) -> int:
        # Clears first, first+step, ... inside the window; returns the first multiple past it.
        offset = first - start
        size = len(is_prime)
        if offset >= size:
            return first
        count = (size - 1 - offset) // step + 1
        is_prime[offset::step] = bytes(count)
        self.pacing.advance(event, count)
        return first + count * step

    def _report(self, summary: WindowSummary) -> None:
        if self.progress is None:
            return
        self.progress.emit(
            LogMessage(
                level="debug",
                message="window",
                fields={
                    "start": summary.start,
                    "end": summary.end,
                    "marked_records": summary.marked_records,
                    "discovered": summary.discovered,
                    "record_count": summary.record_count,
                },
            )
        )
