from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from windowed_sieve.adapters.pacing import Cadence
from windowed_sieve.domain.records import U64_LIMIT
from windowed_sieve.services.sieve import DEFAULT_UPPER_LIMIT, DEFAULT_WINDOW_SIZE

# Config models map YAML sections to typed structures; every section has defaults.

MAX_UPPER_LIMIT = 1 << 62


class SieveSettings(BaseModel):
    # Window size bounds peak memory; upper limit is exclusive.
    model_config = ConfigDict(extra="forbid")
    window_size: PositiveInt = DEFAULT_WINDOW_SIZE
    upper_limit: int = Field(default=DEFAULT_UPPER_LIMIT, ge=0, le=MAX_UPPER_LIMIT)

    @model_validator(mode="after")
    def _fit_record_range(self) -> SieveSettings:
        # Cursors may run up to twice past the last window end and must stay u64.
        if 2 * (self.upper_limit + self.window_size) >= U64_LIMIT:
            raise ValueError("sieve.window_size and sieve.upper_limit exceed the 64-bit record range")
        return self


class OutputConfig(BaseModel):
    # Paths are threaded through the app instead of well-known globals.
    model_config = ConfigDict(extra="forbid")
    store_path: str = "primes.bin"
    export_path: str = "primes.csv"
    atomic_replace: bool = False


class PacingConfig(BaseModel):
    # fast disables every delay; cadences only matter in slow mode.
    model_config = ConfigDict(extra="forbid")
    fast: bool = False
    mark_every: PositiveInt = 1_000_000
    mark_delay: float = Field(default=0.15, ge=0)
    discover_every: PositiveInt = 100_000
    discover_delay: float = Field(default=0.15, ge=0)
    export_every: PositiveInt = 10_000
    export_delay: float = Field(default=0.25, ge=0)

    def cadences(self) -> dict[str, Cadence]:
        return {
            "mark": Cadence(every=self.mark_every, delay=self.mark_delay),
            "discover": Cadence(every=self.discover_every, delay=self.discover_delay),
            "export": Cadence(every=self.export_every, delay=self.export_delay),
        }


class LoggingConfig(BaseModel):
    # verbose turns on per-window progress; path adds a JSONL copy of diagnostics.
    model_config = ConfigDict(extra="forbid")
    verbose: bool = False
    path: str | None = None


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    sieve: SieveSettings = Field(default_factory=SieveSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
    pacing: PacingConfig = Field(default_factory=PacingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
