from .log_sink import LogSink
from .output_sink import OutputSink
from .pacing import PaceEvent, PacingPolicy
from .record_store import PrimeRecordStore

# Public port exports keep wiring explicit at composition time.
__all__ = [
    "LogSink",
    "OutputSink",
    "PaceEvent",
    "PacingPolicy",
    "PrimeRecordStore",
]
