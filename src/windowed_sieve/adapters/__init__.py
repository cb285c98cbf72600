from .output_sink import FileOutputSink
from .pacing import DEFAULT_CADENCES, Cadence, NoPacing, SleepPacing
from .record_store import (
    RECORD_FORMAT,
    RECORD_SIZE,
    BinaryRecordStore,
    InMemoryRecordStore,
    decode_record,
    encode_record,
)

# Public adapter exports make wiring simpler.
__all__ = [
    "BinaryRecordStore",
    "Cadence",
    "DEFAULT_CADENCES",
    "FileOutputSink",
    "InMemoryRecordStore",
    "NoPacing",
    "RECORD_FORMAT",
    "RECORD_SIZE",
    "SleepPacing",
    "decode_record",
    "encode_record",
]
