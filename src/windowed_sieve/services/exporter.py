from __future__ import annotations

from pathlib import Path

from windowed_sieve.adapters.output_sink import FileOutputSink
from windowed_sieve.adapters.pacing import NoPacing
from windowed_sieve.adapters.record_store import BinaryRecordStore
from windowed_sieve.domain.records import PrimeRecord
from windowed_sieve.ports.output_sink import OutputSink
from windowed_sieve.ports.pacing import PacingPolicy
from windowed_sieve.ports.record_store import PrimeRecordStore


def format_record(record: PrimeRecord) -> str:
    return f"{record.p},{record.nextval}"


def export_records(
    store: PrimeRecordStore,
    sink: OutputSink,
    *,
    pacing: PacingPolicy | None = None,
) -> int:
    # Single read-only pass in store order; returns the number of lines written.
    pacing = pacing if pacing is not None else NoPacing()
    store.rewind()
    count = 0
    while True:
        record = store.read_next()
        if record is None:
            return count
        sink.write_line(format_record(record))
        count += 1
        pacing.advance("export")


def export_store(
    store_path: Path,
    export_path: Path,
    *,
    pacing: PacingPolicy | None = None,
    atomic_replace: bool = False,
) -> int:
    # The sink is only committed after every record was written; a failed pass discards it.
    sink = FileOutputSink(path=export_path, atomic_replace=atomic_replace)
    try:
        with BinaryRecordStore.open(store_path) as store:
            count = export_records(store, sink, pacing=pacing)
    except Exception:
        sink.discard()
        raise
    sink.close()
    return count
