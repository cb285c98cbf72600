from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from windowed_sieve.domain.errors import CorruptRecordError, RecordStoreError, TruncatedRecordError
from windowed_sieve.domain.records import PrimeRecord
from windowed_sieve.ports.record_store import PrimeRecordStore

# Two native-order u64 fields (p, nextval); record N occupies bytes [N*16, N*16+16).
RECORD_FORMAT = struct.Struct("@QQ")
RECORD_SIZE = RECORD_FORMAT.size


def encode_record(record: PrimeRecord) -> bytes:
    return RECORD_FORMAT.pack(record.p, record.nextval)


def decode_record(data: bytes, *, offset: int = 0) -> PrimeRecord:
    p, nextval = RECORD_FORMAT.unpack(data)
    try:
        return PrimeRecord(p=p, nextval=nextval)
    except ValueError as exc:
        raise CorruptRecordError(offset, str(exc)) from exc


class BinaryRecordStore(PrimeRecordStore):
    # File-backed store. The only mutation of existing bytes goes through rewrite_last.

    def __init__(self, path: Path, handle: BinaryIO) -> None:
        self.path = path
        self._handle: BinaryIO | None = handle
        self._last_read: tuple[int, PrimeRecord] | None = None

    @classmethod
    def open(cls, path: Path) -> BinaryRecordStore:
        # Open-or-create: an existing store is kept, a missing one starts empty.
        path.touch(exist_ok=True)
        return cls(path, path.open("r+b"))

    def __enter__(self) -> BinaryRecordStore:
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def read_next(self) -> PrimeRecord | None:
        handle = self._require_open()
        offset = handle.tell()
        data = handle.read(RECORD_SIZE)
        if not data:
            self._last_read = None
            return None
        if len(data) < RECORD_SIZE:
            raise TruncatedRecordError(offset, len(data))
        record = decode_record(data, offset=offset)
        self._last_read = (offset, record)
        return record

    def rewrite_last(self, record: PrimeRecord) -> None:
        handle = self._require_open()
        if self._last_read is None:
            raise RecordStoreError("rewrite_last called without a preceding read_next")
        offset, previous = self._last_read
        if handle.tell() != offset + RECORD_SIZE:
            raise RecordStoreError(f"Cursor moved past the record at offset {offset}")
        if record.p != previous.p:
            raise RecordStoreError(f"Cannot replace prime {previous.p} with {record.p} at offset {offset}")
        handle.seek(-RECORD_SIZE, os.SEEK_CUR)
        handle.write(encode_record(record))
        self._last_read = (offset, record)

    def append(self, record: PrimeRecord) -> None:
        handle = self._require_open()
        handle.seek(0, os.SEEK_END)
        handle.write(encode_record(record))
        self._last_read = None

    def rewind(self) -> None:
        handle = self._require_open()
        handle.seek(0)
        self._last_read = None

    @property
    def record_count(self) -> int:
        handle = self._require_open()
        handle.flush()
        return os.fstat(handle.fileno()).st_size // RECORD_SIZE

    def close(self) -> None:
        # Close is idempotent; flushing happens here so appended records reach disk.
        if self._handle is None:
            return
        self._handle.flush()
        self._handle.close()
        self._handle = None
        self._last_read = None

    def _require_open(self) -> BinaryIO:
        if self._handle is None:
            raise RecordStoreError(f"Record store {self.path} is closed")
        return self._handle


@dataclass
class InMemoryRecordStore(PrimeRecordStore):
    # Reference implementation of the store contract; useful for tests and tiny limits.
    records: list[PrimeRecord] = field(default_factory=list)
    _cursor: int = field(default=0, init=False, repr=False)
    _last_read: int | None = field(default=None, init=False, repr=False)

    def read_next(self) -> PrimeRecord | None:
        if self._cursor >= len(self.records):
            self._last_read = None
            return None
        record = self.records[self._cursor]
        self._last_read = self._cursor
        self._cursor += 1
        return record

    def rewrite_last(self, record: PrimeRecord) -> None:
        if self._last_read is None or self._last_read != self._cursor - 1:
            raise RecordStoreError("rewrite_last called without a preceding read_next")
        previous = self.records[self._last_read]
        if record.p != previous.p:
            raise RecordStoreError(f"Cannot replace prime {previous.p} with {record.p}")
        self.records[self._last_read] = record

    def append(self, record: PrimeRecord) -> None:
        self.records.append(record)
        self._cursor = len(self.records)
        self._last_read = None

    def rewind(self) -> None:
        self._cursor = 0
        self._last_read = None

    @property
    def record_count(self) -> int:
        return len(self.records)
