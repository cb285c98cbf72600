from __future__ import annotations

import struct
from pathlib import Path

import pytest

from windowed_sieve.adapters.record_store import (
    RECORD_FORMAT,
    RECORD_SIZE,
    BinaryRecordStore,
    decode_record,
    encode_record,
)
from windowed_sieve.domain.errors import CorruptRecordError, RecordStoreError, TruncatedRecordError
from windowed_sieve.domain.records import PrimeRecord


def _read_all(store: BinaryRecordStore) -> list[PrimeRecord]:
    store.rewind()
    records: list[PrimeRecord] = []
    while True:
        record = store.read_next()
        if record is None:
            return records
        records.append(record)


def test_record_layout_is_two_native_u64(tmp_path: Path) -> None:
    # Record N lives at bytes [N*16, N*16+16) in native byte order, no header.
    assert RECORD_SIZE == 16
    path = tmp_path / "primes.bin"
    with BinaryRecordStore.open(path) as store:
        store.append(PrimeRecord(p=2, nextval=4))
        store.append(PrimeRecord(p=3, nextval=6))
    assert path.read_bytes() == struct.pack("@QQ", 2, 4) + struct.pack("@QQ", 3, 6)


def test_encode_decode_are_symmetric() -> None:
    record = PrimeRecord(p=97, nextval=194)
    assert decode_record(encode_record(record)) == record


def test_open_creates_empty_store(tmp_path: Path) -> None:
    path = tmp_path / "primes.bin"
    with BinaryRecordStore.open(path) as store:
        assert path.exists()
        assert store.read_next() is None
        assert store.record_count == 0


def test_open_keeps_existing_records(tmp_path: Path) -> None:
    # Open-or-create never truncates; cleanup is a separate explicit step.
    path = tmp_path / "primes.bin"
    with BinaryRecordStore.open(path) as store:
        store.append(PrimeRecord(p=2, nextval=4))
    with BinaryRecordStore.open(path) as store:
        assert store.read_next() == PrimeRecord(p=2, nextval=4)


def test_append_and_sequential_read(tmp_path: Path) -> None:
    with BinaryRecordStore.open(tmp_path / "primes.bin") as store:
        for p in (2, 3, 5, 7):
            store.append(PrimeRecord.discovered(p))
        assert store.record_count == 4
        assert [r.p for r in _read_all(store)] == [2, 3, 5, 7]
        # End of file is sticky until rewind.
        assert store.read_next() is None


def test_rewrite_last_changes_only_that_record(tmp_path: Path) -> None:
    path = tmp_path / "primes.bin"
    with BinaryRecordStore.open(path) as store:
        for p in (2, 3, 5):
            store.append(PrimeRecord.discovered(p))
        store.rewind()
        store.read_next()
        second = store.read_next()
        assert second == PrimeRecord(p=3, nextval=6)
        store.rewrite_last(second.advanced_to(12))
        # Cursor sits right after the rewritten record.
        assert store.read_next() == PrimeRecord(p=5, nextval=10)
        assert store.read_next() is None

    data = path.read_bytes()
    assert len(data) == 3 * RECORD_SIZE
    assert RECORD_FORMAT.unpack_from(data, 0) == (2, 4)
    assert RECORD_FORMAT.unpack_from(data, RECORD_SIZE) == (3, 12)
    assert RECORD_FORMAT.unpack_from(data, 2 * RECORD_SIZE) == (5, 10)


def test_rewrite_last_can_repeat_on_same_record(tmp_path: Path) -> None:
    with BinaryRecordStore.open(tmp_path / "primes.bin") as store:
        store.append(PrimeRecord(p=2, nextval=4))
        store.rewind()
        record = store.read_next()
        assert record is not None
        store.rewrite_last(record.advanced_to(8))
        store.rewrite_last(record.advanced_to(10))
        assert _read_all(store) == [PrimeRecord(p=2, nextval=10)]


def test_rewrite_last_requires_preceding_read(tmp_path: Path) -> None:
    with BinaryRecordStore.open(tmp_path / "primes.bin") as store:
        store.append(PrimeRecord(p=2, nextval=4))
        with pytest.raises(RecordStoreError):
            store.rewrite_last(PrimeRecord(p=2, nextval=6))
        store.rewind()
        with pytest.raises(RecordStoreError):
            store.rewrite_last(PrimeRecord(p=2, nextval=6))
        store.read_next()
        assert store.read_next() is None
        with pytest.raises(RecordStoreError):
            store.rewrite_last(PrimeRecord(p=2, nextval=6))


def test_rewrite_last_rejects_a_different_prime(tmp_path: Path) -> None:
    with BinaryRecordStore.open(tmp_path / "primes.bin") as store:
        store.append(PrimeRecord(p=2, nextval=4))
        store.rewind()
        store.read_next()
        with pytest.raises(RecordStoreError):
            store.rewrite_last(PrimeRecord(p=3, nextval=6))


def test_truncated_trailing_record_is_an_error(tmp_path: Path) -> None:
    # A partial record is corruption, distinct from a clean end of file.
    path = tmp_path / "primes.bin"
    path.write_bytes(struct.pack("@QQ", 2, 4) + b"\x01\x02\x03\x04\x05")
    with BinaryRecordStore.open(path) as store:
        assert store.read_next() == PrimeRecord(p=2, nextval=4)
        with pytest.raises(TruncatedRecordError) as excinfo:
            store.read_next()
    assert excinfo.value.offset == RECORD_SIZE
    assert excinfo.value.remaining == 5


def test_invalid_record_bytes_are_reported_as_corrupt(tmp_path: Path) -> None:
    path = tmp_path / "primes.bin"
    path.write_bytes(struct.pack("@QQ", 4, 7))
    with BinaryRecordStore.open(path) as store:
        with pytest.raises(CorruptRecordError):
            store.read_next()


def test_close_is_idempotent_and_final(tmp_path: Path) -> None:
    store = BinaryRecordStore.open(tmp_path / "primes.bin")
    store.close()
    store.close()
    with pytest.raises(RecordStoreError):
        store.read_next()
    with pytest.raises(RecordStoreError):
        store.append(PrimeRecord(p=2, nextval=4))


def test_open_in_missing_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        BinaryRecordStore.open(tmp_path / "missing" / "primes.bin")
