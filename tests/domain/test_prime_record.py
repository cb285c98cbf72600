from __future__ import annotations

import pytest

from windowed_sieve.domain.errors import CorruptRecordError, RecordStoreError, TruncatedRecordError
from windowed_sieve.domain.records import U64_LIMIT, PrimeRecord


def test_discovered_record_starts_at_double() -> None:
    # A new prime starts sieving at p + p.
    record = PrimeRecord.discovered(7)
    assert record == PrimeRecord(p=7, nextval=14)


def test_advanced_to_keeps_prime() -> None:
    record = PrimeRecord(p=3, nextval=6).advanced_to(21)
    assert record.p == 3
    assert record.nextval == 21


@pytest.mark.parametrize(
    ("p", "nextval"),
    [
        (0, 4),
        (1, 2),
        (3, 3),
        (3, 10),
        (5, 0),
        (2, U64_LIMIT),
        (U64_LIMIT, U64_LIMIT + 2),
    ],
)
def test_invalid_records_are_rejected(p: int, nextval: int) -> None:
    # nextval must be a multiple of p strictly above it, both within u64.
    with pytest.raises(ValueError):
        PrimeRecord(p=p, nextval=nextval)


def test_records_are_immutable() -> None:
    record = PrimeRecord(p=2, nextval=4)
    with pytest.raises(AttributeError):
        record.nextval = 6  # type: ignore[misc]


def test_store_errors_are_os_errors() -> None:
    # Every store failure is an I/O failure for the top-level handler.
    truncated = TruncatedRecordError(offset=32, remaining=5)
    corrupt = CorruptRecordError(offset=16, reason="bad")
    assert isinstance(truncated, RecordStoreError)
    assert isinstance(corrupt, RecordStoreError)
    assert isinstance(truncated, OSError)
    assert truncated.offset == 32
    assert truncated.remaining == 5
    assert "offset 16" in str(corrupt)
