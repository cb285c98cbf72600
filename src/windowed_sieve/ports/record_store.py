from __future__ import annotations

from typing import Protocol, runtime_checkable

from windowed_sieve.domain.records import PrimeRecord


# PrimeRecordStore is the sieve's external memory: sequential reads, one in-place rewrite, appends.
@runtime_checkable
class PrimeRecordStore(Protocol):
    def read_next(self) -> PrimeRecord | None:
        """Return the next record in file order, or None at a clean end of file."""
        raise NotImplementedError("PrimeRecordStore is a port; use a concrete adapter.")

    def rewrite_last(self, record: PrimeRecord) -> None:
        """Overwrite the record returned by the latest read_next, keeping its position."""
        raise NotImplementedError("PrimeRecordStore is a port; use a concrete adapter.")

    def append(self, record: PrimeRecord) -> None:
        """Write a newly discovered record at the end of the store."""
        raise NotImplementedError("PrimeRecordStore is a port; use a concrete adapter.")

    def rewind(self) -> None:
        """Move the read cursor back to the first record."""
        raise NotImplementedError("PrimeRecordStore is a port; use a concrete adapter.")
