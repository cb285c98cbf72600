from __future__ import annotations


# Store failures are I/O failures; every one of them aborts the run.
class RecordStoreError(OSError):
    pass


class TruncatedRecordError(RecordStoreError):
    # Fewer than one record's bytes remain: corruption, not a clean end of file.
    def __init__(self, offset: int, remaining: int) -> None:
        super().__init__(f"Truncated record at offset {offset}: {remaining} trailing bytes")
        self.offset = offset
        self.remaining = remaining


class CorruptRecordError(RecordStoreError):
    # Decoded bytes do not form a valid PrimeRecord.
    def __init__(self, offset: int, reason: str) -> None:
        super().__init__(f"Corrupt record at offset {offset}: {reason}")
        self.offset = offset
        self.reason = reason
