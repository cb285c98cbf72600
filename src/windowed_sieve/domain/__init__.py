from .errors import CorruptRecordError, RecordStoreError, TruncatedRecordError
from .records import U64_LIMIT, PrimeRecord

# Public domain exports keep imports explicit across layers.
__all__ = [
    "CorruptRecordError",
    "PrimeRecord",
    "RecordStoreError",
    "TruncatedRecordError",
    "U64_LIMIT",
]
