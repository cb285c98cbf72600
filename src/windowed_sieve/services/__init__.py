from .exporter import export_records, export_store, format_record
from .sieve import (
    DEFAULT_UPPER_LIMIT,
    DEFAULT_WINDOW_SIZE,
    SieveReport,
    WindowedSieve,
    WindowSummary,
)

__all__ = [
    "DEFAULT_UPPER_LIMIT",
    "DEFAULT_WINDOW_SIZE",
    "SieveReport",
    "WindowSummary",
    "WindowedSieve",
    "export_records",
    "export_store",
    "format_record",
]
