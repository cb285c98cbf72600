from .domain import PrimeRecord
from .services import SieveReport, WindowedSieve, export_records

__all__ = ["PrimeRecord", "SieveReport", "WindowedSieve", "export_records"]
