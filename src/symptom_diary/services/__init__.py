"""Business logic services."""

from .correlation import CorrelationService
from .export import ReportExporter
from .storage import EntryStorage
from .validation import EntryValidationError, EntryValidator

__all__ = [
    "CorrelationService",
    "ReportExporter",
    "EntryStorage",
    "EntryValidator",
    "EntryValidationError",
]
