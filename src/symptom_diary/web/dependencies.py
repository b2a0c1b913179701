"""FastAPI dependencies shared by the route modules."""

from typing import Generator

from fastapi import Depends

from ..services import CorrelationService, EntryStorage, ReportExporter


def get_storage() -> Generator[EntryStorage, None, None]:
    """Open entry storage for one request."""
    with EntryStorage() as storage:
        yield storage


def get_correlation_service() -> CorrelationService:
    return CorrelationService()


def get_exporter(
    service: CorrelationService = Depends(get_correlation_service),
) -> ReportExporter:
    return ReportExporter(service)
