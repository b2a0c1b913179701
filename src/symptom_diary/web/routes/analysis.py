"""Routes for trigger analysis and reports."""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...services import CorrelationService, EntryStorage, ReportExporter
from ..dependencies import get_correlation_service, get_exporter, get_storage

router = APIRouter()


@router.get("/correlations")
async def get_correlations(
    symptom_type: Optional[str] = Query(default=None),
    days: int = Query(default=30, ge=1, le=730),
    user_id: Optional[str] = Query(default=None),
    storage: EntryStorage = Depends(get_storage),
    service: CorrelationService = Depends(get_correlation_service),
):
    """Triggers ranked by correlation percentage."""
    return service.analyze_correlations(storage.get_entries(user_id), symptom_type, days)


@router.get("/correlations/by-symptom")
async def get_correlations_by_symptom(
    days: int = Query(default=30, ge=1, le=730),
    user_id: Optional[str] = Query(default=None),
    storage: EntryStorage = Depends(get_storage),
    service: CorrelationService = Depends(get_correlation_service),
):
    """One trigger ranking per symptom type."""
    return service.analyze_by_symptom_type(storage.get_entries(user_id), days)


@router.get("/trends")
async def get_trends(
    item: str = Query(...),
    symptom_type: str = Query(...),
    weeks: int = Query(default=4, ge=1, le=52),
    user_id: Optional[str] = Query(default=None),
    storage: EntryStorage = Depends(get_storage),
    service: CorrelationService = Depends(get_correlation_service),
):
    """Weekly item and symptom counts for charting."""
    return service.generate_trend_data(storage.get_entries(user_id), item, symptom_type, weeks)


@router.get("/summary")
async def get_summary(
    user_id: Optional[str] = Query(default=None),
    storage: EntryStorage = Depends(get_storage),
    service: CorrelationService = Depends(get_correlation_service),
):
    """Summary statistics."""
    return service.generate_summary_stats(storage.get_entries(user_id))


@router.get("/high-risk-hours")
async def get_high_risk_hours(
    user_id: Optional[str] = Query(default=None),
    storage: EntryStorage = Depends(get_storage),
    service: CorrelationService = Depends(get_correlation_service),
):
    return {"hours": service.identify_high_risk_periods(storage.get_entries(user_id))}


@router.get("/report")
async def get_report(
    symptom_type: Optional[str] = Query(default=None),
    days: Optional[int] = Query(default=None, ge=1, le=730),
    user_id: Optional[str] = Query(default=None),
    storage: EntryStorage = Depends(get_storage),
    exporter: ReportExporter = Depends(get_exporter),
):
    """Full report: summary, top triggers, recent entries and recommendations."""
    start = end = None
    if days:
        end = exporter.service.now()
        start = end - timedelta(days=days)

    report = exporter.build_report(storage.get_entries(user_id), symptom_type, start, end)

    return {
        "generated_at": report.generated_at.isoformat(),
        "period": {
            "start": report.period.start.isoformat(),
            "end": report.period.end.isoformat(),
        } if report.period else None,
        "summary": report.summary,
        "triggers": report.triggers,
        "recent_entries": {
            day.isoformat(): [e.model_dump(mode="json") for e in day_entries]
            for day, day_entries in report.recent_entries.items()
        },
        "recommendations": report.recommendations,
    }
