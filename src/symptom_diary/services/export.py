"""Report and CSV export built on the correlation analysis."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from ..models.entry import (
    DiaryEntry,
    DrinkDiaryEntry,
    FoodDiaryEntry,
    SymptomDiaryEntry,
)
from .correlation import (
    CorrelationService,
    SummaryStats,
    Timeframe,
    TriggerCorrelation,
)

CSV_COLUMNS = [
    "Date", "Time", "Type", "UserId", "Item", "Brand",
    "Portion", "MealType", "Severity", "Duration", "Notes",
]


@dataclass
class HealthReport:
    """Everything a printable report shows."""
    generated_at: datetime
    period: Optional[Timeframe]
    summary: SummaryStats
    triggers: list[TriggerCorrelation]
    recent_entries: dict[date, list[DiaryEntry]]
    recommendations: list[str]


def _entry_to_row(entry: DiaryEntry) -> dict:
    """Convert a diary entry to a flat CSV row."""
    when = entry.local_timestamp
    row = {column: "" for column in CSV_COLUMNS}
    row.update({
        "Date": when.strftime("%Y-%m-%d"),
        "Time": when.strftime("%H:%M"),
        "Type": entry.type,
        "UserId": entry.user_id,
    })

    if isinstance(entry, FoodDiaryEntry):
        food = entry.data
        row.update({
            "Item": food.display_name,
            "Brand": food.brand_name or "",
            "Portion": food.portion or "",
            "MealType": food.meal_type.value if food.meal_type else "",
        })
        if food.ingredients:
            row["Notes"] = ", ".join(i.name for i in food.ingredients)
    elif isinstance(entry, DrinkDiaryEntry):
        drink = entry.data
        row.update({
            "Item": drink.drink_item or "",
            "Brand": drink.brand_name or "",
            "Portion": drink.amount or "",
        })
    elif isinstance(entry, SymptomDiaryEntry):
        symptom = entry.data
        row.update({
            "Item": symptom.symptom_type or "",
            "Severity": symptom.severity if symptom.severity is not None else "",
            "Duration": symptom.duration if symptom.duration is not None else "",
            "Notes": symptom.custom_symptom or "",
        })

    return row


class ReportExporter:
    """
    Builds health reports and CSV exports from diary entries.

    Works with an empty entry list: the summary is zeroed and the
    recommendations fall back to general tracking advice.
    """

    TOP_TRIGGERS = 10
    RECENT_DAYS = 7
    DEFAULT_TIMEFRAME_DAYS = 30

    def __init__(self, service: Optional[CorrelationService] = None):
        self.service = service or CorrelationService()

    def entries_to_dataframe(self, entries: Iterable[DiaryEntry]) -> pd.DataFrame:
        rows = [_entry_to_row(e) for e in entries]
        return pd.DataFrame(rows, columns=CSV_COLUMNS)

    def export_csv(self, entries: Iterable[DiaryEntry], path: Path) -> Path:
        """Write entries to a CSV file and return its path."""
        df = self.entries_to_dataframe(entries)
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
        return path

    def build_report(
        self,
        entries: Iterable[DiaryEntry],
        symptom_type: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> HealthReport:
        """
        Assemble summary, top triggers, the last week's entries and advice.

        When both ``start`` and ``end`` are given the trigger analysis covers
        that many (rounded up) days; otherwise the last 30 days.
        """
        entries = list(entries)
        now = self.service.now()

        period = None
        timeframe_days = self.DEFAULT_TIMEFRAME_DAYS
        if start is not None and end is not None:
            period = Timeframe(start=start, end=end)
            timeframe_days = math.ceil((end - start) / timedelta(days=1))

        summary = self.service.generate_summary_stats(entries)
        analysis = self.service.analyze_correlations(entries, symptom_type, timeframe_days)

        return HealthReport(
            generated_at=now,
            period=period,
            summary=summary,
            triggers=analysis.triggers[:self.TOP_TRIGGERS],
            recent_entries=self._group_recent_entries(entries, now),
            recommendations=self.generate_recommendations(analysis.triggers),
        )

    def _group_recent_entries(
        self,
        entries: list[DiaryEntry],
        now: datetime,
    ) -> dict[date, list[DiaryEntry]]:
        """Entries from the last RECENT_DAYS days, newest first, by local date."""
        recent = [e for e in entries if now - e.timestamp <= timedelta(days=self.RECENT_DAYS)]
        recent.sort(key=lambda e: e.timestamp, reverse=True)

        grouped: dict[date, list[DiaryEntry]] = {}
        for entry in recent:
            grouped.setdefault(entry.local_timestamp.date(), []).append(entry)
        return grouped

    @staticmethod
    def generate_recommendations(triggers: list[TriggerCorrelation]) -> list[str]:
        """Plain-language advice derived from trigger strength."""
        if not triggers:
            return [
                "Continue tracking your food intake and symptoms to identify patterns.",
                "Aim for at least 3 meals per day with consistent logging.",
            ]

        recommendations = []
        high = [t.item for t in triggers if t.risk_level == "high"]
        moderate = [t.item for t in triggers if t.risk_level == "moderate"]

        if high:
            recommendations.append(
                f"Consider avoiding or reducing: {', '.join(high[:3])} "
                "as they show strong correlation with symptoms."
            )
        if moderate:
            recommendations.append(
                f"Monitor consumption of: {', '.join(moderate[:3])} and note any symptoms."
            )

        recommendations.extend([
            "Keep a consistent eating schedule and note portion sizes.",
            "Share this report with your healthcare provider for personalized advice.",
            "Continue daily logging to improve pattern recognition accuracy.",
        ])
        return recommendations

    @staticmethod
    def render_text(report: HealthReport, patient_name: Optional[str] = None) -> str:
        """Render a report as plain text."""
        lines = ["Symptom Diary - Health Report"]
        if patient_name:
            lines.append(f"Patient: {patient_name}")
        lines.append(f"Generated: {report.generated_at.strftime('%B %d, %Y')}")
        if report.period:
            lines.append(
                f"Report Period: {report.period.start.strftime('%b %d, %Y')} - "
                f"{report.period.end.strftime('%b %d, %Y')}"
            )

        s = report.summary
        lines += [
            "",
            "Summary Statistics",
            f"  Total Entries: {s.total_entries}",
            f"  Symptom Episodes: {s.symptom_episodes}",
            f"  Days Tracked: {s.tracked_days}",
            f"  Potential Triggers Identified: {s.potential_triggers}",
            f"  Data Completeness: {s.data_completeness}%",
        ]

        if report.triggers:
            lines += ["", "Potential Triggers"]
            for t in report.triggers:
                severity = f"{t.average_severity}/10" if t.average_severity else "N/A"
                lines.append(
                    f"  {t.item[:30]:<30} {t.correlation_percentage:>3}%  "
                    f"{t.occurrences}/{t.total_exposures}  {severity}"
                )

        if report.recent_entries:
            lines += ["", f"Recent Diary Entries (Last {ReportExporter.RECENT_DAYS} Days)"]
            for day, day_entries in report.recent_entries.items():
                lines.append(f"  {day.strftime('%A, %B %d, %Y')}")
                for entry in day_entries:
                    time_str = entry.local_timestamp.strftime("%I:%M %p")
                    lines.append(f"    {time_str} - {entry.type}: {entry.describe()}")

        lines += ["", "Recommendations"]
        lines += [f"  • {r}" for r in report.recommendations]

        return "\n".join(lines)
