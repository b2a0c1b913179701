"""Trigger correlation analysis between consumed items and symptoms."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional, Sequence

from ..models.entry import (
    ConsumptionEntry,
    DiaryEntry,
    DrinkDiaryEntry,
    FoodDiaryEntry,
    SymptomDiaryEntry,
)

logger = logging.getLogger(__name__)

ANY_SYMPTOM = "any"


def round_half_up(value: float) -> int:
    """Round a non-negative ratio the way a percentage is read (62.5 -> 63)."""
    return int(math.floor(value + 0.5))


def local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class TriggerCorrelation:
    """How often an item was followed by a symptom."""
    item: str
    item_type: str  # 'food' or 'drink'
    symptom: str
    correlation_percentage: int  # 0-100
    occurrences: int
    total_exposures: int
    average_severity: Optional[int] = None

    @property
    def risk_level(self) -> str:
        if self.correlation_percentage >= 70:
            return "high"
        elif self.correlation_percentage >= 50:
            return "moderate"
        return "low"


@dataclass
class Timeframe:
    start: datetime
    end: datetime


@dataclass
class CorrelationAnalysis:
    """Ranked triggers for one analysis window."""
    triggers: list[TriggerCorrelation]
    timeframe: Timeframe
    total_entries: int
    symptom_episodes: int


@dataclass
class TrendPoint:
    """Item and symptom counts for one week."""
    label: str
    symptom_count: int
    item_count: int


@dataclass
class SummaryStats:
    total_entries: int
    symptom_episodes: int
    potential_triggers: int
    tracked_days: int
    data_completeness: int  # percent


@dataclass
class _ExposureRow:
    item_type: str
    total_exposures: int = 0
    symptom_occurrences: int = 0
    severity_sum: int = 0
    severity_count: int = 0


def _is_consumption(entry: DiaryEntry) -> bool:
    return isinstance(entry, (FoodDiaryEntry, DrinkDiaryEntry))


class CorrelationService:
    """
    Links food and drink exposures to symptom episodes that follow them.

    An item consumed up to CORRELATION_WINDOW_HOURS before a symptom is
    counted as a potential trigger for that symptom. Items need at least
    MIN_EXPOSURES exposures before they are reported.

    The service holds no state between calls. ``clock`` returns the current
    time and exists so that callers can freeze it.
    """

    CORRELATION_WINDOW_HOURS = 6
    MIN_EXPOSURES = 3
    POTENTIAL_TRIGGER_THRESHOLD = 50
    HIGH_RISK_RATIO = 0.7
    ENTRIES_PER_COMPLETE_DAY = 4

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or local_now

    def now(self) -> datetime:
        current = self.clock()
        if current.tzinfo is None:
            return current.astimezone()
        return current

    def analyze_correlations(
        self,
        entries: Iterable[DiaryEntry],
        symptom_type: Optional[str] = None,
        timeframe_days: int = 30,
    ) -> CorrelationAnalysis:
        """
        Rank food/drink items by how often they precede symptoms.

        Args:
            entries: Diary entries of any type, in any order
            symptom_type: Only count symptoms of this type (exact match)
            timeframe_days: Size of the analysis window ending now

        Returns:
            Analysis with triggers sorted by correlation percentage
        """
        return self._analyze(list(entries), symptom_type, timeframe_days, self.now())

    def analyze_by_symptom_type(
        self,
        entries: Iterable[DiaryEntry],
        timeframe_days: int = 30,
    ) -> dict[str, CorrelationAnalysis]:
        """
        Run one analysis per symptom type seen in the window.

        Unlike analyze_correlations, each trigger's ``symptom`` names the
        symptom type it was counted against.
        """
        entries = list(entries)
        end = self.now()
        start = end - timedelta(days=timeframe_days)

        symptom_types: list[str] = []
        for entry in entries:
            if not isinstance(entry, SymptomDiaryEntry) or not entry.data.symptom_type:
                continue
            if start <= entry.timestamp <= end and entry.data.symptom_type not in symptom_types:
                symptom_types.append(entry.data.symptom_type)

        return {
            symptom: self._analyze(entries, symptom, timeframe_days, end, label=symptom)
            for symptom in symptom_types
        }

    def _analyze(
        self,
        entries: Sequence[DiaryEntry],
        symptom_type: Optional[str],
        timeframe_days: int,
        end: datetime,
        label: str = ANY_SYMPTOM,
    ) -> CorrelationAnalysis:
        start = end - timedelta(days=timeframe_days)
        in_window = [e for e in entries if start <= e.timestamp <= end]

        consumed = [e for e in in_window if _is_consumption(e)]
        symptoms = [
            e for e in in_window
            if isinstance(e, SymptomDiaryEntry)
            and (not symptom_type or e.data.symptom_type == symptom_type)
        ]

        triggers = self._calculate_trigger_correlations(consumed, symptoms, label)
        # sorted() is stable, so ties keep first-exposure order
        triggers = sorted(triggers, key=lambda t: t.correlation_percentage, reverse=True)

        logger.debug(
            "Analyzed %d entries between %s and %s: %d exposures, %d symptoms, %d triggers",
            len(in_window), start, end, len(consumed), len(symptoms), len(triggers),
        )

        return CorrelationAnalysis(
            triggers=triggers,
            timeframe=Timeframe(start=start, end=end),
            total_entries=len(in_window),
            symptom_episodes=len(symptoms),
        )

    def _calculate_trigger_correlations(
        self,
        consumed: Sequence[ConsumptionEntry],
        symptoms: Sequence[SymptomDiaryEntry],
        label: str = ANY_SYMPTOM,
    ) -> list[TriggerCorrelation]:
        tracker: dict[str, _ExposureRow] = {}

        for entry in consumed:
            for name in entry.data.item_names:
                row = tracker.setdefault(name, _ExposureRow(item_type=entry.type))
                row.total_exposures += 1

        window = timedelta(hours=self.CORRELATION_WINDOW_HOURS)

        for symptom in symptoms:
            # An item eaten twice before one symptom still counts once
            triggered: set[str] = set()
            for candidate in consumed:
                lag = symptom.timestamp - candidate.timestamp
                if timedelta(0) <= lag <= window:
                    triggered.update(candidate.data.item_names)

            severity = symptom.data.severity
            for name in triggered:
                row = tracker[name]
                row.symptom_occurrences += 1
                if severity is not None:
                    row.severity_sum += severity
                    row.severity_count += 1

        correlations = []
        for name, row in tracker.items():
            if row.total_exposures < self.MIN_EXPOSURES:
                continue

            average_severity = None
            if row.severity_count > 0:
                average_severity = round_half_up(row.severity_sum / row.severity_count)

            correlations.append(TriggerCorrelation(
                item=name,
                item_type=row.item_type,
                symptom=label,
                correlation_percentage=round_half_up(
                    row.symptom_occurrences / row.total_exposures * 100
                ),
                occurrences=row.symptom_occurrences,
                total_exposures=row.total_exposures,
                average_severity=average_severity,
            ))

        return correlations

    def generate_trend_data(
        self,
        entries: Iterable[DiaryEntry],
        item_name: str,
        symptom_type: str,
        weeks: int = 4,
    ) -> list[TrendPoint]:
        """
        Weekly counts of an item and a symptom type, oldest week first.

        Items are matched on the whole-entry name (meal label, first
        ingredient, food item or drink item), not on individual ingredients.
        """
        entries = list(entries)
        start = self.now() - timedelta(weeks=max(weeks, 0))

        points = []
        for week in range(weeks):
            week_start = start + timedelta(days=7 * week)
            week_end = week_start + timedelta(days=7)
            in_week = [e for e in entries if week_start <= e.timestamp < week_end]

            item_count = sum(
                1 for e in in_week
                if _is_consumption(e) and e.data.display_name == item_name
            )
            symptom_count = sum(
                1 for e in in_week
                if isinstance(e, SymptomDiaryEntry) and e.data.symptom_type == symptom_type
            )

            points.append(TrendPoint(
                label=f"Week {week + 1}",
                symptom_count=symptom_count,
                item_count=item_count,
            ))

        return points

    def generate_summary_stats(self, entries: Iterable[DiaryEntry]) -> SummaryStats:
        """Get summary statistics over all given entries."""
        entries = list(entries)
        total_entries = len(entries)
        symptom_episodes = sum(1 for e in entries if isinstance(e, SymptomDiaryEntry))
        tracked_days = len({e.local_timestamp.date() for e in entries})

        analysis = self.analyze_correlations(entries)
        potential_triggers = sum(
            1 for t in analysis.triggers
            if t.correlation_percentage > self.POTENTIAL_TRIGGER_THRESHOLD
        )

        data_completeness = 0
        if tracked_days:
            expected = tracked_days * self.ENTRIES_PER_COMPLETE_DAY
            data_completeness = min(100, round_half_up(total_entries / expected * 100))

        return SummaryStats(
            total_entries=total_entries,
            symptom_episodes=symptom_episodes,
            potential_triggers=potential_triggers,
            tracked_days=tracked_days,
            data_completeness=data_completeness,
        )

    def identify_high_risk_periods(self, entries: Iterable[DiaryEntry]) -> list[int]:
        """Hours of the day (0-23, local time) where symptoms cluster."""
        hourly = [0] * 24
        for entry in entries:
            if isinstance(entry, SymptomDiaryEntry):
                hourly[entry.local_timestamp.hour] += 1

        peak = max(hourly)
        if peak == 0:
            return []

        return [
            hour for hour, count in enumerate(hourly)
            if count > peak * self.HIGH_RISK_RATIO
        ]
