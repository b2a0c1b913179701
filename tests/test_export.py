"""Tests for report and CSV export."""

from datetime import date, datetime, timedelta

import pandas as pd

from symptom_diary.services.correlation import TriggerCorrelation
from symptom_diary.services.export import CSV_COLUMNS, ReportExporter
from tests.factories import NOW, create_drink, create_food, create_symptom, frozen_service


def make_trigger(item: str, percentage: int) -> TriggerCorrelation:
    return TriggerCorrelation(
        item=item,
        item_type="food",
        symptom="any",
        correlation_percentage=percentage,
        occurrences=percentage // 10,
        total_exposures=10,
    )


class TestRecommendations:
    """Tests for generate_recommendations."""

    def test_no_triggers(self):
        recommendations = ReportExporter.generate_recommendations([])

        assert len(recommendations) == 2
        assert recommendations[0].startswith("Continue tracking")

    def test_high_and_moderate(self):
        triggers = [
            make_trigger("Beans", 90),
            make_trigger("Milk", 70),
            make_trigger("Onion", 55),
            make_trigger("Rice", 10),
        ]

        recommendations = ReportExporter.generate_recommendations(triggers)

        assert recommendations[0] == (
            "Consider avoiding or reducing: Beans, Milk "
            "as they show strong correlation with symptoms."
        )
        assert recommendations[1] == "Monitor consumption of: Onion and note any symptoms."
        assert len(recommendations) == 5

    def test_only_top_three_named(self):
        triggers = [make_trigger(name, 80) for name in ("A", "B", "C", "D")]

        recommendations = ReportExporter.generate_recommendations(triggers)

        assert "A, B, C " in recommendations[0]
        assert "D" not in recommendations[0]


class TestBuildReport:
    """Tests for build_report."""

    def test_empty_entries(self):
        report = ReportExporter(frozen_service()).build_report([])

        assert report.summary.total_entries == 0
        assert report.summary.data_completeness == 0
        assert report.triggers == []
        assert report.recent_entries == {}
        assert report.period is None
        assert report.generated_at == NOW

    def test_report_contents(self, bread_entries):
        recent = [
            create_drink(NOW - timedelta(hours=2), "Tea"),
            create_drink(NOW - timedelta(days=1, hours=2), "Coffee"),
        ]

        report = ReportExporter(frozen_service()).build_report(bread_entries + recent)

        assert report.summary.total_entries == 12
        assert [t.item for t in report.triggers] == ["White Bread"]
        # newest day first; bread entries from Jan 3 12:00 on are within the week
        days = list(report.recent_entries)
        assert days == sorted(days, reverse=True)
        assert sum(len(v) for v in report.recent_entries.values()) == 8
        assert report.recommendations[0].startswith("Consider avoiding or reducing: White Bread")

    def test_date_range_sets_timeframe(self, bread_entries):
        exporter = ReportExporter(frozen_service())

        # Bread entries are Jan 1-5, NOW is Jan 10
        short = exporter.build_report(bread_entries, start=NOW - timedelta(days=3), end=NOW)
        partial = exporter.build_report(
            bread_entries, start=NOW - timedelta(days=6, hours=12), end=NOW,
        )

        assert short.triggers == []
        assert short.period.end == NOW
        # 6.5 days rounds up to 7, reaching back to Jan 3
        assert [t.total_exposures for t in partial.triggers] == [3]

    def test_symptom_filter(self, bread_entries):
        report = ReportExporter(frozen_service()).build_report(bread_entries, symptom_type="gas")

        assert report.triggers[0].occurrences == 0
        # summary is always unfiltered
        assert report.summary.symptom_episodes == 5

    def test_render_text(self, bread_entries):
        exporter = ReportExporter(frozen_service())
        report = exporter.build_report(bread_entries + [create_symptom(NOW - timedelta(hours=1))])

        text = exporter.render_text(report, patient_name="Alex")

        assert "Patient: Alex" in text
        assert "Total Entries: 11" in text
        assert "White Bread" in text
        assert "Recent Diary Entries" in text
        assert "symptom: bloating (6/10)" in text


class TestCsvExport:
    """Tests for CSV export."""

    def test_dataframe_columns(self):
        df = ReportExporter().entries_to_dataframe([])

        assert list(df.columns) == CSV_COLUMNS
        assert df.empty

    def test_rows(self):
        entries = [
            create_food(datetime(2024, 1, 1, 12, 30), meal_label="Toast",
                        ingredients=["White Bread", "Butter"], portion=None),
            create_drink(datetime(2024, 1, 1, 13, 0), "Coffee", amount="1 cup"),
            create_symptom(datetime(2024, 1, 1, 15, 0), severity=7),
        ]

        df = ReportExporter().entries_to_dataframe(entries)

        assert list(df["Type"]) == ["food", "drink", "symptom"]
        assert list(df["Item"]) == ["Toast", "Coffee", "bloating"]
        assert df.loc[0, "Notes"] == "White Bread, Butter"
        assert df.loc[0, "MealType"] == "lunch"
        assert df.loc[0, "Date"] == "2024-01-01"
        assert df.loc[0, "Time"] == "12:30"
        assert df.loc[1, "Portion"] == "1 cup"
        assert df.loc[2, "Severity"] == 7

    def test_export_csv(self, tmp_path):
        path = tmp_path / "out" / "entries.csv"
        entries = [create_drink(datetime(2024, 1, 1, 13, 0), "Coffee")]

        result = ReportExporter().export_csv(entries, path)

        assert result == path
        df = pd.read_csv(path)
        assert df.loc[0, "Item"] == "Coffee"
        assert df.loc[0, "UserId"] == "user1"
        assert date.fromisoformat(df.loc[0, "Date"]) == date(2024, 1, 1)
