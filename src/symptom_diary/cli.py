"""Command-line interface for Symptom Diary."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .models.entry import DiaryEntry, parse_entries_json
from .services import CorrelationService, EntryStorage, EntryValidator, ReportExporter
from .utils.config import get_settings

app = typer.Typer(
    name="diary",
    help="Symptom Diary - Find food and drink triggers for your symptoms",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for every command."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_entries(user_id: Optional[str] = None) -> list[DiaryEntry]:
    with EntryStorage() as storage:
        return storage.get_entries(user_id)


def percentage_color(value: int) -> str:
    return "red" if value >= 70 else "yellow" if value >= 50 else "green"


@app.command(name="import")
def import_entries(
    json_file: Path = typer.Argument(
        ...,
        help="JSON file holding a list of diary entries",
        exists=True,
    ),
):
    """Validate and import diary entries from a JSON file."""
    try:
        entries = parse_entries_json(json_file.read_bytes())
    except ValidationError as e:
        console.print(f"[red]Could not read {json_file.name}: {e.error_count()} errors[/red]")
        raise typer.Exit(1)

    imported = 0
    rejected = 0
    with EntryStorage() as storage:
        for entry in entries:
            result = EntryValidator.validate_entry(entry)
            if not result.is_valid:
                rejected += 1
                console.print(f"[yellow]Skipped {entry.id}: {'; '.join(result.errors)}[/yellow]")
                continue
            storage.save_entry(entry, validate=False)
            imported += 1

    console.print(f"[green]✓ Imported {imported} entries[/green]")
    if rejected:
        console.print(f"[yellow]{rejected} entries rejected[/yellow]")
        raise typer.Exit(1)


@app.command(name="list")
def list_entries(
    days: int = typer.Option(7, "--days", "-n", help="Number of days to show"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Only this user's entries"),
):
    """List recent diary entries."""
    since = datetime.now().astimezone() - timedelta(days=days)
    entries = [e for e in load_entries(user) if e.timestamp >= since]

    if not entries:
        console.print("[yellow]No entries found[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Recent Entries (last {days} days)")
    table.add_column("When", style="cyan")
    table.add_column("Type")
    table.add_column("Details")

    for entry in reversed(entries):
        table.add_row(
            entry.local_timestamp.strftime("%Y-%m-%d %H:%M"),
            entry.type,
            entry.describe(),
        )

    console.print(table)


@app.command()
def triggers(
    symptom: Optional[str] = typer.Option(
        None, "--symptom", "-s",
        help="Only correlate with this symptom type (e.g. bloating)",
    ),
    days: Optional[int] = typer.Option(None, "--days", "-n", help="Analysis window in days"),
    user: Optional[str] = typer.Option(None, "--user", "-u"),
):
    """Show food and drink items that precede symptoms."""
    if days is None:
        days = get_settings().default_timeframe_days
    analysis = CorrelationService().analyze_correlations(load_entries(user), symptom, days)

    console.print(
        f"{analysis.total_entries} entries, {analysis.symptom_episodes} symptom episodes "
        f"between {analysis.timeframe.start:%Y-%m-%d} and {analysis.timeframe.end:%Y-%m-%d}"
    )

    if not analysis.triggers:
        console.print("[yellow]Not enough data to identify triggers yet[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Potential Triggers")
    table.add_column("Item", style="cyan")
    table.add_column("Type")
    table.add_column("Correlation", justify="right")
    table.add_column("Occurrences", justify="right")
    table.add_column("Avg Severity", justify="right")

    for t in analysis.triggers:
        color = percentage_color(t.correlation_percentage)
        table.add_row(
            t.item,
            t.item_type,
            f"[{color}]{t.correlation_percentage}%[/{color}]",
            f"{t.occurrences}/{t.total_exposures}",
            f"{t.average_severity}/10" if t.average_severity else "-",
        )

    console.print(table)


@app.command(name="by-symptom")
def by_symptom(
    days: Optional[int] = typer.Option(None, "--days", "-n", help="Analysis window in days"),
    user: Optional[str] = typer.Option(None, "--user", "-u"),
):
    """Show the strongest trigger for each symptom type."""
    if days is None:
        days = get_settings().default_timeframe_days
    breakdown = CorrelationService().analyze_by_symptom_type(load_entries(user), days)

    if not breakdown:
        console.print("[yellow]No symptoms logged in this period[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Triggers by Symptom")
    table.add_column("Symptom", style="cyan")
    table.add_column("Episodes", justify="right")
    table.add_column("Top Trigger")
    table.add_column("Correlation", justify="right")

    for symptom, analysis in breakdown.items():
        top = analysis.triggers[0] if analysis.triggers else None
        table.add_row(
            symptom,
            str(analysis.symptom_episodes),
            top.item if top else "-",
            f"{top.correlation_percentage}%" if top else "-",
        )

    console.print(table)


@app.command()
def trends(
    item: str = typer.Argument(..., help="Food or drink name"),
    symptom: str = typer.Argument(..., help="Symptom type"),
    weeks: Optional[int] = typer.Option(None, "--weeks", "-w", help="Number of weeks"),
    user: Optional[str] = typer.Option(None, "--user", "-u"),
):
    """Weekly counts of an item next to a symptom."""
    if weeks is None:
        weeks = get_settings().default_trend_weeks
    points = CorrelationService().generate_trend_data(load_entries(user), item, symptom, weeks)

    table = Table(title=f"{item} vs {symptom}")
    table.add_column("Week", style="cyan")
    table.add_column(item, justify="right")
    table.add_column(symptom, justify="right")

    for point in points:
        table.add_row(point.label, str(point.item_count), str(point.symptom_count))

    console.print(table)


@app.command()
def summary(
    user: Optional[str] = typer.Option(None, "--user", "-u"),
):
    """Show summary statistics."""
    stats = CorrelationService().generate_summary_stats(load_entries(user))

    console.print(Panel(
        f"Total entries: {stats.total_entries}\n"
        f"Symptom episodes: {stats.symptom_episodes}\n"
        f"Days tracked: {stats.tracked_days}\n"
        f"Potential triggers: {stats.potential_triggers}\n"
        f"Data completeness: {stats.data_completeness}%",
        title="📔 Summary",
    ))


@app.command(name="risk-hours")
def risk_hours(
    user: Optional[str] = typer.Option(None, "--user", "-u"),
):
    """Show the hours of day when symptoms cluster."""
    hours = CorrelationService().identify_high_risk_periods(load_entries(user))

    if not hours:
        console.print("[yellow]No symptoms logged[/yellow]")
        raise typer.Exit(0)

    console.print("High-risk hours: " + ", ".join(f"{h:02d}:00" for h in hours))


@app.command()
def report(
    symptom: Optional[str] = typer.Option(None, "--symptom", "-s"),
    days: Optional[int] = typer.Option(None, "--days", "-n", help="Report period in days"),
    user: Optional[str] = typer.Option(None, "--user", "-u"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write report to file"),
):
    """Generate a plain-text health report."""
    exporter = ReportExporter()
    start = end = None
    if days is not None:
        end = exporter.service.now()
        start = end - timedelta(days=days)

    health_report = exporter.build_report(load_entries(user), symptom, start, end)
    text = exporter.render_text(health_report, patient_name=user)

    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]✓ Report written to {output}[/green]")
    else:
        console.print(text, markup=False)


@app.command(name="export-csv")
def export_csv(
    output: Path = typer.Argument(..., help="CSV file to write"),
    user: Optional[str] = typer.Option(None, "--user", "-u"),
):
    """Export diary entries to CSV."""
    entries = load_entries(user)
    ReportExporter().export_csv(entries, output)
    console.print(f"[green]✓ Exported {len(entries)} entries to {output}[/green]")


@app.command()
def status():
    """Show configuration and storage status."""
    settings = get_settings()

    table = Table(title="Configuration Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Data file", str(settings.entries_path.absolute()))
    table.add_row("Default window", f"{settings.default_timeframe_days} days")
    table.add_row("Default trend", f"{settings.default_trend_weeks} weeks")
    table.add_row("Correlation window", f"{CorrelationService.CORRELATION_WINDOW_HOURS} hours")
    table.add_row("Log level", settings.log_level)
    table.add_row("Web API", f"{settings.web_host}:{settings.web_port}")

    console.print(table)


@app.command()
def web(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Start the web API."""
    import uvicorn

    settings = get_settings()
    host = host or settings.web_host
    port = port or settings.web_port

    console.print(f"[green]Starting web API at http://{host}:{port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "symptom_diary.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
