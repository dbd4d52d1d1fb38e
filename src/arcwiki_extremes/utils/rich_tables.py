# ABOUTME: Rich table utilities for styled, colorful CLI displays
# ABOUTME: Provides pre-configured table generators for harvest results and logging status

from collections.abc import Iterable, Mapping
from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from arcwiki_extremes.core.models import ExtremeRecord


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def _rating_sort(rating_full: str) -> tuple[int, bool]:
    return int(rating_full.rstrip("+")), rating_full.endswith("+")


def create_extremes_table(artifact: Mapping[str, Iterable[ExtremeRecord]]) -> Table:
    """Create a table of bucket extremes, one row per record, in bucket order.

    Args:
        artifact: Song name to extreme records mapping

    Returns:
        Styled extremes table
    """
    records = [record for song_records in artifact.values() for record in song_records]
    records.sort(key=lambda r: (_rating_sort(r.rating_full), not r.is_min))

    rows = []
    for record in records:
        flags = " ".join(
            flag
            for flag, present in (("[green]min[/green]", record.is_min), ("[red]max[/red]", record.is_max))
            if present
        )
        rows.append(
            [
                record.rating_full,
                flags,
                record.song_name,
                record.tier_label,
                str(record.note_count) if record.note_count is not None else "[dim]unknown[/dim]",
            ]
        )

    return create_multi_column_table(
        title="🎵 Note Count Extremes",
        columns=[
            ("Rating", "bold cyan"),
            ("Extreme", "white"),
            ("Song", "magenta"),
            ("Difficulty", "blue"),
            ("Notes", "yellow"),
        ],
        rows=rows,
    )


def create_harvest_summary_table(result: Any) -> Table:
    """Create a harvest completion summary table.

    Args:
        result: HarvestResult from a finished pipeline run

    Returns:
        Harvest summary table
    """
    stats = result.stats
    summary_data = {
        "🎶 Songs": str(len(result.catalog)),
        "📊 Charts": str(len(result.catalog.difficulties())),
        "📄 Pages Fetched": f"{stats.succeeded}/{stats.total}",
        "🏷️ Extreme Records": str(result.record_count),
    }
    if stats.failed:
        summary_data["❌ Failed Pages"] = f"[bold red]{stats.failed}[/bold red]"

    return create_key_value_table(
        title="🔄 Harvest Summary",
        data=summary_data,
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
