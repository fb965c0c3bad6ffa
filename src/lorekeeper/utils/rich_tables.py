# ABOUTME: Rich table helpers for the CLI
# ABOUTME: Pre-configured table generators for item records, listings and logging status

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from lorekeeper.extraction.base import ItemRecord
from lorekeeper.wiki.models import CategoryMember


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
        title: Table title
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
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping."""
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def create_item_table(record: ItemRecord) -> Table:
    """Key-value view of one item record."""
    description = record.description
    item_data = {
        "📛 Title": record.title,
        "🎮 Game": record.game,
        "🏷️ Type": record.type,
        "💰 Price": f"{record.price:,}" if record.price else "Not for sale",
        "✨ Magical": "Yes" if record.is_magical else "No",
        "🖼️ Picture": record.picture or "❌ Missing",
        "🌐 URL": record.url or "Not available",
        "📍 Coordinates": f"{record.geoloc.lat:.4f}, {record.geoloc.lng:.4f}",
        "📜 Description": description[:300] + ("..." if len(description) > 300 else "") if description else "-",
    }
    return create_key_value_table(title="🗡️ Item Record", data=item_data)


def create_members_table(category: str, members: list[CategoryMember]) -> Table:
    """Listing of category members."""
    rows = [[str(index), member.title, member.url] for index, member in enumerate(members, start=1)]
    return create_multi_column_table(
        title=f"📚 Category: {category} ({len(members)} pages)",
        columns=[("#", "dim"), ("Title", "bold green"), ("URL", "blue")],
        rows=rows,
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
    """Print a rich table with consistent spacing."""
    console.print()
    console.print(table)
    console.print()
