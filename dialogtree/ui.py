"""Reusable console output built with rich.

Used before and after a dialog walk, while the terminal is not owned by
the dialog program.
"""

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import COLORS


def create_header_panel(title: str, subtitle: str | None = None) -> Panel:
    """Create a styled header panel.

    Args:
        title: Main title text
        subtitle: Optional dimmed second line

    Returns:
        Rich Panel object
    """
    if subtitle:
        content = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]"
    else:
        content = f"[bold]{title}[/bold]"

    return Panel(content, border_style=COLORS["primary"], padding=(0, 1), expand=False)


def create_error_panel(content: str, title: str | None = None) -> Panel:
    return Panel(
        content,
        title=title or "Error",
        border_style=COLORS["error"],
        padding=(1, 2),
    )


def create_results_table(values: dict[str, str]) -> Table:
    """Create a two-column table of collected values."""
    table = Table(
        show_header=True,
        header_style=f"bold {COLORS['primary']}",
        border_style=COLORS["dim"],
        padding=(0, 1),
        expand=False,
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", style=COLORS["primary"])

    for name, value in values.items():
        table.add_row(name, format_value(value))
    return table


def format_value(value: str) -> Text:
    if not value:
        return Text("(empty)", style=COLORS["dim"])
    return Text(value)
