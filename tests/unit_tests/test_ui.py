"""Unit tests for dialogtree.ui."""

from rich.console import Console
from rich.panel import Panel

from dialogtree.ui import create_error_panel, create_header_panel, create_results_table, format_value


def _render(renderable) -> str:
    console = Console(width=80, record=True)
    console.print(renderable)
    return console.export_text()


def test_results_table_rows():
    """Test the results table has one row per value."""
    table = create_results_table({"Name": "Ada", "Toppings": ""})

    assert table.row_count == 2
    text = _render(table)
    assert "Ada" in text
    assert "(empty)" in text


def test_format_value():
    """Test empty values are shown as a placeholder."""
    assert format_value("").plain == "(empty)"
    assert format_value("x").plain == "x"


def test_panels():
    """Test header and error panel construction."""
    assert isinstance(create_header_panel("dialogtree"), Panel)
    assert "Values" in _render(create_header_panel("dialogtree", "Values collected"))
    assert create_error_panel("boom").title == "Error"
    assert create_error_panel("boom", title="Missing dependency").title == "Missing dependency"
