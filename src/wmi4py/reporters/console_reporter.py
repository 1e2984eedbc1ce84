"""Rich console output of query results."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def print_names(names: list[str], title: str, console: Console | None = None) -> None:
    """Print a single-column table of class or property names."""
    con = console or Console()
    table = _titled_table(f"{title} ({len(names)} total)")
    table.add_column("Name", style="cyan")
    for name in names:
        table.add_row(escape(name))
    con.print(table)


def print_object(obj: dict[str, str], title: str, console: Console | None = None) -> None:
    """Print one WMI object as a property/value table."""
    con = console or Console()
    table = _titled_table(title)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    for key, value in obj.items():
        table.add_row(escape(key), escape(value))
    con.print(table)


def print_object_list(objects: list[dict[str, str]], title: str, console: Console | None = None) -> None:
    """Print every instance of a class, one table per instance."""
    con = console or Console()
    if not objects:
        con.print(f"[yellow]No instances of {title} found[/yellow]")
        return
    for index, obj in enumerate(objects, start=1):
        print_object(obj, f"{title} [{index}/{len(objects)}]", console=con)
        con.print()


def _titled_table(title: str) -> Table:
    # Keep the title on one line: rich wraps it to the table width
    return Table(title=escape(title), min_width=len(title) + 4)
