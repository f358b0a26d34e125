"""Rich terminal output utilities for the CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table


console = Console()


class RichOutput:
    """Provides rich terminal output with consistent styling."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the output handler.

        Args:
            console: Rich console instance (creates new one if not provided)
        """
        self.console = console or Console()

    def success(self, message: str):
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str):
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def table(self, title: str, columns: list, rows: list) -> Table:
        """Create and display a formatted table.

        Args:
            title: Table title
            columns: List of column names
            rows: List of row data (list of lists)

        Returns:
            The created table
        """
        table = Table(title=title, show_header=True, header_style="bold magenta")

        for column in columns:
            table.add_column(column)

        for row in rows:
            table.add_row(*[str(cell) for cell in row])

        self.console.print(table)
        return table


def setup_logging(verbosity: int = 0):
    """Configure logging with Rich handler.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                show_time=True,
                show_path=(verbosity >= 2)
            )
        ]
    )

    if verbosity < 2:
        logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("aging_map").setLevel(level)


def format_duration(seconds: float) -> str:
    """Format a short duration, e.g. "850.0 ms" or "2.35 s"."""
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    return f"{seconds:.2f} s"
