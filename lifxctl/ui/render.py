"""Table and message renderers."""

from __future__ import annotations

from collections.abc import Sequence

import typer
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text


class RichRenderer:
    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console = console or Console(soft_wrap=False)
        self.error_console = error_console or Console(stderr=True, soft_wrap=False)

    def table(self, title: str, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        table = Table(
            title=Text(title, justify="center"),
            show_header=True,
            header_style="bold cyan",
            box=box.ROUNDED,
        )
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

    def info(self, message: str) -> None:
        self.console.print(Text(message))

    def error(self, message: str) -> None:
        self.error_console.print(Text(f"Error: {message}", style="bold red"))


class PlainRenderer:
    """Column-aligned text output for dumb terminals and pipes."""

    def table(self, title: str, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        widths = [len(header) for header in headers]
        for row in rows:
            for index, cell in enumerate(row):
                widths[index] = max(widths[index], len(cell))

        def _line(cells: Sequence[str]) -> str:
            return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

        typer.echo(f"{title}:")
        typer.echo(_line(headers))
        typer.echo(_line(["-" * width for width in widths]))
        for row in rows:
            typer.echo(_line(row))

    def info(self, message: str) -> None:
        typer.echo(message)

    def error(self, message: str) -> None:
        typer.echo(f"Error: {message}", err=True)
