"""Console styling and logging setup for the command-line front end."""

import logging
from enum import IntEnum
from typing import Iterable, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

INDENT = "  "

_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "updated": "green",
        "unchanged": "dim",
        "warning": "yellow",
        "error": "bold red",
        "delta.up": "green",
        "delta.down": "red",
    }
)

_console: Optional[Console] = None


class Verbosity(IntEnum):
    BRIEF = 0
    VERBOSE = 1
    DEBUG = 2


def get_console() -> Console:
    """Themed console singleton."""
    global _console
    if _console is None:
        _console = Console(theme=_THEME, highlight=False)
    return _console


def verbosity_from_count(count: int) -> Verbosity:
    if count >= 2:
        return Verbosity.DEBUG
    if count >= 1:
        return Verbosity.VERBOSE
    return Verbosity.BRIEF


def setup_logging(verbosity: Verbosity = Verbosity.BRIEF) -> None:
    level = {
        Verbosity.BRIEF: logging.WARNING,
        Verbosity.VERBOSE: logging.INFO,
        Verbosity.DEBUG: logging.DEBUG,
    }[verbosity]
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=get_console(), show_path=False)],
        force=True,
    )
    # fontTools is chatty at INFO
    logging.getLogger("fontTools").setLevel(max(level, logging.WARNING))


def status(
    level: str,
    message: str,
    items: Iterable[str] = (),
    console: Optional[Console] = None,
) -> None:
    """Print a ``[LEVEL] message`` line followed by indented detail items."""
    console = console or get_console()
    console.print(f"[{level}]{level.upper():<9}[/{level}] {message}")
    for item in items:
        console.print(f"{INDENT}{INDENT}{item}")


def fmt_count(n: int) -> str:
    return f"[bold]{n}[/bold]"


def fmt_delta(delta: int) -> str:
    if delta > 0:
        return f"[delta.up]+{delta}[/delta.up]"
    if delta < 0:
        return f"[delta.down]{delta}[/delta.down]"
    return "[dim]0[/dim]"


def fmt_char(char: str) -> str:
    return f"[bold]{escape(char)}[/bold] [dim]U+{ord(char):04X}[/dim]"


def make_table(title: str, *columns: str) -> Table:
    table = Table(title=title, title_justify="left", header_style="bold")
    for i, col in enumerate(columns):
        table.add_column(col, justify="left" if i == 0 else "right")
    return table
