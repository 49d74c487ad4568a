"""Shared utility functions for rn-scaffold.

Provides the ``OutputChannel`` progress log, Rich-based console helpers and
the component name check used by the generators.  Output helpers write to a
module-level ``Console``; the progress log is always an explicit handle so
that callers (and tests) decide where scaffolding progress goes.
"""

from __future__ import annotations

import re
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Output channel
# ---------------------------------------------------------------------------


class LogFileError(Exception):
    """Raised when the progress log file cannot be written."""


class OutputChannel:
    """Append-only sink for plain-text progress lines.

    Every line is recorded in :attr:`lines`, echoed (dimmed) to the channel's
    console when *echo* is on, and appended to *log_file* when one is given.

    Args:
        name: Channel label, printed as a prefix on echoed lines.
        console: Rich console to echo to.  Defaults to the module console.
        echo: Whether to print lines as they are appended.
        log_file: Optional file that receives every line.
    """

    def __init__(
        self,
        name: str = "rn-scaffold",
        *,
        console: Console | None = None,
        echo: bool = True,
        log_file: str | Path | None = None,
    ) -> None:
        self.name = name
        self.console = console if console is not None else _shared_console()
        self.echo = echo
        self.log_file = Path(log_file) if log_file else None
        self.lines: list[str] = []

    def check_log_file(self) -> None:
        """Create the log file (and its folder) now if it does not exist.

        Raises:
            LogFileError: The log file cannot be opened for appending.
        """
        if self.log_file is not None:
            self._write_log("")

    def append_line(self, text: str) -> None:
        """Record a single progress line.

        Raises:
            LogFileError: The line could not be appended to the log file.
        """
        self.lines.append(text)
        if self.echo:
            self.console.print(f"[dim]\\[{self.name}][/dim] {escape(text)}", highlight=False)
        if self.log_file is not None:
            self._write_log(text + "\n")

    def _write_log(self, data: str) -> None:
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self.log_file.open("a", encoding="utf-8", errors="backslashreplace") as fh:
                fh.write(data)
        except OSError as exc:
            raise LogFileError(f"Cannot write log file {self.log_file}: {exc}") from exc


def _shared_console() -> Console:
    return console


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

_COMPONENT_NAME_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


def is_component_name(name: str) -> bool:
    """Return ``True`` if *name* is a PascalCase identifier like ``UserCard``."""
    return bool(_COMPONENT_NAME_RE.match(name))


def printable(text: str) -> str:
    """Replace characters that cannot be encoded as UTF-8 with escapes.

    Undecodable command-line bytes reach Python as lone surrogates;
    ``printable("App\\udcff")`` gives ``"App\\\\udcff"``.
    """
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(rows: dict[str, object], title: str = "Scaffold Results") -> None:
    """Show *rows* as a label / value table followed by a blank line."""
    table = Table(title=title, header_style="bold cyan")
    table.add_column("What", style="dim", no_wrap=True)
    table.add_column("Result", overflow="fold")
    for label, value in rows.items():
        table.add_row(label, escape(str(value)))
    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
