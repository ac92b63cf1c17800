"""Output formatting utilities for the CLI.

Messages go to stderr so ``oradump schema dump`` can stream schema.rb on
stdout.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable

import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

from oradump.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM
from oradump.core.models import SynonymDefinition

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME, stderr=True)


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            f"[oradump] {message}",
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="?",
        )
        return bool(prompt.ask())

    def tables_table(
        self,
        tables: Iterable[str],
        *,
        display: dict[str, str] | None = None,
        title: str = "Tables",
    ) -> None:
        """
        Render the tables a dump would contain.

        ``display`` maps a raw table name to its prefix/suffix-stripped form.
        """
        display = display or {}
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok")
        t.add_column("Dumped as", style="meta")

        for name in tables:
            t.add_row(name, display.get(name, name))

        console.print(t)

    def synonyms_table(
        self, synonyms: Iterable[SynonymDefinition], title: str = "Synonyms"
    ) -> None:
        """Render synonyms with their fully qualified targets."""
        t = Table(title=title, show_lines=False)
        t.add_column("Synonym", style="ok")
        t.add_column("Target", style="meta")

        for s in synonyms:
            t.add_row(s.name, s.target)

        console.print(t)


out = Out()
