"""
KeyLength Console Interface
============================

Rich-powered console abstraction shared by every KeyLength command.

Wraps :class:`rich.console.Console` and adds helpers for the banner,
section rules, severity-coloured messages, tables and status spinners,
all with one consistent palette.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_KEYLENGTH_THEME = Theme(
    {
        "kl.banner": "bold bright_cyan",
        "kl.section": "bold bright_magenta",
        "kl.success": "bold green",
        "kl.warning": "bold yellow",
        "kl.error": "bold red",
        "kl.info": "bold bright_blue",
        "kl.dim": "dim white",
        "kl.secure": "bold green",
        "kl.insecure": "bold red",
        "kl.failed": "bold dark_orange",
    }
)

_TAGLINE = "Key Length Classifier"


class KeyLengthConsole:
    """Unified console interface for KeyLength commands.

    Usage::

        con = KeyLengthConsole()
        con.banner()
        con.section("TLS Scan")
        con.success("Scan complete")

    Args:
        quiet:  Suppress all output (library and test mode).
        stderr: Write to stderr instead of stdout.
    """

    def __init__(self, *, quiet: bool = False, stderr: bool = False) -> None:
        self._console = Console(
            theme=_KEYLENGTH_THEME,
            quiet=quiet,
            stderr=stderr,
            highlight=False,
        )

    def banner(self, version: str = "1.0.0") -> None:
        """Display the KeyLength title panel."""
        text = Text.from_markup(
            f"[kl.banner]KeyLength[/kl.banner]  [kl.dim]{_TAGLINE}[/kl.dim]\n"
            f"[kl.dim]Version: {version}[/kl.dim]"
        )
        self._console.print(Panel(text, border_style="bright_cyan", expand=False))

    def section(self, title: str) -> None:
        """Print a section rule."""
        self._console.rule(f"  {title}  ", style="kl.section", characters="─")

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(f"[kl.success][✔] SUCCESS:[/kl.success] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[kl.error][✘] ERROR:[/kl.error] {message}")

    # ------------------------------------------------------------------ #
    #  Tables and spinners
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Row sequences; each cell is stringified unless it is
                      already a :class:`rich.text.Text`.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(cell if isinstance(cell, Text) else str(cell) for cell in row))

        self._console.print(tbl)

    @contextmanager
    def status(self, message: str = "Working...") -> Iterator[Status]:
        """Show a spinner with *message* while the block runs."""
        with self._console.status(
            f"[kl.info]{message}[/kl.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)
