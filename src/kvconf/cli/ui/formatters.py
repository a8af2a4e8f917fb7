from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme


THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "err": "bold red",
        "muted": "dim",
        "key": "cyan",
        "path": "magenta",
    }
)


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


# ----------------------------
# Console + logging
# ----------------------------

@dataclass(frozen=True)
class UI:
    console: Console
    err_console: Console
    verbose: bool = False


def get_ui(*, verbose: bool = False) -> UI:
    console = Console(theme=THEME)
    err_console = Console(theme=THEME, stderr=True)
    setup_logging(err_console, verbose=verbose)
    return UI(console=console, err_console=err_console, verbose=verbose)


def setup_logging(console: Console, *, verbose: bool = False) -> None:
    log = logging.getLogger("kvconf")
    for h in list(log.handlers):
        if isinstance(h, RichHandler):
            log.removeHandler(h)
    log.addHandler(RichHandler(console=console, show_path=False))
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)


# ----------------------------
# Entry tables
# ----------------------------

def render_entries_table(
    console: Console,
    entries: Iterable[Tuple[str, str]],
    *,
    title: Optional[str] = None,
    key_header: str = "Key",
    max_value_len: int = 120,
) -> None:
    rows: Sequence[Tuple[str, str]] = sorted(entries)

    if not rows:
        console.print("[muted]No entries.[/muted]")
        return

    table = Table(title=title or f"Entries ({len(rows)})", show_lines=False)
    table.add_column(key_header, style="key", no_wrap=True)
    table.add_column("Value")

    for k, v in rows:
        table.add_row(k, _short(v, max_value_len))

    console.print(table)


def render_json(data: Mapping[str, str]) -> None:
    # bypass rich so long values are never wrapped
    typer.echo(json.dumps(dict(data), indent=2, sort_keys=True))
