from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from kvconf.cli.ui import get_ui, render_entries_table, render_json
from kvconf.cli.utils.loading import open_store
from kvconf.core.errors import ExitCode

FILE_ARG = typer.Argument(..., help="YAML file to load.")
SETTINGS_OPT = typer.Option(
    None, "--settings", exists=True, dir_okay=False, help="Extra settings file (TOML)."
)
STRICT_OPT = typer.Option(
    None,
    "--strict/--lenient",
    help="Fail on malformed YAML instead of keeping the partial document (overrides settings if set).",
)
DEFAULT_OPT = typer.Option(
    [], "--default", "-d", help="Fallback KEY=VALUE applied after loading (repeatable)."
)
VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Log every stored entry.")


def get_cmd(
    path: Path = FILE_ARG,
    key: str = typer.Argument(..., help="Key path without the namespace, e.g. net:eth0:ip."),
    settings_file: Optional[Path] = SETTINGS_OPT,
    strict: Optional[bool] = STRICT_OPT,
    default: List[str] = DEFAULT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Print a single value."""
    ui = get_ui(verbose=verbose)
    store = open_store(
        path,
        console=ui.err_console,
        settings_file=settings_file,
        strict=strict,
        defaults=default,
    )

    value = store.get(key)
    if value is None:
        ui.err_console.print(f"[warn]Key not found:[/warn] {key}")
        raise typer.Exit(int(ExitCode.NOT_FOUND))

    typer.echo(value)


def collection_cmd(
    path: Path = FILE_ARG,
    prefix: str = typer.Argument(..., help="Key prefix, e.g. net:eth0."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    settings_file: Optional[Path] = SETTINGS_OPT,
    strict: Optional[bool] = STRICT_OPT,
    default: List[str] = DEFAULT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Print every entry below a prefix, keyed by the rest of its path."""
    ui = get_ui(verbose=verbose)
    store = open_store(
        path,
        console=ui.err_console,
        settings_file=settings_file,
        strict=strict,
        defaults=default,
    )

    coll = store.get_collection(prefix)
    if not coll:
        ui.err_console.print(f"[warn]No entries below:[/warn] {prefix}")
        raise typer.Exit(int(ExitCode.NOT_FOUND))

    if as_json:
        render_json(coll)
    else:
        render_entries_table(ui.console, coll.items(), title=prefix, key_header="Suffix")


def dump_cmd(
    path: Path = FILE_ARG,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    settings_file: Optional[Path] = SETTINGS_OPT,
    strict: Optional[bool] = STRICT_OPT,
    default: List[str] = DEFAULT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Print every flattened entry."""
    ui = get_ui(verbose=verbose)
    store = open_store(
        path,
        console=ui.err_console,
        settings_file=settings_file,
        strict=strict,
        defaults=default,
    )

    if as_json:
        render_json(dict(store.items()))
    else:
        render_entries_table(ui.console, store.items(), title=f"{path.name} ({len(store)})")
