from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from kvconf.core.config import load_settings
from kvconf.core.errors import ExitCode, KvConfError
from kvconf.core.models import DefaultsConfig
from kvconf.core.store import ConfigStore


def open_store(
    path: Path,
    *,
    console: Console,
    settings_file: Optional[Path] = None,
    strict: Optional[bool] = None,
    defaults: Optional[List[str]] = None,
) -> ConfigStore:
    """
    Resolve settings for `path`, load it and apply fallback values.
    Any failure is reported on `console` and exits with ExitCode.ERROR.
    """
    cli_overrides: dict = {"store": {}}
    if strict is not None:
        cli_overrides["store"]["strict"] = bool(strict)

    try:
        loaded = load_settings(
            start_dir=path.resolve().parent,
            settings_file=settings_file,
            cli_overrides=cli_overrides,
        )
        cli_defaults = DefaultsConfig.from_pairs(defaults or [])
    except (KvConfError, ValueError) as e:
        console.print(f"[err]{e}[/err]")
        raise typer.Exit(int(ExitCode.ERROR))

    store = ConfigStore(loaded.settings)
    try:
        ok = store.load(path)
    except KvConfError as e:
        console.print(f"[err]{e}[/err]")
        raise typer.Exit(int(ExitCode.ERROR))

    if not ok:
        console.print(f"[err]Cannot open {path}[/err]")
        raise typer.Exit(int(ExitCode.ERROR))

    # CLI defaults first so they beat the settings file ones
    for k, v in cli_defaults.values.items():
        store.merge(k, v)
    for k, v in loaded.defaults.values.items():
        store.merge(k, v)

    return store
