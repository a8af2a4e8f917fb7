from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from kvconf.core.errors import SettingsError
from kvconf.core.models import DefaultsConfig, StoreSettings

# Python 3.11+ has tomllib; for 3.9/3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


SETTINGS_DIR = ".kvconf"
SETTINGS_NAME = "config.toml"

# machine-wide settings, first existing file wins
GLOBAL_SETTINGS_FILES = (
    "~/.config/kvconf/config.toml",
    "~/.kvconf/config.toml",
)

# the only tables kvconf reads; anything else in the file is ignored
SETTINGS_TABLES = ("store", "defaults")


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8", errors="replace"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise SettingsError(f"Cannot read settings {path}: {e}") from e
    if not isinstance(data, dict):
        return {}
    return data


def _apply_layer(tables: Dict[str, Dict[str, Any]], layer: Dict[str, Any], source: str) -> None:
    """Later layers override earlier ones key by key inside [store] and [defaults]."""
    for name in SETTINGS_TABLES:
        table = layer.get(name)
        if table is None:
            continue
        if not isinstance(table, dict):
            raise SettingsError(f"[{name}] in {source} must be a table")
        tables[name].update(table)


def find_repo_config(start_dir: Path) -> Optional[Path]:
    """Closest .kvconf/config.toml in start_dir or one of its parents."""
    cur = start_dir.resolve()
    for d in (cur, *cur.parents):
        p = d / SETTINGS_DIR / SETTINGS_NAME
        if p.is_file():
            return p
    return None


def find_global_config() -> Optional[Path]:
    for raw in GLOBAL_SETTINGS_FILES:
        p = Path(raw).expanduser()
        if p.is_file():
            return p.resolve()
    return None


@dataclass(frozen=True)
class LoadedSettings:
    settings: StoreSettings
    defaults: DefaultsConfig
    global_path: Optional[Path]
    repo_path: Optional[Path]
    explicit_path: Optional[Path] = None


def load_settings(
    start_dir: Path,
    settings_file: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> LoadedSettings:
    """
    Precedence (lowest -> highest):
      defaults (StoreSettings) ->
      global settings ->
      repo settings (closest) ->
      explicit --settings file ->
      cli_overrides
    """
    global_path = find_global_config()
    repo_path = find_repo_config(start_dir)

    tables: Dict[str, Dict[str, Any]] = {name: {} for name in SETTINGS_TABLES}
    for path in (global_path, repo_path, settings_file):
        if path is not None:
            _apply_layer(tables, _read_toml(path), str(path))

    # CLI overrides use the same shape as the TOML file
    _apply_layer(tables, cli_overrides or {}, "command line")

    try:
        settings = StoreSettings.model_validate(tables["store"])
        defaults = DefaultsConfig.model_validate(
            {"values": {str(k): str(v) for k, v in tables["defaults"].items()}}
        )
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e

    return LoadedSettings(
        settings=settings,
        defaults=defaults,
        global_path=global_path,
        repo_path=repo_path,
        explicit_path=settings_file,
    )
