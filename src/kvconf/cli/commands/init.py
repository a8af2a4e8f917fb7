from __future__ import annotations

from pathlib import Path
import typer

from kvconf.cli.utils.files import ensure_dir, write_file


DEFAULT_CONFIG_TOML = """\
[store]
# every key is stored as <namespace><separator><path>
namespace = "config"
separator = ":"
# raise on unreadable/malformed YAML instead of keeping the previous/partial result
strict = false

[defaults]
# fallback values, applied only where the YAML file has no value
# "net:eth0:mask" = "255.255.255.0"
"""


DEFAULT_README = """\
# kvconf settings

`config.toml` controls how YAML files below this directory are flattened.

## Usage

```bash
kvconf dump settings.yaml
kvconf get settings.yaml net:eth0:ip
kvconf collection settings.yaml net:eth0
```
"""


def init_cmd(
    path: Path = typer.Argument(Path("."), help="Directory to initialize."),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files."),
) -> None:
    """Write a starter .kvconf/config.toml."""
    root = path.resolve()
    cfg_dir = root / ".kvconf"
    ensure_dir(cfg_dir)

    written = [
        name
        for name, content in (
            ("config.toml", DEFAULT_CONFIG_TOML),
            ("README.md", DEFAULT_README),
        )
        if write_file(cfg_dir / name, content, force=force)
    ]

    if written:
        typer.echo(f"Initialized {cfg_dir}")
    else:
        typer.echo(f"Already initialized {cfg_dir} (use --force to overwrite)")
