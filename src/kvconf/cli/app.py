from __future__ import annotations

import typer
from rich.console import Console

from kvconf import __version__
from kvconf.cli.commands.init import init_cmd
from kvconf.cli.commands.query import collection_cmd, dump_cmd, get_cmd

app = typer.Typer(
    name="kvconf",
    help="Read YAML configuration files as flat colon-separated keys.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"kvconf {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback, is_eager=True
    ),
) -> None:
    pass


app.command("get")(get_cmd)
app.command("collection")(collection_cmd)
app.command("dump")(dump_cmd)
app.command("init")(init_cmd)
