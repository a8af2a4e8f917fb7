from __future__ import annotations

from pathlib import Path
from typing import IO, List, Union

from kvconf.core.errors import SourceUnavailableError
from kvconf.parsers.events import iter_events
from kvconf.parsers.flatten import flatten
from kvconf.parsers.tree import build_tree
from kvconf.parsers.types import ParsedKV


def parse_yaml(
    source: Union[str, IO[str]],
    *,
    separator: str = ":",
    strict: bool = False,
) -> List[ParsedKV]:
    """
    YAML text/stream -> entries like:
      section:subsection:leaf = value
    The tree is only alive for the duration of the call.
    """
    tree = build_tree(iter_events(source, strict=strict))
    return flatten(tree, separator=separator)


def parse_yaml_file(
    path: Union[str, Path],
    *,
    separator: str = ":",
    strict: bool = False,
) -> List[ParsedKV]:
    p = Path(path)
    try:
        fh = p.open("r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise SourceUnavailableError(f"Cannot open {p}: {e}") from e

    with fh:
        return parse_yaml(fh, separator=separator, strict=strict)
