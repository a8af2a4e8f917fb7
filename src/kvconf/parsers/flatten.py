from __future__ import annotations

import logging
from typing import List, Set

from kvconf.parsers.tree import Node
from kvconf.parsers.types import ParsedKV

logger = logging.getLogger(__name__)


def leaf_key(leaf: Node, *, separator: str = ":") -> str:
    """
    Build the key of a leaf from its ancestor labels.

    Labels are collected bottom-up and reversed; the root adds nothing.
    Scalar sequence elements get their position as a last segment.
    """
    parts = [n.text or "" for n in leaf.ancestors()]
    parts.reverse()
    if leaf.index is not None:
        parts.append(str(leaf.index))
    return separator.join(parts)


def flatten(tree: Node, *, separator: str = ":") -> List[ParsedKV]:
    """
    Flatten a built tree into key-value entries.

    Examples:
      {"a": {"b": "1"}}       -> [("a:b", "1")]
      {"a": ["x", "y"]}       -> [("a:0", "x"), ("a:1", "y")]
      {"a": [{"b": "1"}]}     -> [("a:0:b", "1")]

    Leaves hanging directly off the root have no path and are skipped.
    The first entry wins when two leaves produce the same key.
    """
    out: List[ParsedKV] = []
    seen: Set[str] = set()

    for leaf in tree.leaves():
        key = leaf_key(leaf, separator=separator)
        if not key or key in seen:
            continue
        seen.add(key)
        value = leaf.text or ""
        logger.debug("%s => %s", key, value)
        out.append(ParsedKV(key=key, value=value, line=leaf.line))

    return out
