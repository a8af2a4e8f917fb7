from __future__ import annotations

from kvconf.parsers.events import iter_events
from kvconf.parsers.flatten import flatten, leaf_key
from kvconf.parsers.tree import Node, StorageMode, build_tree, process_layer
from kvconf.parsers.types import EventKind, ParsedKV, ParseEvent
from kvconf.parsers.yaml_parser import parse_yaml, parse_yaml_file

__all__ = [
    "EventKind",
    "Node",
    "ParseEvent",
    "ParsedKV",
    "StorageMode",
    "build_tree",
    "flatten",
    "iter_events",
    "leaf_key",
    "parse_yaml",
    "parse_yaml_file",
    "process_layer",
]
