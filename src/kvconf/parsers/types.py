from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventKind(str, Enum):
    SCALAR = "scalar"
    MAPPING_START = "mapping_start"
    MAPPING_END = "mapping_end"
    SEQUENCE_START = "sequence_start"
    SEQUENCE_END = "sequence_end"
    ALIAS = "alias"
    STREAM_END = "stream_end"
    OTHER = "other"


@dataclass(frozen=True)
class ParseEvent:
    """ One event from the YAML event stream, reduced to what the tree builder needs."""
    kind: EventKind
    value: Optional[str] = None
    line: Optional[int] = None


@dataclass(frozen=True)
class ParsedKV:
    """ A flattened key-value pair from a YAML document."""
    key: str
    value: str
    line: Optional[int] = None
