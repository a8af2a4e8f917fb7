from __future__ import annotations

import logging
from typing import IO, Iterator, Optional, Union

import yaml

from kvconf.core.errors import MalformedDocumentError
from kvconf.parsers.types import EventKind, ParseEvent

logger = logging.getLogger(__name__)

_KINDS = {
    yaml.ScalarEvent: EventKind.SCALAR,
    yaml.MappingStartEvent: EventKind.MAPPING_START,
    yaml.MappingEndEvent: EventKind.MAPPING_END,
    yaml.SequenceStartEvent: EventKind.SEQUENCE_START,
    yaml.SequenceEndEvent: EventKind.SEQUENCE_END,
    yaml.StreamEndEvent: EventKind.STREAM_END,
    yaml.AliasEvent: EventKind.ALIAS,
}


def _line_of(event: yaml.Event) -> Optional[int]:
    mark = getattr(event, "start_mark", None)
    if mark is None:
        return None
    return mark.line + 1


def iter_events(source: Union[str, IO[str]], *, strict: bool = False) -> Iterator[ParseEvent]:
    """
    Yield ParseEvents for a YAML text or open text stream.

    A parse error either raises MalformedDocumentError (strict) or ends the
    stream early with a synthetic stream-end event (lenient), so that the
    tree built so far is still usable.
    """
    try:
        for ev in yaml.parse(source, Loader=yaml.SafeLoader):
            kind = _KINDS.get(type(ev), EventKind.OTHER)
            if kind == EventKind.SCALAR:
                yield ParseEvent(kind=kind, value=str(ev.value), line=_line_of(ev))
            else:
                yield ParseEvent(kind=kind, line=_line_of(ev))
    except yaml.YAMLError as e:
        if strict:
            raise MalformedDocumentError(f"YAML parse failed: {e}") from e
        logger.warning("YAML parse failed, keeping partial document: %s", e)
        yield ParseEvent(kind=EventKind.STREAM_END)
