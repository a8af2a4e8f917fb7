from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional

from kvconf.parsers.types import EventKind, ParseEvent


class StorageMode(str, Enum):
    """How the next scalar of a layer is stored."""

    EXPECT_KEY = "expect_key"
    EXPECT_VALUE = "expect_value"
    IN_SEQUENCE = "in_sequence"

    def toggled(self) -> "StorageMode":
        # sequence mode is left untouched
        if self is StorageMode.EXPECT_KEY:
            return StorageMode.EXPECT_VALUE
        if self is StorageMode.EXPECT_VALUE:
            return StorageMode.EXPECT_KEY
        return self


_TERMINATORS = (EventKind.MAPPING_END, EventKind.STREAM_END)


@dataclass(eq=False)
class Node:
    """
    A tree node. Children are owned by their parent; `parent` is a plain
    back-reference used to rebuild key paths.

    `index` is set on scalar sequence elements only.
    """
    text: Optional[str] = None
    line: Optional[int] = None
    index: Optional[int] = None
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = field(default=None, repr=False)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def append(self, child: "Node") -> "Node":
        child.parent = self
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator["Node"]:
        """Nearest ancestor first, root excluded."""
        node = self.parent
        while node is not None and not node.is_root:
            yield node
            node = node.parent

    def leaves(self) -> Iterator["Node"]:
        """Pre-order, left to right."""
        for child in self.children:
            if child.is_leaf:
                yield child
            else:
                yield from child.leaves()


def process_layer(events: Iterator[ParseEvent], parent: Node) -> EventKind:
    """
    Consume events for one mapping level, attaching nodes under `parent`.

    Returns the event kind that ended the layer (mapping end or stream end).
    Running out of events counts as stream end.

    Aliases take up the slot they sit in but store nothing. A key whose
    value is an alias is dropped, and a sequence element that is an alias
    still uses up its position.
    """
    target = parent
    mode = StorageMode.EXPECT_KEY
    # open sequences, innermost last: [container, next position]
    seqs: List[list] = []

    for ev in events:
        kind = ev.kind

        if kind == EventKind.SCALAR:
            if mode == StorageMode.EXPECT_KEY:
                target = parent.append(Node(ev.value, line=ev.line))
                mode = StorageMode.EXPECT_VALUE
            elif mode == StorageMode.EXPECT_VALUE:
                target.append(Node(ev.value, line=ev.line))
                mode = StorageMode.EXPECT_KEY
            else:
                seq = seqs[-1]
                seq[0].append(Node(ev.value, line=ev.line, index=seq[1]))
                seq[1] += 1

        elif kind == EventKind.ALIAS:
            if mode == StorageMode.EXPECT_KEY:
                # whatever follows belongs to a key we cannot name
                target = Node(line=ev.line)
                mode = StorageMode.EXPECT_VALUE
            elif mode == StorageMode.EXPECT_VALUE:
                if target.is_leaf and target.parent is parent:
                    parent.children.remove(target)
                    target.parent = None
                mode = StorageMode.EXPECT_KEY
            else:
                seqs[-1][1] += 1

        elif kind == EventKind.SEQUENCE_START:
            if mode == StorageMode.IN_SEQUENCE:
                # nested sequence: its own container, labelled by position
                seq = seqs[-1]
                item = seq[0].append(Node(str(seq[1]), line=ev.line))
                seq[1] += 1
                seqs.append([item, 0])
            else:
                seqs.append([target, 0])
            mode = StorageMode.IN_SEQUENCE

        elif kind == EventKind.SEQUENCE_END:
            if seqs:
                seqs.pop()
            if not seqs:
                mode = StorageMode.EXPECT_KEY

        elif kind == EventKind.MAPPING_START:
            if mode == StorageMode.IN_SEQUENCE:
                # each mapping element gets its own container, labelled by position
                seq = seqs[-1]
                item = seq[0].append(Node(str(seq[1]), line=ev.line))
                seq[1] += 1
                process_layer(events, item)
            else:
                process_layer(events, target)
            mode = mode.toggled()

        elif kind in _TERMINATORS:
            return kind

    return EventKind.STREAM_END


def build_tree(events: Iterable[ParseEvent]) -> Node:
    root = Node()
    process_layer(iter(events), root)
    return root
