"""
Source annotation for branch points.

Edits are never applied in place. ``RewriteBuffer`` records ``(offset, text)``
insertions against the untouched original bytes and builds the new buffer in a
single left-to-right pass once the traversal is done. Insertions sharing an
offset come out in the order they were requested.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from kcovbranch.core.errors import InsertionContractViolation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Insertion:
    offset: int
    text: str
    sequence: int


class RewriteBuffer:
    def __init__(self, source: bytes) -> None:
        self.source = source
        self.insertions: List[Insertion] = []

    @property
    def modified(self) -> bool:
        return bool(self.insertions)

    def insert_after(self, offset: int, text: str) -> None:
        if not 0 <= offset <= len(self.source):
            raise InsertionContractViolation(offset, len(self.source))
        self.insertions.append(Insertion(offset, text, len(self.insertions)))

    def materialize(self) -> Optional[bytes]:
        """Return the rewritten source, or None if nothing was inserted."""
        if not self.insertions:
            return None
        pieces = []
        cursor = 0
        for insertion in sorted(self.insertions, key=lambda i: (i.offset, i.sequence)):
            pieces.append(self.source[cursor : insertion.offset])
            pieces.append(insertion.text.encode("utf-8"))
            cursor = insertion.offset
        pieces.append(self.source[cursor:])
        return b"".join(pieces)


class AnnotationEmitter:
    """Places a ``/* <tag> */`` style marker at each branch anchor."""

    def __init__(self, source: bytes, marker_template: str = "/* {tag} */") -> None:
        self.buffer = RewriteBuffer(source)
        self.marker_template = marker_template

    @property
    def insertion_count(self) -> int:
        return len(self.buffer.insertions)

    def marker(self, tag: str) -> str:
        return self.marker_template.replace("{tag}", tag)

    def annotate(self, offset: int, tag: str) -> None:
        self.buffer.insert_after(offset, self.marker(tag))

    def materialize(self) -> Optional[bytes]:
        return self.buffer.materialize()


def annotated_path(path: str, suffix: str = "-kcov.c") -> str:
    """``foo.c`` -> ``foo-kcov.c``: the last two characters give way to ``suffix``."""
    return path[:-2] + suffix


def write_annotated(path: str, content: bytes) -> str:
    Path(path).write_bytes(content)
    logger.info("wrote annotated source to %s", path)
    return path
