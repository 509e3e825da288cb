"""
Source location lookup for parsed C files.

Preprocessed input (``cc -E``) carries line markers such as ``# 12 "foo.h" 1``
or ``#line 12 "foo.h"``. The file a node belongs to is whatever the closest
preceding marker names; before any marker it is the path the file was parsed
from. Reported line and column numbers stay physical positions in the parsed
buffer.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


# what follows the directive name: a line number and an optional quoted file name
MARKER_ARGS_RE = re.compile(r'^(\d+)(?:[ \t]+"((?:[^"\\]|\\.)*)")?')


@dataclass(frozen=True)
class LineMarkerMap:
    default: str = ""
    # (zero-based row of the marker, file name it introduces)
    entries: Tuple[Tuple[int, str], ...] = ()
    _rows: List[int] = field(default_factory=list, compare=False, repr=False)

    def __post_init__(self) -> None:
        self._rows.extend(row for row, _ in self.entries)

    @classmethod
    def from_tree(cls, path: str, root, source: bytes) -> "LineMarkerMap":
        """Collect markers from the preprocessor directives of a parsed tree.

        Rows come from the tree itself, so they agree with node positions, and
        marker-like text inside comments or string literals is never a directive.
        """
        entries = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "preproc_call":
                name = _marker_name(node, source)
                if name is not None:
                    entries.append((node.start_point[0], name))
                continue
            stack.extend(reversed(node.children))
        return cls(default=path, entries=tuple(entries))

    def filename_at(self, row: int) -> str:
        """File name for zero-based ``row``; may be empty."""
        idx = bisect.bisect_left(self._rows, row) - 1
        if idx < 0:
            return self.default
        return self.entries[idx][1]


class FileNameTracker:
    """Carries the last non-empty file name across nodes of one traversal."""

    def __init__(self, initial: str = "") -> None:
        self.current = initial

    def resolve(self, name: Optional[str]) -> str:
        if name:
            self.current = name
        return self.current


def _unescape(name: str) -> str:
    return re.sub(r"\\(.)", r"\1", name)


def _marker_name(node, source: bytes) -> Optional[str]:
    """File name named by a ``# N "name"`` or ``#line N "name"`` directive."""
    directive = node.child_by_field_name("directive")
    if directive is None:
        return None
    keyword = _text(source, directive)[1:].strip()
    argument = node.child_by_field_name("argument")
    rest = _text(source, argument).strip() if argument is not None else ""
    if keyword == "line":
        text = rest
    elif keyword.isdigit():
        text = f"{keyword} {rest}"
    else:
        return None
    match = MARKER_ARGS_RE.match(text)
    if match is None or match.group(2) is None:
        return None
    return _unescape(match.group(2))


def _text(source: bytes, node) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
