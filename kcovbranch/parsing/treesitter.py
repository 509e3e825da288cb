from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

import tree_sitter_c
from tree_sitter import Language, Parser

from kcovbranch.core.errors import FrontEndError
from kcovbranch.parsing.locations import LineMarkerMap


C_LANGUAGE = Language(tree_sitter_c.language())

C_EXTENSIONS = {".c", ".h", ".i"}


@dataclass(frozen=True)
class ParsedFile:
    path: str
    source: bytes
    tree: object
    markers: LineMarkerMap = field(default_factory=LineMarkerMap)

    @property
    def root(self):
        return self.tree.root_node


def is_c_source(path: str) -> bool:
    return Path(path).suffix.lower() in C_EXTENSIONS


def parse_source(source: bytes, path: str = "", strict: bool = True) -> ParsedFile:
    """Parse one C translation unit held in memory.

    ``path`` is only used for location lookups; an empty path means every
    lookup comes back empty until a line marker names a file.
    """
    parser = Parser(C_LANGUAGE)
    tree = parser.parse(source)
    if strict and tree.root_node.has_error:
        raise FrontEndError(_describe_error(path, tree.root_node))
    markers = LineMarkerMap.from_tree(path, tree.root_node, source)
    return ParsedFile(path=path, source=source, tree=tree, markers=markers)


def parse_file(path: str, strict: bool = True) -> ParsedFile:
    try:
        source = Path(path).read_bytes()
    except FileNotFoundError:
        raise FrontEndError(f"{path}: file not found")
    except OSError as exc:
        raise FrontEndError(f"{path}: {exc.strerror or exc}")
    return parse_source(source, path=path, strict=strict)


def iter_nodes(node) -> Iterable[object]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(parsed: ParsedFile, node) -> str:
    return parsed.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def first_named_child(node, skip: tuple[str, ...] = ("comment",)) -> Optional[object]:
    for child in node.named_children:
        if child.type not in skip:
            return child
    return None


def _describe_error(path: str, root) -> str:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            line = node.start_point[0] + 1
            column = node.start_point[1] + 1
            what = f"missing '{node.type}'" if node.is_missing else "syntax error"
            return f"{path or '<source>'}:{line}:{column}: {what}"
    return f"{path or '<source>'}: syntax error"
