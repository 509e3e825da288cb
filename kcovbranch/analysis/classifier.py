"""
Branch classification for C syntax trees.

Each tree-sitter node kind that can branch maps to a handler returning a
``Classification``: what kind of branch it is, the tag printed in reports, and
the byte span of the construct the annotation marker attaches to. Markers go
right after that construct, or right before it with the "before" placement.
Node kinds are mutually exclusive, so the order of the table does not matter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from kcovbranch.core.branch import BranchKind
from kcovbranch.parsing.treesitter import ParsedFile, first_named_child, node_text


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    kind: BranchKind
    tag: str
    anchor: int
    # start of the construct whose end is `anchor`
    anchor_start: int

    @property
    def weight(self) -> int:
        return self.kind.weight

    def offset(self, placement: str = "after") -> int:
        return self.anchor_start if placement == "before" else self.anchor


LOOP_TAGS = {
    "for_statement": "For",
    "while_statement": "While",
    "do_statement": "Do",
}


class BranchClassifier:
    """Decides whether a syntax node is a branch point."""

    def __init__(self, parsed: ParsedFile) -> None:
        self.parsed = parsed
        self._handlers: Dict[str, Callable[[object], Optional[Classification]]] = {
            "if_statement": self._classify_if,
            "switch_statement": self._classify_switch,
            "for_statement": self._classify_loop,
            "while_statement": self._classify_loop,
            "do_statement": self._classify_loop,
            "case_statement": self._classify_label,
            "conditional_expression": self._classify_ternary,
        }

    def classify(self, node) -> Optional[Classification]:
        handler = self._handlers.get(node.type)
        if handler is None:
            return None
        return handler(node)
    def _classify_if(self, node) -> Classification:
        return _condition_branch(node, BranchKind.CONDITIONAL, "If")

    def _classify_switch(self, node) -> Optional[Classification]:
        if has_default_label(node):
            return None
        return _condition_branch(node, BranchKind.IMPLICIT_DEFAULT_SWITCH, "ImpDef")

    def _classify_loop(self, node) -> Classification:
        return _condition_branch(node, BranchKind.LOOP, LOOP_TAGS[node.type])

    def _classify_ternary(self, node) -> Classification:
        return _condition_branch(node, BranchKind.TERNARY, "?:")

    def _classify_label(self, node) -> Classification:
        keyword = node.children[0]
        if keyword.type == "default":
            colon = _first_token(node, ":")
            if colon is None:
                colon = keyword
            return Classification(BranchKind.DEFAULT, "Default", colon.end_byte, colon.start_byte)
        value = node.child_by_field_name("value")
        if value is not None:
            logger.debug("case value %s at line %d", node_text(self.parsed, value), node.start_point[0] + 1)
        return Classification(BranchKind.CASE, "Case", keyword.end_byte, keyword.start_byte)


def condition_span(node) -> Tuple[int, int]:
    """Start and end offsets of the condition of an if/switch/loop/ternary node."""
    condition = node.child_by_field_name("condition")
    if condition is None:
        # for (;;): the empty slot before the separator ending it
        offset = _empty_condition_offset(node)
        return offset, offset
    if condition.type == "parenthesized_expression":
        inner = first_named_child(condition)
        if inner is not None:
            return inner.start_byte, inner.end_byte
    return condition.start_byte, condition.end_byte


def _condition_branch(node, kind: BranchKind, tag: str) -> Classification:
    start, end = condition_span(node)
    return Classification(kind, tag, anchor=end, anchor_start=start)


def has_default_label(switch_node) -> bool:
    return any(label.children[0].type == "default" for label in switch_labels(switch_node))


def switch_labels(switch_node) -> Iterable[object]:
    """Case and default labels belonging to ``switch_node``, in source order.

    Labels of nested switch statements belong to those statements.
    """
    body = switch_node.child_by_field_name("body")
    if body is None:
        return
    stack = list(reversed(body.children))
    while stack:
        current = stack.pop()
        if current.type == "switch_statement":
            continue
        if current.type == "case_statement":
            yield current
        stack.extend(reversed(current.children))


def _empty_condition_offset(node) -> int:
    separators = [child for child in node.children if child.type == ";"]
    if node.type == "for_statement" and separators:
        return separators[-1].start_byte
    return node.start_byte


def _first_token(node, token_type: str):
    for child in node.children:
        if child.type == token_type:
            return child
    return None
