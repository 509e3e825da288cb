"""
Branch data structures.

A ``BranchRecord`` is created for every classified branch point, handed to the
reporter straight away and then dropped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class BranchKind(Enum):
    """Kinds of branch points and the edges each one contributes."""
    CONDITIONAL = "Conditional"
    IMPLICIT_DEFAULT_SWITCH = "ImplicitDefaultSwitch"
    LOOP = "Loop"
    CASE = "Case"
    TERNARY = "Ternary"
    DEFAULT = "Default"

    @property
    def weight(self) -> int:
        return BRANCH_WEIGHTS[self]


BRANCH_WEIGHTS = {
    BranchKind.CONDITIONAL: 2,
    BranchKind.IMPLICIT_DEFAULT_SWITCH: 1,
    BranchKind.LOOP: 2,
    BranchKind.CASE: 1,
    BranchKind.TERNARY: 2,
    BranchKind.DEFAULT: 1,
}


@dataclass(frozen=True)
class BranchRecord:
    """One classified branch point."""
    id: int
    kind: BranchKind
    tag: str
    line: int
    column: int
    source_file: str
    weight: int

    def __str__(self) -> str:
        return f"{self.tag}#{self.id} {self.source_file}:{self.line}:{self.column}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "tag": self.tag,
            "id": self.id,
            "line": self.line,
            "column": self.column,
            "file": self.source_file,
            "weight": self.weight,
        }
