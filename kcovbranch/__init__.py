"""
kcov branch identification

Enumerates the branch points of a C source file for coverage tooling and,
optionally, writes a copy of the source with a marker at each of them.
"""

__version__ = "1.0.0"

from kcovbranch.core.engine import BranchEngine, BranchReport
from kcovbranch.core.branch import BranchKind, BranchRecord
from kcovbranch.core.config import Config

__all__ = [
    "BranchEngine",
    "BranchReport",
    "BranchKind",
    "BranchRecord",
    "Config",
]
