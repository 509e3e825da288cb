"""Core data structures, configuration and the branch engine."""

from kcovbranch.core.branch import BranchKind, BranchRecord
from kcovbranch.core.config import Config
from kcovbranch.core.errors import (
    ConfigError,
    FrontEndError,
    InsertionContractViolation,
    KcovError,
    UsageError,
)

__all__ = [
    "BranchKind",
    "BranchRecord",
    "Config",
    "ConfigError",
    "FrontEndError",
    "InsertionContractViolation",
    "KcovError",
    "UsageError",
]
