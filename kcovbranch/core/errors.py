"""
Exception types raised by kcovbranch.

Everything a user can cause derives from ``KcovError`` and is turned into a
message and exit status by the CLI. ``InsertionContractViolation`` is a bug in
the classifier and is left to abort the process.
"""


class KcovError(Exception):
    """Base class for recoverable, user-facing errors."""


class UsageError(KcovError):
    """Wrong command-line arguments."""


class ConfigError(KcovError):
    """Configuration file missing or malformed."""


class FrontEndError(KcovError):
    """Input could not be read or parsed into a syntax tree."""


class InsertionContractViolation(RuntimeError):
    """An annotation targeted an offset outside the original source."""

    def __init__(self, offset: int, size: int):
        super().__init__(f"insertion offset {offset} outside source of {size} bytes")
        self.offset = offset
        self.size = size
