"""
Reporters for classified branches.

- text: tab-separated lines, one per branch, then the branch total
- json: one JSON object per line
"""

from kcovbranch.reporting.formatters import (
    JSONLinesReporter,
    Reporter,
    TextReporter,
    format_text_record,
    get_reporter,
)

__all__ = [
    "Reporter",
    "TextReporter",
    "JSONLinesReporter",
    "format_text_record",
    "get_reporter",
]
