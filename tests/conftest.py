"""
Shared helpers for the branch identification tests.
"""

import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kcovbranch.core.config import Config
from kcovbranch.core.engine import BranchEngine
from kcovbranch.reporting.formatters import Reporter


class RecordingReporter(Reporter):
    """Keeps everything it is given instead of printing it."""

    def __init__(self):
        super().__init__()
        self.records = []
        self.functions = []
        self.summaries = []

    def branch(self, record):
        self.records.append(record)

    def function(self, name):
        self.functions.append(name)

    def summary(self, total, count):
        self.summaries.append((total, count))

    @property
    def tags(self):
        return [r.tag for r in self.records]


@pytest.fixture
def identify():
    """Run the engine over a C snippet; returns (reporter, report)."""

    def run(code, path="", **overrides):
        config = Config.load(None)
        if overrides:
            config = config.with_overrides(overrides)
        reporter = RecordingReporter()
        report = BranchEngine(config).run_source(code.encode("utf-8"), path=path, reporter=reporter)
        return reporter, report

    return run


@pytest.fixture
def annotate(identify):
    """Annotate a C snippet in memory; returns the annotated text or None."""

    def run(code, **overrides):
        overrides.setdefault("annotate", {})["enabled"] = True
        _, report = identify(code, **overrides)
        if report.annotated is None:
            return None
        return report.annotated.decode("utf-8")

    return run
