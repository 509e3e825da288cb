from __future__ import annotations

import json
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from kcovbranch.core.branch import BranchRecord


class Reporter(ABC):
    """Streams branch records as they are classified.

    Lines are written and flushed one at a time so consumers reading the
    stream see each branch as soon as it is found.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    @abstractmethod
    def branch(self, record: BranchRecord) -> None:
        pass

    @abstractmethod
    def function(self, name: str) -> None:
        pass

    @abstractmethod
    def summary(self, total: int, count: int) -> None:
        pass

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")
        self.stream.flush()


class TextReporter(Reporter):
    def branch(self, record: BranchRecord) -> None:
        self._write(format_text_record(record))

    def function(self, name: str) -> None:
        self._write(f"function: {name}")

    def summary(self, total: int, count: int) -> None:
        self._write(f"Total number of branches: {total}")


class JSONLinesReporter(Reporter):
    def branch(self, record: BranchRecord) -> None:
        self._write(json.dumps(record.to_dict()))

    def function(self, name: str) -> None:
        self._write(json.dumps({"function": name}))

    def summary(self, total: int, count: int) -> None:
        self._write(json.dumps({"total_branches": total, "branch_count": count}))


def format_text_record(record: BranchRecord) -> str:
    return (
        f"\t{record.tag}\tID: {record.id}\tLine: {record.line}"
        f"\tColumn: {record.column}\tFilename: {record.source_file}\t"
    )


def get_reporter(format_name: str, stream: TextIO | None = None) -> Reporter:
    reporters = {
        "text": TextReporter,
        "json": JSONLinesReporter,
    }
    reporter_class = reporters.get(format_name.lower())
    if reporter_class:
        return reporter_class(stream)
    raise ValueError(f"Unknown format: {format_name}")
