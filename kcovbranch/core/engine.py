from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from kcovbranch.analysis.classifier import BranchClassifier
from kcovbranch.annotation.emitter import AnnotationEmitter, annotated_path, write_annotated
from kcovbranch.core.branch import BranchRecord
from kcovbranch.core.config import Config
from kcovbranch.core.counter import BranchCounter
from kcovbranch.parsing.locations import FileNameTracker
from kcovbranch.parsing.treesitter import (
    ParsedFile,
    is_c_source,
    iter_nodes,
    node_text,
    parse_file,
    parse_source,
)
from kcovbranch.reporting.formatters import Reporter, get_reporter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BranchReport:
    path: str
    branch_count: int
    total: int
    annotated: Optional[bytes] = None
    output_path: Optional[str] = None


class BranchTraversal:
    """One pre-order walk over a parsed file.

    Owns every piece of per-run state: the id/weight counter, the current file
    name and, in annotate mode, the pending source edits.
    """

    def __init__(
        self,
        parsed: ParsedFile,
        reporter: Reporter,
        emitter: Optional[AnnotationEmitter] = None,
        report_functions: bool = False,
        placement: str = "after",
    ) -> None:
        self.parsed = parsed
        self.reporter = reporter
        self.emitter = emitter
        self.report_functions = report_functions
        self.placement = placement
        self.classifier = BranchClassifier(parsed)
        self.counter = BranchCounter()
        self.files = FileNameTracker()

    def run(self) -> BranchCounter:
        for node in iter_nodes(self.parsed.root):
            if self.report_functions and node.type == "function_definition":
                self.reporter.function(function_name(self.parsed, node) or "<anonymous>")
            self.visit(node)
        self.reporter.summary(self.counter.total, self.counter.count)
        return self.counter

    def visit(self, node) -> Optional[BranchRecord]:
        row = node.start_point[0]
        source_file = self.files.resolve(self.parsed.markers.filename_at(row))
        classification = self.classifier.classify(node)
        if classification is None:
            return None
        record = BranchRecord(
            id=self.counter.allocate(classification.weight),
            kind=classification.kind,
            tag=classification.tag,
            line=row + 1,
            column=node.start_point[1] + 1,
            source_file=source_file,
            weight=classification.weight,
        )
        logger.debug("branch %s", record)
        self.reporter.branch(record)
        if self.emitter is not None:
            self.emitter.annotate(classification.offset(self.placement), classification.tag)
        return record


class BranchEngine:
    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config.load(None)

    def run(self, path: str, reporter: Reporter | None = None) -> BranchReport:
        """Identify branches in the file at ``path``, writing the annotated copy if enabled."""
        if not is_c_source(path):
            logger.warning("%s does not look like a C source file, parsing it as C", path)
        parsed = parse_file(path, strict=self.config.strict_parse())
        report = self._process(parsed, reporter)
        if report.annotated is None:
            return report
        output_path = write_annotated(
            annotated_path(path, self.config.annotated_suffix()), report.annotated
        )
        return BranchReport(
            path=report.path,
            branch_count=report.branch_count,
            total=report.total,
            annotated=report.annotated,
            output_path=output_path,
        )

    def run_source(self, source: bytes, path: str = "", reporter: Reporter | None = None) -> BranchReport:
        """Same as ``run`` for in-memory source; nothing is written to disk."""
        parsed = parse_source(source, path=path, strict=self.config.strict_parse())
        return self._process(parsed, reporter)

    def _process(self, parsed: ParsedFile, reporter: Reporter | None) -> BranchReport:
        if reporter is None:
            reporter = get_reporter(self.config.report_format())
        emitter = None
        if self.config.annotate_enabled():
            emitter = AnnotationEmitter(parsed.source, self.config.marker_template())
        traversal = BranchTraversal(
            parsed,
            reporter,
            emitter=emitter,
            report_functions=self.config.report_functions(),
            placement=self.config.placement(),
        )
        counter = traversal.run()
        logger.info(
            "%s: %d branch points, %d branches",
            parsed.path or "<source>",
            counter.count,
            counter.total,
        )
        annotated = emitter.materialize() if emitter is not None else None
        if emitter is not None and annotated is None:
            logger.info("%s: no branch points, annotated copy not written", parsed.path or "<source>")
        return BranchReport(
            path=parsed.path,
            branch_count=counter.count,
            total=counter.total,
            annotated=annotated,
        )


def function_name(parsed: ParsedFile, node) -> str:
    declarator = node.child_by_field_name("declarator")
    while declarator is not None:
        if declarator.type == "identifier":
            return node_text(parsed, declarator)
        declarator = declarator.child_by_field_name("declarator")
    return ""
