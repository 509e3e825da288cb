"""
Command-line interface for branch identification.

``kcov-branch-identify FILE`` reports the branch points of a C file;
``kcov FILE`` does the same and writes ``FILE`` with its last two characters
replaced by ``-kcov.c``, annotated with a marker at every branch point.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from kcovbranch import __version__
from kcovbranch.core.config import PLACEMENTS, REPORT_FORMATS, Config
from kcovbranch.core.engine import BranchEngine
from kcovbranch.core.errors import KcovError, UsageError
from kcovbranch.reporting import get_reporter


_log = logging.getLogger("kcovbranch")

EXIT_OK = 0
EXIT_ERROR = 1


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def create_parser(prog: str = "kcov-branch-identify") -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=prog,
        description="Identify the branch points of a C source file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kcov-branch-identify prog.c              # List branch points
  kcov-branch-identify -f json prog.c      # One JSON object per branch
  kcov prog.c                              # Also write prog-kcov.c
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("filenames", nargs="*", metavar="filename", help="C source file")
    parser.add_argument(
        "-c", "--config",
        help="Path to YAML/JSON configuration file",
    )
    parser.add_argument(
        "-f", "--format",
        choices=REPORT_FORMATS,
        help="Report format (overrides config)",
    )
    parser.add_argument(
        "--annotate",
        action="store_true",
        default=None,
        help="Write an annotated copy of the source",
    )
    parser.add_argument(
        "--placement",
        choices=PLACEMENTS,
        help="Put markers after or before the construct they tag (overrides config)",
    )
    parser.add_argument(
        "--functions",
        action="store_true",
        default=None,
        help="Also report every function definition",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (repeat for debug output)",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("kcovbranch")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s", datefmt="%H:%M:%S")
        )
        root.addHandler(handler)


def _build_config(args: argparse.Namespace, annotate: Optional[bool]) -> Config:
    config = Config.load(args.config)
    overrides: dict = {}
    if args.format:
        overrides.setdefault("report", {})["format"] = args.format
    if args.functions:
        overrides.setdefault("report", {})["functions"] = True
    if annotate or args.annotate:
        overrides.setdefault("annotate", {})["enabled"] = True
    if args.placement:
        overrides.setdefault("annotate", {})["placement"] = args.placement
    if overrides:
        config = config.with_overrides(overrides)
    return config


def main(argv: Optional[List[str]] = None, prog: str = "kcov-branch-identify", annotate: Optional[bool] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser(prog)
    try:
        args = parser.parse_args(argv)
        if len(args.filenames) != 1:
            raise UsageError(f"expected exactly one filename, got {len(args.filenames)}")
    except UsageError as e:
        print(f"Usage: {prog} <filename>", file=sys.stderr)
        _log.debug("usage error: %s", e)
        return EXIT_ERROR

    _configure_logging(args.verbose)

    try:
        config = _build_config(args, annotate)
        engine = BranchEngine(config)
        reporter = get_reporter(config.report_format(), sys.stdout)
        report = engine.run(args.filenames[0], reporter)
    except KcovError as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return EXIT_ERROR

    if report.output_path:
        _log.info("annotated source: %s", report.output_path)
    return EXIT_OK


def annotate_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``kcov``: identification plus annotated output."""
    return main(argv, prog="kcov", annotate=True)


if __name__ == "__main__":
    sys.exit(main())
