# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CLI harness for declaration size reports."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from irsize.loader import IrLoadError, load_modules
from irsize.resolver import ReportEntry
from irsize.size_dump import build_report_entries, dump_declaration_sizes_if_needed

logger = logging.getLogger(__name__)

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "key": 6,
    "type": 2,
    "size": 1,
}


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="irsize")
    subparsers = parser.add_subparsers(dest="command", required=True)
    dump_parser = subparsers.add_parser("dump")
    dump_parser.add_argument(
        "--input",
        action="append",
        required=True,
        help="JSON IR module dump; repeat for every module in order.",
    )
    dump_parser.add_argument(
        "--output",
        required=False,
        help="Report file; .json and .js select those formats. Omit to skip the report.",
    )
    dump_parser.add_argument(
        "--top",
        type=int,
        default=0,
        help="Print the N largest declarations as a table.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.command == "dump":
        return _run_dump(args=args, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_dump(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run dump command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    if args.top < 0:
        logger.warning(f"Invalid table size (top={args.top})")
        stderr.write("top must be >= 0\n")
        return 2

    input_paths = [Path(item) for item in args.input]
    for input_path in input_paths:
        if not input_path.exists():
            logger.warning(f"Input does not exist (path={input_path})")
            stderr.write(f"Input does not exist: {input_path}\n")
            return 2

    try:
        modules = load_modules(input_paths)
    except IrLoadError as exc:
        logger.warning(f"Failed to load IR dump (error={exc})")
        stderr.write(f"Failed to load IR dump: {exc}\n")
        return 2

    output_path = Path(args.output) if args.output else None
    try:
        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        entries = dump_declaration_sizes_if_needed(output_path, modules)
    except OSError as exc:
        logger.warning(
            f"Failed to write size report (output_path={output_path} error={exc})"
        )
        stderr.write(f"Failed to write size report: {output_path}\n")
        return 2

    if entries is None and args.top:
        entries = build_report_entries(modules)
    logger.info(
        f"Size report completed (modules={len(modules)} output_path={output_path} "
        f"entries={'skipped' if entries is None else len(entries)})"
    )
    if args.top and entries:
        _write_table(entries=entries, top=args.top, stdout=stdout)
    return 0


def _write_table(entries: list[ReportEntry], top: int, stdout: TextIO) -> None:
    """Write the largest report entries as a table.

    Args:
        entries: Resolved report entries.
        top: Number of rows to print.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    largest = sorted(entries, key=lambda entry: entry.size, reverse=True)[:top]
    table = Table(show_header=True, expand=True)
    table.add_column("key", ratio=TABLE_COLUMN_RATIOS["key"], overflow="fold")
    table.add_column("type", ratio=TABLE_COLUMN_RATIOS["type"], overflow="fold")
    table.add_column(
        "size", ratio=TABLE_COLUMN_RATIOS["size"], justify="right", overflow="fold"
    )
    for entry in largest:
        table.add_row(Text(entry.key), entry.type, str(entry.size))
    console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
