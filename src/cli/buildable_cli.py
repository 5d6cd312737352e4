# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line driver generating buildable modules for annotated records."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from buildable.analyzers import ManifestDeclarationSource, PythonDeclarationAnalyzer
from buildable.declaration import AnalyzerError, DeclarationSource
from buildable.model import Diagnostic, GeneratedArtifact
from buildable.pipeline import GenerationPipeline, GenerationReport
from buildable.sink import ArtifactSink, FileSystemSink, InMemorySink, SinkError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_ROOT = "generated"

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "record": 3,
    "partial_type": 2,
    "declarations": 1,
    "target_file": 4,
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
    parser = argparse.ArgumentParser(prog="buildable-gen")
    subparsers = parser.add_subparsers(dest="command", required=True)
    generate_parser = subparsers.add_parser("generate")
    source_group = generate_parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument(
        "--path", help="Root path of Python sources to scan for @gen_buildable records."
    )
    source_group.add_argument(
        "--manifest", help="JSON manifest of host declarations."
    )
    generate_parser.add_argument(
        "--output-root",
        default=DEFAULT_OUTPUT_ROOT,
        help="Generated-sources root directory.",
    )
    generate_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Gitignore-style pattern to skip (repeatable).",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Synthesize without writing files.",
    )
    generate_parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code: 0 on success, 1 when a record failed, 2 on usage errors.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.command == "generate":
        return _run_generate(args=args, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_generate(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run generate command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    source: DeclarationSource
    if args.manifest:
        input_path = Path(args.manifest)
        source = ManifestDeclarationSource()
    else:
        input_path = Path(args.path)
        source = PythonDeclarationAnalyzer(exclude=tuple(args.exclude))
    if not input_path.exists():
        logger.warning(f"Path does not exist (path={input_path})")
        stderr.write(f"Path does not exist: {input_path}\n")
        return 2

    try:
        declarations, errors = source.analyze(input_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Declaration discovery failed (path={input_path} error={exc})")
        stderr.write(f"Declaration discovery failed: {exc}\n")
        return 2
    _write_errors(errors=errors, stderr=stderr)

    sink: ArtifactSink
    if args.dry_run:
        sink = InMemorySink()
    else:
        sink = FileSystemSink(output_root=Path(args.output_root))
    try:
        report = GenerationPipeline(sink=sink).run(declarations)
    except SinkError as exc:
        stderr.write(f"{exc}\n")
        return 2

    _write_diagnostics(diagnostics=report.diagnostics, stderr=stderr)
    if args.format == "json":
        _write_json(report=report, errors=errors, stdout=stdout)
    else:
        _write_table(artifacts=report.artifacts, output_root=args.output_root, stdout=stdout)
    return 1 if report.has_errors else 0


def _write_errors(errors: list[AnalyzerError], stderr: TextIO) -> None:
    for error in errors:
        stderr.write(f"analyzer_error: {error.file_path}: {error.message}\n")


def _write_diagnostics(diagnostics: list[Diagnostic], stderr: TextIO) -> None:
    """Write diagnostics in ``severity: location: message`` form.

    Args:
        diagnostics: Pipeline diagnostics.
        stderr: Standard error stream.
    """
    for diagnostic in diagnostics:
        location = f"{diagnostic.location}: " if diagnostic.location else ""
        stderr.write(f"{diagnostic.severity}: {location}{diagnostic.message}\n")


def _write_json(report: GenerationReport, errors: list[AnalyzerError], stdout: TextIO) -> None:
    """Write the generation summary as JSON.

    Args:
        report: Pipeline report.
        errors: Recoverable discovery errors.
        stdout: Standard output stream.
    """
    payload = {
        "artifacts": [
            {
                "record": artifact.record_name,
                "partial_type": artifact.partial_type_name,
                "target_file": artifact.target_file.as_posix(),
                "declarations": len(artifact.generated_declarations),
            }
            for artifact in report.artifacts
        ],
        "diagnostics": [
            {
                "severity": diagnostic.severity,
                "message": diagnostic.message,
                "location": str(diagnostic.location) if diagnostic.location else None,
            }
            for diagnostic in report.diagnostics
        ],
        "errors": [{"file_path": error.file_path, "message": error.message} for error in errors],
    }
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(payload, indent=2, sort_keys=True),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_table(artifacts: list[GeneratedArtifact], output_root: str, stdout: TextIO) -> None:
    """Write generated artifacts as a table.

    Args:
        artifacts: Generated artifacts.
        output_root: Generated-sources root shown in the heading.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.rule(f"{output_root}", style=Style(color="cyan"), characters="-")
    table = Table(show_header=True, show_lines=True, expand=True)
    for column, ratio in TABLE_COLUMN_RATIOS.items():
        justify = "right" if column == "declarations" else "left"
        table.add_column(column, ratio=ratio, justify=justify, overflow="fold")
    for artifact in artifacts:
        table.add_row(
            artifact.record_name,
            artifact.partial_type_name,
            str(len(artifact.generated_declarations)),
            artifact.target_file.as_posix(),
        )
    console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
