# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Run the resource obfuscation pass over a JSON resource table."""

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from resopt import (
    ConfigError,
    ObfuscationError,
    ObfuscationMapError,
    ObfuscationOptions,
    Obfuscator,
    load_resources_config,
    write_obfuscation_map,
)
from restable import ResourceName, TableFormatError, dump_table, load_table
from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObfuscateSummary:
    """Represent obfuscate phase counters."""

    file_references: int
    paths_shortened: int
    entries: int
    names_collapsed: int
    elapsed_ms: int


class ValidationError(RuntimeError):
    """Represent user input validation failure."""


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
    """Build CLI parser."""
    parser = argparse.ArgumentParser(prog="resopt")
    parser.add_argument("--table", required=True, help="Input resource table JSON.")
    parser.add_argument("--output", required=True, help="Output resource table JSON.")
    parser.add_argument(
        "--shorten-resource-paths",
        action="store_true",
        help="Shorten file-reference paths.",
    )
    parser.add_argument(
        "--collapse-resource-names",
        action="store_true",
        help="Collapse resource entry names from the key string pool.",
    )
    parser.add_argument(
        "--resources-config-path",
        help="File of 'type/name#no_collapse' lines exempt from collapsing.",
    )
    parser.add_argument(
        "--no-collapse",
        action="append",
        default=[],
        metavar="TYPE/NAME",
        help="Exempt one resource name from collapsing. Repeatable.",
    )
    parser.add_argument(
        "--save-obfuscation-map",
        help="Write the de-obfuscation map to this path.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run resource obfuscation command.

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
        logger.warning("Argument parsing failed (argv=%s)", argv)
        return 2

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    _emit_marker(console=console, phase="validation", state="start")
    try:
        table_path, output_path = _validate_paths(
            table_path=Path(args.table), output_path=Path(args.output)
        )
        options = _build_options(args)
    except (ValidationError, ConfigError) as exc:
        logger.warning("Validation failed (error=%s)", exc)
        stderr.write(f"{exc}\n")
        return 2
    _emit_marker(console=console, phase="validation", state="done")

    _emit_marker(console=console, phase="load", state="start")
    try:
        table = load_table(table_path)
    except TableFormatError as exc:
        logger.warning("Load failed (error=%s)", exc)
        stderr.write(f"Load failed: {exc}\n")
        return 2
    _emit_marker(console=console, phase="load", state="done")

    _emit_marker(console=console, phase="obfuscate", state="start")
    started = time.monotonic()
    obfuscator = Obfuscator(options)
    try:
        completed = obfuscator.run(table)
    except ObfuscationError as exc:
        logger.warning("Obfuscation failed (error=%s)", exc)
        stderr.write(f"Obfuscation failed: {exc}\n")
        return 2
    if not completed:
        stderr.write("Obfuscation failed\n")
        return 2
    maps = obfuscator.maps()
    entries = list(table.iter_entries())
    summary = ObfuscateSummary(
        file_references=len({ref.path.value for ref in table.iter_file_references()}),
        paths_shortened=len(maps.shortened_path_map),
        entries=len(entries),
        names_collapsed=len(maps.id_resource_map),
        elapsed_ms=int(round((time.monotonic() - started) * 1000)),
    )
    _emit_marker(console=console, phase="obfuscate", state="done")
    _emit_summary(
        console=console,
        summary={
            "file_references": summary.file_references,
            "paths_shortened": summary.paths_shortened,
            "entries": summary.entries,
            "names_collapsed": summary.names_collapsed,
            "elapsed_ms": summary.elapsed_ms,
        },
    )

    _emit_marker(console=console, phase="write", state="start")
    # A failed map write must leave no output table.
    if args.save_obfuscation_map:
        if obfuscator.has_output():
            try:
                write_obfuscation_map(maps, Path(args.save_obfuscation_map))
            except ObfuscationMapError as exc:
                stderr.write(f"Write failed: {exc}\n")
                return 2
        else:
            logger.info("Obfuscation disabled; skipping obfuscation map")
    try:
        dump_table(table, output_path)
    except OSError as exc:
        logger.warning("Failed writing table (path=%s error=%s)", output_path, exc)
        stderr.write(f"Write failed: {exc}\n")
        return 2
    _emit_marker(console=console, phase="write", state="done")
    console.print("status=success")
    return 0


def _emit_marker(console: Console, phase: str, state: str) -> None:
    console.print(f"{phase}:{state}")


def _emit_summary(console: Console, summary: dict[str, int]) -> None:
    fields = " ".join(f"{key}={value}" for key, value in summary.items())
    console.print(fields)


def _validate_paths(table_path: Path, output_path: Path) -> tuple[Path, Path]:
    """Validate required input and output path constraints.

    Args:
        table_path: Input table path from user args.
        output_path: Output table path from user args.

    Returns:
        Normalized absolute input and output paths.

    Raises:
        ValidationError: If path constraints are not met.
    """
    table_abs = table_path.resolve()
    output_abs = output_path.resolve()
    if not table_abs.exists():
        raise ValidationError(f"Table path does not exist: {table_abs}")
    if not table_abs.is_file():
        raise ValidationError(f"Table path must be a file: {table_abs}")
    if table_abs == output_abs:
        raise ValidationError("Table and output paths must differ")
    if not output_abs.parent.is_dir():
        raise ValidationError(f"Output directory does not exist: {output_abs.parent}")
    return table_abs, output_abs


def _build_options(args: argparse.Namespace) -> ObfuscationOptions:
    """Build pass options from parsed arguments.

    Raises:
        ValidationError: If a ``--no-collapse`` value is not ``type/name``.
        ConfigError: If the resources config file is invalid.
    """
    exemptions: set[ResourceName] = set()
    if args.resources_config_path:
        exemptions.update(load_resources_config(Path(args.resources_config_path)))
    for text in args.no_collapse:
        try:
            exemptions.add(ResourceName.parse(text))
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
    return ObfuscationOptions(
        shorten_resource_paths=args.shorten_resource_paths,
        collapse_key_stringpool=args.collapse_resource_names,
        name_collapse_exemptions=frozenset(exemptions),
    )


def main() -> None:
    """Run resource obfuscation CLI."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
