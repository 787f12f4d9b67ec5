"""CLI entry-point for splitbox.

Usage:
    python -m splitbox split [INPUT] [--delimiter auto] [--dedupe none] [--validation none]
                             [--pattern REGEX] [--mode items_per_group] [--value N]
                             [--template plain] [--output-delimiter newline]
                             [--batch N] [--json] [--out FILE] [--strict]
    python -m splitbox export [INPUT] (--out-dir DIR | --zip FILE) [--ci] [options as for split]
    python -m splitbox validate <instance.json> <schema_name>

INPUT defaults to ``-`` (stdin).  ``--preset FILE.yaml`` supplies defaults
for any option; flags given on the command line win.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from splitbox import __version__
from splitbox.api import build_request, render_groups
from splitbox.contracts.load import available_schemas, validate_instance
from splitbox.core.config import DEFAULT_MAX_INPUT_BYTES, RunOptions, load_preset
from splitbox.core.host import ExecutionHost
from splitbox.errors import ConfigError
from splitbox.model import (
    DedupeMode,
    DelimiterMode,
    OutputDelimiter,
    OutputTemplate,
    SplitMode,
    ValidationMode,
)
from splitbox.model.request import SplitOutcome
from splitbox.reports.archive import default_archive_name, write_archive, write_batch_files
from splitbox.reports.formatter import format_batch_content
from splitbox.utils.exit_codes import ExitCode
from splitbox.utils.json_norm import stable_json_dump


def _choices(enum_cls: Any) -> list[str]:
    return [m.value for m in enum_cls]


# ── input & options ─────────────────────────────────────────────────


def _read_input(source: str, *, max_bytes: int = DEFAULT_MAX_INPUT_BYTES) -> str:
    """Read raw input from a file path or ``-`` (stdin)."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise ConfigError(f"input file does not exist: {path}")
    size = path.stat().st_size
    if size > max_bytes:
        raise ConfigError(f"input is {size} bytes, larger than the {max_bytes}-byte limit")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise ConfigError(f"input is not valid UTF-8: {path}") from None
    except OSError as exc:
        raise ConfigError(f"cannot read input {path}: {exc}") from exc


def _resolve_options(args: argparse.Namespace) -> RunOptions:
    """Defaults ← preset ← command-line flags."""
    merged: dict[str, Any] = asdict(RunOptions())
    if args.preset is not None:
        merged.update(load_preset(args.preset))
    for key in merged:
        value = getattr(args, key, None)
        if value is not None:
            merged[key] = value
    return RunOptions(**merged)


def _run_split(args: argparse.Namespace, opts: RunOptions) -> SplitOutcome:
    raw_input = _read_input(args.input)
    request = build_request(
        raw_input,
        delimiter=opts.delimiter,
        dedupe_mode=opts.dedupe,
        validation_mode=opts.validation,
        custom_pattern=opts.pattern,
        split_mode=opts.mode,
        split_value=opts.value,
    )
    with ExecutionHost(isolated=not args.in_process) as host:
        return host.run(request)


def _print_human(outcome: SplitOutcome) -> None:
    """Pretty-print a preparation summary to stderr."""
    stats = outcome.stats
    if stats is None:
        return
    print(
        f"\nPrepared {outcome.total_items} item(s) from {stats.raw_token_count} "
        f"token(s) into {len(outcome.groups)} batch(es)",
        file=sys.stderr,
    )
    print(
        f"   Removed  : empty={stats.empty_removed}, invalid={stats.invalid_removed}, "
        f"duplicates={stats.duplicates_removed}",
        file=sys.stderr,
    )
    if stats.invalid_examples:
        shown = ", ".join(repr(e) for e in stats.invalid_examples)
        more = stats.invalid_removed - len(stats.invalid_examples)
        suffix = f" … and {more} more" if more > 0 else ""
        print(f"   Invalid  : {shown}{suffix}", file=sys.stderr)
    print("", file=sys.stderr)


# ── parser ──────────────────────────────────────────────────────────


def _add_prepare_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input text file (default: '-' for stdin).",
    )
    p.add_argument(
        "--preset",
        type=Path,
        default=None,
        help="YAML file with default option values.",
    )
    p.add_argument(
        "--delimiter",
        choices=_choices(DelimiterMode),
        default=None,
        help="How input is split into items (default: auto).",
    )
    p.add_argument(
        "--dedupe",
        choices=_choices(DedupeMode),
        default=None,
        help="Duplicate removal mode (default: none).",
    )
    p.add_argument(
        "--validation",
        choices=_choices(ValidationMode),
        default=None,
        help="Pattern every item must match (default: none).",
    )
    p.add_argument(
        "--pattern",
        default=None,
        help="Regular expression for --validation custom_regex.",
    )
    p.add_argument(
        "--mode",
        choices=_choices(SplitMode),
        default=None,
        help="Batch sizing strategy (default: items_per_group).",
    )
    p.add_argument(
        "--value",
        type=int,
        default=None,
        help="Bound for the sizing strategy (default: 100).",
    )
    p.add_argument(
        "--template",
        choices=_choices(OutputTemplate),
        default=None,
        help="Output encoding for each batch (default: plain).",
    )
    p.add_argument(
        "--output-delimiter",
        dest="output_delimiter",
        choices=_choices(OutputDelimiter),
        default=None,
        help="Join delimiter for the plain template (default: newline).",
    )
    p.add_argument(
        "--in-process",
        dest="in_process",
        action="store_true",
        default=False,
        help="Run in a worker thread instead of a separate worker process.",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="splitbox",
        description="Prepare delimited item lists and split them into batches.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging on stderr.",
    )
    sub = p.add_subparsers(dest="command")

    # ── split subcommand ────────────────────────────────────────────
    split_p = sub.add_parser(
        "split",
        help="Prepare input, split it into batches and print them.",
    )
    _add_prepare_args(split_p)
    split_p.add_argument(
        "--batch",
        type=int,
        default=None,
        help="Print only batch N (1-based).",
    )
    split_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print groups and stats as JSON instead of rendered batches.",
    )
    split_p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write one rendered batch (--batch, default 1) to FILE.",
    )
    split_p.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Exit 1 when any item was rejected by validation.",
    )

    # ── export subcommand ───────────────────────────────────────────
    export_p = sub.add_parser(
        "export",
        help="Write every batch plus manifest.json to a directory or zip archive.",
    )
    _add_prepare_args(export_p)
    target = export_p.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--out-dir",
        dest="out_dir",
        type=Path,
        default=None,
        help="Directory to write batch files into.",
    )
    target.add_argument(
        "--zip",
        dest="zip_path",
        type=Path,
        default=None,
        help="Zip archive to write (a directory gets a generated archive name).",
    )
    export_p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Fixed manifest timestamp and archive name.",
    )

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON message against a bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument(
        "schema_name",
        help=f"Schema filename, one of: {', '.join(available_schemas())}",
    )
    return p


# ── handlers ────────────────────────────────────────────────────────


def _handle_split(args: argparse.Namespace) -> int:
    """Dispatch ``splitbox split``."""
    opts = _resolve_options(args)
    outcome = _run_split(args, opts)
    if not outcome.ok:
        print(f"error: {outcome.error}", file=sys.stderr)
        return ExitCode.ERROR

    _print_human(outcome)

    if args.json_out:
        stable_json_dump(outcome.to_dict(), sys.stdout)
    elif args.out is not None or args.batch is not None:
        number = 1 if args.batch is None else args.batch
        if not 1 <= number <= len(outcome.groups):
            print(
                f"error: --batch must be between 1 and {len(outcome.groups)}",
                file=sys.stderr,
            )
            return ExitCode.ERROR
        group = outcome.groups[number - 1]
        content = format_batch_content(group.items, opts.template, opts.output_delimiter)
        if args.out is not None:
            args.out.parent.mkdir(parents=True, exist_ok=True)
            args.out.write_text(content, encoding="utf-8", newline="")
            print(f"{group.label} written to {args.out}", file=sys.stderr)
        else:
            print(content)
    else:
        rendered = render_groups(outcome.groups, opts.template, opts.output_delimiter)
        for group, content in zip(outcome.groups, rendered):
            print(f"== {group.label} ==")
            print(content)
            print()

    if args.strict and outcome.stats is not None and outcome.stats.invalid_removed:
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS


def _handle_export(args: argparse.Namespace) -> int:
    """Dispatch ``splitbox export``."""
    opts = _resolve_options(args)
    outcome = _run_split(args, opts)
    if not outcome.ok:
        print(f"error: {outcome.error}", file=sys.stderr)
        return ExitCode.ERROR

    _print_human(outcome)

    if args.out_dir is not None:
        written = write_batch_files(
            args.out_dir,
            outcome.groups,
            opts.template,
            opts.output_delimiter,
            ci_mode=args.ci_mode,
        )
        print(f"Exported {len(written) - 1} batch file(s) to {args.out_dir}", file=sys.stderr)
    else:
        zip_path: Path = args.zip_path
        if zip_path.is_dir():
            zip_path = zip_path / default_archive_name(ci_mode=args.ci_mode)
        write_archive(
            zip_path,
            outcome.groups,
            opts.template,
            opts.output_delimiter,
            ci_mode=args.ci_mode,
        )
        print(f"Exported {len(outcome.groups)} batch(es) to {zip_path}", file=sys.stderr)
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    """Dispatch ``splitbox validate``.

    Exit code contract:
      1 = schema violation
      2 = unreadable instance / schema not found
    """
    import jsonschema

    try:
        instance = json.loads(Path(args.instance).read_text(encoding="utf-8"))
        validate_instance(instance, args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (see ``ExitCode``)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    if args.command is None:
        parser.print_usage(sys.stderr)
        print("error: please choose a subcommand.", file=sys.stderr)
        return ExitCode.ERROR

    if args.command == "validate":
        return _handle_validate(args)

    try:
        if args.command == "split":
            return _handle_split(args)
        if args.command == "export":
            return _handle_export(args)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    print(f"error: unknown command {args.command!r}", file=sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
