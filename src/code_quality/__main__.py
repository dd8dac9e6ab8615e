"""CLI entry-point for code_quality.

Usage:
    python -m code_quality <path>
    python -m code_quality <path> --format json --output result.json
    python -m code_quality analyze <path> [--format text|json|markdown|html]
        [--output FILE] [--fail-on critical|high|medium|low|info|never]
        [--workers N] [--max-method-lines N] [-v]
    python -m code_quality validate <instance.json> [schema_name]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import jsonschema

from code_quality import __version__
from code_quality.api import RESULT_SCHEMA, analyze_path
from code_quality.contracts.load import validate_file
from code_quality.core.config import AnalysisConfig
from code_quality.model import Severity
from code_quality.reports.exporters import EXPORT_FORMATS, export_result
from code_quality.utils.exit_codes import ExitCode, exit_code_for

_logger = logging.getLogger("code_quality")

_FAIL_ON_CHOICES = [s.value for s in Severity] + ["never"]
_KNOWN_COMMANDS = {"analyze", "validate"}
# Options whose next argument is their value, not a positional.
_VALUE_OPTIONS = {
    "--format", "--output", "-o", "--fail-on", "--workers", "--max-method-lines",
}


def _add_analyze_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "path",
        type=Path,
        help="Java file or directory tree to analyze.",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        choices=EXPORT_FORMATS,
        default="text",
        help="Output format (default: text).",
    )
    p.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the report to FILE instead of stdout.",
    )
    p.add_argument(
        "--fail-on",
        dest="fail_on",
        choices=_FAIL_ON_CHOICES,
        default=Severity.HIGH.value,
        help="Exit 1 when an issue at or above this severity exists (default: high).",
    )
    p.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Parse and analyze files on N threads (default: 1).",
    )
    p.add_argument(
        "--max-method-lines",
        dest="max_method_lines",
        type=int,
        default=None,
        help="Method body length above which a long-method issue is raised.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log progress and skipped files to stderr.",
    )


def _build_default_parser() -> argparse.ArgumentParser:
    """Parser for the bare ``code-quality <path>`` form."""
    p = argparse.ArgumentParser(
        prog="code-quality",
        description="Rule-based quality analysis for Java sources.",
    )
    _add_analyze_arguments(p)
    p.set_defaults(command="analyze")
    return p


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="code-quality",
        description="Rule-based quality analysis for Java sources.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── analyze subcommand ──────────────────────────────────────────
    analyze_p = sub.add_parser(
        "analyze",
        help="Analyze a Java file or directory and print a report.",
    )
    _add_analyze_arguments(analyze_p)

    # ── validate subcommand ─────────────────────────────────────────
    validate_p = sub.add_parser(
        "validate",
        help="Validate a JSON result document against a bundled schema.",
    )
    validate_p.add_argument("instance", type=Path, help="JSON document to check.")
    validate_p.add_argument(
        "schema_name",
        nargs="?",
        default=RESULT_SCHEMA,
        help=f"Schema file name (default: {RESULT_SCHEMA}).",
    )
    return p


def _first_positional_index(argv: list[str]) -> int | None:
    skip_next = False
    for i, arg in enumerate(argv):
        if skip_next:
            skip_next = False
            continue
        if arg.startswith("-"):
            skip_next = arg in _VALUE_OPTIONS
            continue
        return i
    return None


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _handle_analyze(args: argparse.Namespace) -> int:
    overrides = {}
    if args.workers is not None:
        if args.workers < 1:
            print("error: --workers must be at least 1", file=sys.stderr)
            return ExitCode.ERROR
        overrides["max_workers"] = args.workers
    if args.max_method_lines is not None:
        overrides["max_method_lines"] = args.max_method_lines
    config = AnalysisConfig.from_env(**overrides)

    try:
        result = analyze_path(args.path, config=config)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    report = export_result(result, args.fmt)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(report, encoding="utf-8")
        _logger.info("Wrote %s report to %s", args.fmt, args.output)
    else:
        sys.stdout.write(report)

    fail_on = None if args.fail_on == "never" else Severity(args.fail_on)
    return exit_code_for(result, fail_on)


def _handle_validate(args: argparse.Namespace) -> int:
    # Exit code contract:
    #   1 = schema violation
    #   2 = unreadable document / unknown schema
    try:
        validate_file(args.instance, args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point: returns an ``ExitCode``."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    # A first positional that is not a command is the path of the default
    # analyze mode, so `code-quality src/ --format json` works.
    index = _first_positional_index(effective_argv)
    if index is None:
        args = _build_parser().parse_args(effective_argv)
    elif effective_argv[index] in _KNOWN_COMMANDS:
        # Options written before the command belong to it.
        command = effective_argv[index]
        rest = effective_argv[:index] + effective_argv[index + 1:]
        args = _build_parser().parse_args([command] + rest)
    else:
        args = _build_default_parser().parse_args(effective_argv)

    if args.command is None:
        _build_parser().print_help(sys.stderr)
        return ExitCode.ERROR

    if args.command == "validate":
        return _handle_validate(args)

    _configure_logging(args.verbose)
    return _handle_analyze(args)


if __name__ == "__main__":
    raise SystemExit(main())
