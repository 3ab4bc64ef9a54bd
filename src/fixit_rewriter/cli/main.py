"""CLI entry point for the fix-it rewriter."""
import argparse
from dotenv import load_dotenv
import json
import os
import sys
import traceback

from fixit_rewriter.fixit.consumers import DiagnosticConsumer, TextDiagnosticPrinter
from fixit_rewriter.fixit.engine import DiagnosticsEngine
from fixit_rewriter.fixit.exceptions import DiagnosticLoadError, OutputWriteError
from fixit_rewriter.fixit.fixit_rewriter import FixItRewriter
from fixit_rewriter.fixit.loader import load_diagnostics, register_batch_files
from fixit_rewriter.fixit.writer import DEFAULT_FIXIT_MARKER, resolve_destination
from fixit_rewriter.models import DiagnosticStatus, WriteStatus
from fixit_rewriter.rewrite.exceptions import RewriteError
from fixit_rewriter.rewrite.source_manager import STDIN_FILE_NAME, SourceManager
from fixit_rewriter.utils.diff_generator import count_changed_lines

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_FIXIT_SUPPRESSED = 2
EXIT_WRITE_ERROR = 3
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

# Environment overrides (also read from .env)
ENV_MARKER = "FIXIT_MARKER"
ENV_DIAGNOSTICS = "FIXIT_DIAGNOSTICS"

# Keys shown by --dry-run
_SAFE_CONFIG_KEYS = frozenset({
    "input", "diagnostics", "output", "destination", "marker",
    "diff", "output_json", "quiet", "verbose", "dry_run",
})


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fixit-rewriter",
        description="Apply fix-it hints from recorded compiler diagnostics to a source file",
    )
    parser.add_argument(
        "input",
        type=str,
        help=f"Source file the diagnostics refer to ('{STDIN_FILE_NAME}' for standard input)",
    )
    parser.add_argument(
        "-d",
        "--diagnostics",
        type=str,
        default=os.getenv(ENV_DIAGNOSTICS, ""),
        help=f"JSON file of recorded diagnostics (default: ${ENV_DIAGNOSTICS})",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="",
        help="Write the fixed file here instead of next to the input",
    )
    parser.add_argument(
        "--marker",
        type=str,
        default=os.getenv(ENV_MARKER, DEFAULT_FIXIT_MARKER),
        help=(
            "Marker inserted before the input's extension to name the output "
            f"(default: ${ENV_MARKER} or '{DEFAULT_FIXIT_MARKER}')"
        ),
    )
    parser.add_argument(
        "--diff", action="store_true", help="Print a unified diff instead of writing a file"
    )
    parser.add_argument(
        "--output-json", action="store_true", help="Print a JSON run summary"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Do not echo diagnostics to stderr"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print config and exit without running"
    )
    return parser


def format_result_json(result: dict) -> str:
    """Serialize result dict to JSON string.

    Calls .model_dump() on Pydantic model values, including inside lists.
    """

    def _serialize(obj):
        if obj is None:
            return None
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        if isinstance(obj, list):
            return [_serialize(item) for item in obj]
        return obj

    prepared = {k: _serialize(v) for k, v in result.items()}
    return json.dumps(prepared, indent=2, default=str)


def print_config_human(config: dict) -> None:
    """Print configuration in human-readable format."""
    print("\nConfiguration:")
    print(f"{'='*40}")
    for key, value in config.items():
        if key in _SAFE_CONFIG_KEYS:
            print(f"  {key}: {value}")
    print(f"{'='*40}")


def print_result_human(result: dict, stream=None) -> None:
    """Print a run summary in human-readable format."""
    out = stream if stream is not None else sys.stderr
    print(f"\n{'='*60}", file=out)
    print("Fix-it Results", file=out)
    print(f"{'='*60}", file=out)

    print(f"\nInput: {result['input']}", file=out)
    print(
        f"Diagnostics: {result['num_reported']} "
        f"(errors: {result['num_errors']}, warnings: {result['num_warnings']})",
        file=out,
    )

    outcomes = result.get("outcomes", [])
    status_counts: dict[str, int] = {}
    for outcome in outcomes:
        status_counts[outcome.status.value] = status_counts.get(outcome.status.value, 0) + 1
    for status, count in sorted(status_counts.items()):
        print(f"  {status}: {count}", file=out)

    failed = [outcome for outcome in outcomes if outcome.counted_as_failure]
    if failed:
        print(f"\nFailures ({len(failed)}):", file=out)
        for outcome in failed:
            reason = outcome.failure.value if outcome.failure else outcome.status.value
            print(
                f"  - #{outcome.index} {outcome.level.value}: {outcome.message} [{reason}]",
                file=out,
            )

    print(f"\nStatus: {result['status']}", file=out)
    if result.get("destination"):
        print(f"Destination: {result['destination']}", file=out)
    file_diff = result.get("diff")
    if file_diff is not None:
        changes = count_changed_lines(file_diff.diff_text)
        print(f"Lines added: {changes['added']}, removed: {changes['removed']}", file=out)
    other_files = result.get("other_rewritten_files", [])
    if other_files:
        print(f"Not written (only the main file is): {', '.join(other_files)}", file=out)
    print(f"\n{'='*60}", file=out)


def determine_exit_code(result: dict) -> int:
    """Determine the exit code from the result dict."""
    if result["status"] == WriteStatus.SUPPRESSED.value:
        return EXIT_FIXIT_SUPPRESSED
    return EXIT_SUCCESS


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def run_fixits(args: argparse.Namespace) -> dict:
    """Replay recorded diagnostics through a FixItRewriter and emit the result.

    Returns:
        Result dict with the write status, totals and per-diagnostic outcomes.

    Raises:
        RewriteError: If a source file cannot be read.
        DiagnosticLoadError: If the diagnostics cannot be loaded.
        OutputWriteError: If the fixed file cannot be written.
    """
    source_manager = SourceManager()
    main_file_id = source_manager.add_file_from_path(args.input)
    source_manager.set_main_file_id(main_file_id)

    batch = load_diagnostics(args.diagnostics)
    register_batch_files(source_manager, batch)

    client: DiagnosticConsumer | None = None
    if not args.quiet:
        client = TextDiagnosticPrinter(source_manager, stream=sys.stderr)
    fixit = FixItRewriter(source_manager, client=client)
    engine = DiagnosticsEngine(fixit)
    engine.report_all(batch.diagnostics)

    result = {
        "input": args.input,
        "status": None,
        "destination": None,
        "num_failures": fixit.num_failures,
        "num_reported": engine.num_reported,
        "num_errors": engine.num_errors,
        "num_warnings": engine.num_warnings,
        "applied": sum(1 for o in fixit.outcomes if o.status == DiagnosticStatus.APPLIED),
        "outcomes": fixit.outcomes,
        "diff": None,
        "other_rewritten_files": [
            source_manager.get_file_name(file_id)
            for file_id in fixit.rewriter.rewritten_file_ids()
            if file_id != main_file_id
        ],
    }

    if args.diff:
        file_diff = fixit.diff_fixed_file()
        if file_diff is None:
            result["status"] = WriteStatus.SUPPRESSED.value
        else:
            result["status"] = (
                WriteStatus.WRITTEN.value if file_diff.has_changes else WriteStatus.UNCHANGED.value
            )
            result["destination"] = STDIN_FILE_NAME
            result["diff"] = file_diff
            # The JSON summary carries the diff instead
            if file_diff.diff_text and not args.output_json:
                print(file_diff.diff_text)
        return result

    write_result = fixit.write_fixed_file(args.input, args.output, marker=args.marker)
    result["status"] = write_result.status.value
    result["destination"] = write_result.destination
    return result


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    destination = resolve_destination(args.input, args.output, args.marker)
    config = {
        "input": args.input,
        "diagnostics": args.diagnostics,
        "output": args.output,
        "destination": STDIN_FILE_NAME if args.diff else destination,
        "marker": args.marker,
        "diff": args.diff,
        "output_json": args.output_json,
        "quiet": args.quiet,
        "verbose": args.verbose,
        "dry_run": args.dry_run,
    }

    if args.dry_run:
        if args.output_json:
            print(json.dumps(config, indent=2))
        else:
            print_config_human(config)
        return EXIT_SUCCESS

    if not args.diagnostics:
        print(
            f"Error: no diagnostics file given (use --diagnostics or ${ENV_DIAGNOSTICS}).",
            file=sys.stderr,
        )
        return EXIT_INVALID_INPUT

    if args.output_json and not args.diff and destination == STDIN_FILE_NAME:
        print(
            "Error: --output-json cannot be combined with output to standard output.",
            file=sys.stderr,
        )
        return EXIT_INVALID_INPUT

    try:
        result = run_fixits(args)

        if args.output_json:
            print(format_result_json(result))
        elif args.verbose:
            print_result_human(result)

        return determine_exit_code(result)

    except (RewriteError, DiagnosticLoadError) as exc:
        return _handle_error("Invalid input", exc, args.verbose, EXIT_INVALID_INPUT)

    except OutputWriteError as exc:
        return _handle_error("Write error", exc, args.verbose, EXIT_WRITE_ERROR)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)


if __name__ == "__main__":
    sys.exit(main())
