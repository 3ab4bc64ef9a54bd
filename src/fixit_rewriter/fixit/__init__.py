"""Fix-it application: validation, the rewriting consumer and output."""

from fixit_rewriter.fixit.consumers import (
    DiagnosticConsumer,
    IgnoringDiagnosticConsumer,
    StoredDiagnosticConsumer,
    TextDiagnosticPrinter,
)
from fixit_rewriter.fixit.engine import DiagnosticsEngine
from fixit_rewriter.fixit.exceptions import (
    DiagnosticLoadError,
    FixItError,
    OutputWriteError,
)
from fixit_rewriter.fixit.fixit_rewriter import NO_FIXIT_WARNING, FixItRewriter
from fixit_rewriter.fixit.loader import (
    load_diagnostics,
    parse_diagnostics,
    register_batch_files,
)
from fixit_rewriter.fixit.validator import can_rewrite, find_invalid_hint, validate_hint
from fixit_rewriter.fixit.writer import (
    DEFAULT_FIXIT_MARKER,
    build_file_diff,
    diff_fixed_file,
    fixit_output_path,
    resolve_destination,
    write_fixed_file,
)

__all__ = [
    "DEFAULT_FIXIT_MARKER",
    "NO_FIXIT_WARNING",
    "DiagnosticConsumer",
    "DiagnosticLoadError",
    "DiagnosticsEngine",
    "FixItError",
    "FixItRewriter",
    "IgnoringDiagnosticConsumer",
    "OutputWriteError",
    "StoredDiagnosticConsumer",
    "TextDiagnosticPrinter",
    "build_file_diff",
    "can_rewrite",
    "diff_fixed_file",
    "find_invalid_hint",
    "fixit_output_path",
    "load_diagnostics",
    "parse_diagnostics",
    "register_batch_files",
    "resolve_destination",
    "validate_hint",
    "write_fixed_file",
]
