"""Diagnostic consumers: the observer interface diagnostics are sent to."""

import json
import sys
from typing import Protocol, TextIO, runtime_checkable

from fixit_rewriter.models.diagnostic_models import (
    Diagnostic,
    DiagnosticLevel,
    FixItHint,
    InsertEdit,
    RemoveEdit,
)
from fixit_rewriter.models.location_models import SourceLocation
from fixit_rewriter.rewrite.source_manager import SourceManager

_LEVEL_LABELS = {
    DiagnosticLevel.IGNORED: "ignored",
    DiagnosticLevel.NOTE: "note",
    DiagnosticLevel.WARNING: "warning",
    DiagnosticLevel.ERROR: "error",
    DiagnosticLevel.FATAL: "fatal error",
}


@runtime_checkable
class DiagnosticConsumer(Protocol):
    """Receives every diagnostic, once, in emission order."""

    def handle_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Process one diagnostic."""

    def include_in_diagnostic_counts(self) -> bool:
        """Whether diagnostics seen by this consumer count towards totals."""


class StoredDiagnosticConsumer:
    """Keeps every diagnostic it receives."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def handle_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def include_in_diagnostic_counts(self) -> bool:
        return True


class IgnoringDiagnosticConsumer:
    """Drops everything and opts out of diagnostic counts."""

    def handle_diagnostic(self, diagnostic: Diagnostic) -> None:
        pass

    def include_in_diagnostic_counts(self) -> bool:
        return False


class TextDiagnosticPrinter:
    """Prints diagnostics as ``file:line:col: level: message`` lines.

    Each fix-it hint is printed on its own ``fix-it:`` line below the
    diagnostic.
    """

    def __init__(
        self,
        source_manager: SourceManager,
        stream: TextIO | None = None,
        show_fixits: bool = True,
    ) -> None:
        self.source_manager = source_manager
        self.stream = stream
        self.show_fixits = show_fixits

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stderr

    def format_location(self, loc: SourceLocation | None) -> str:
        if loc is None or not self.source_manager.has_file(loc.file_id):
            return ""
        line, column = self.source_manager.get_line_col(loc)
        return f"{self.source_manager.get_file_name(loc.file_id)}:{line}:{column}"

    def _position(self, loc: SourceLocation) -> str:
        if not self.source_manager.has_file(loc.file_id):
            return f"<file {loc.file_id}>@{loc.offset}"
        line, column = self.source_manager.get_line_col(loc)
        return f"{line}:{column}"

    def format_hint(self, hint: FixItHint) -> str:
        operation = hint.operation
        if operation is None:
            return "fix-it: (no location)"
        if isinstance(operation, InsertEdit):
            return f"fix-it: insert {json.dumps(operation.text)} at {self._position(operation.at)}"
        span = f"{self._position(operation.range.begin)}-{self._position(operation.range.end)}"
        if isinstance(operation, RemoveEdit):
            return f"fix-it: remove {span}"
        return f"fix-it: replace {span} with {json.dumps(operation.text)}"

    def handle_diagnostic(self, diagnostic: Diagnostic) -> None:
        out = self._out()
        prefix = self.format_location(diagnostic.location)
        label = _LEVEL_LABELS[diagnostic.level]
        if prefix:
            print(f"{prefix}: {label}: {diagnostic.message}", file=out)
        else:
            print(f"{label}: {diagnostic.message}", file=out)
        if self.show_fixits:
            for hint in diagnostic.hints:
                print(f"  {self.format_hint(hint)}", file=out)

    def include_in_diagnostic_counts(self) -> bool:
        return True
