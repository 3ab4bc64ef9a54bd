"""Diagnostic consumer that applies fix-it hints as a side effect.

FixItRewriter wraps another DiagnosticConsumer. Every diagnostic is
forwarded to it unchanged; the rewriter then tries to apply the
diagnostic's hints to the rewrite buffers it owns.

A diagnostic is applied all-or-nothing at validation time: if any hint is
invalid, none is applied. Once validated, each hint is applied on its own
and a conflicting hint does not stop its siblings. Failures are counted and
any failure suppresses output at write time.
"""

import sys
from typing import BinaryIO, TextIO

from fixit_rewriter.fixit.consumers import DiagnosticConsumer
from fixit_rewriter.fixit.validator import find_invalid_hint
from fixit_rewriter.fixit.writer import (
    DEFAULT_FIXIT_MARKER,
    diff_fixed_file,
    write_fixed_file,
)
from fixit_rewriter.models.diagnostic_models import (
    Diagnostic,
    FixItHint,
    InsertEdit,
    RemoveEdit,
)
from fixit_rewriter.models.diff_models import FileDiff
from fixit_rewriter.models.report_models import (
    DiagnosticOutcome,
    DiagnosticStatus,
    FailureKind,
    WriteResult,
)
from fixit_rewriter.rewrite.rewriter import Rewriter
from fixit_rewriter.rewrite.source_manager import SourceManager

NO_FIXIT_WARNING = "error without fix-it advice detected; fix-it will produce no output"


class FixItRewriter:
    """Applies fix-it hints from the diagnostics it observes."""

    def __init__(
        self,
        source_manager: SourceManager,
        client: DiagnosticConsumer | None = None,
        error_stream: TextIO | None = None,
    ) -> None:
        """Initialize the rewriter.

        Args:
            source_manager: Owner of the original texts hints point into.
            client: Consumer every diagnostic is forwarded to, if any.
            error_stream: Where operator messages go (defaults to stderr).
        """
        self.client = client
        self.rewriter = Rewriter(source_manager)
        self.outcomes: list[DiagnosticOutcome] = []
        self._error_stream = error_stream
        self._num_failures = 0
        self._warned_no_fixit = False

    @property
    def num_failures(self) -> int:
        return self._num_failures

    @property
    def source_manager(self) -> SourceManager:
        return self.rewriter.source_manager

    def _err(self) -> TextIO:
        return self._error_stream if self._error_stream is not None else sys.stderr

    def include_in_diagnostic_counts(self) -> bool:
        if self.client is not None:
            return self.client.include_in_diagnostic_counts()
        return True

    def handle_diagnostic(self, diagnostic: Diagnostic) -> None:
        if self.client is not None:
            self.client.handle_diagnostic(diagnostic)

        outcome = DiagnosticOutcome(
            index=len(self.outcomes),
            level=diagnostic.level,
            message=diagnostic.message,
            status=DiagnosticStatus.APPLIED,
        )
        self.outcomes.append(outcome)

        invalid = find_invalid_hint(self.rewriter, diagnostic.hints)
        if not diagnostic.hints or invalid is not None:
            outcome.status = (
                DiagnosticStatus.NO_HINTS if not diagnostic.hints else DiagnosticStatus.REJECTED
            )
            if invalid is not None:
                outcome.failure = invalid[1]
            # Errors without usable fix-its block all output
            if diagnostic.level.is_error:
                self._count_failure(outcome)
                if not self._warned_no_fixit:
                    self._warned_no_fixit = True
                    print(NO_FIXIT_WARNING, file=self._err())
            return

        for hint in diagnostic.hints:
            if self._apply_hint(hint):
                outcome.hints_applied += 1
            else:
                outcome.failed_edits.append(hint.operation)

        if outcome.failed_edits:
            outcome.status = DiagnosticStatus.FAILED
            outcome.failure = FailureKind.APPLY_CONFLICT
            self._count_failure(outcome)

    def _count_failure(self, outcome: DiagnosticOutcome) -> None:
        self._num_failures += 1
        outcome.counted_as_failure = True

    def _apply_hint(self, hint: FixItHint) -> bool:
        operation = hint.operation
        if isinstance(operation, InsertEdit):
            return self.rewriter.insert_text_before(operation.at, operation.text)

        size = self.rewriter.get_range_size(operation.range)
        if size is None:
            return False
        if isinstance(operation, RemoveEdit):
            return self.rewriter.remove_text(operation.range.begin, size)
        return self.rewriter.replace_text(operation.range.begin, size, operation.text)

    def write_fixed_file(
        self,
        in_file_name: str,
        out_file_name: str = "",
        marker: str = DEFAULT_FIXIT_MARKER,
        stdout: BinaryIO | None = None,
    ) -> WriteResult:
        """Write the fixed main file. See writer.write_fixed_file."""
        return write_fixed_file(
            self.rewriter,
            self._num_failures,
            in_file_name,
            out_file_name,
            marker=marker,
            error_stream=self._err(),
            stdout=stdout,
        )

    def diff_fixed_file(self) -> FileDiff | None:
        """Unified diff of the main file, or None when output is suppressed."""
        return diff_fixed_file(self.rewriter, self._num_failures, error_stream=self._err())
