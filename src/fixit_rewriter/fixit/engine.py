"""Diagnostics engine: reports diagnostics to a consumer and keeps totals."""

from fixit_rewriter.fixit.consumers import DiagnosticConsumer
from fixit_rewriter.models.diagnostic_models import Diagnostic, DiagnosticLevel


class DiagnosticsEngine:
    """Emits diagnostics to one consumer, in order.

    Error and warning totals only count diagnostics when the consumer
    says they participate in counts.
    """

    def __init__(self, client: DiagnosticConsumer) -> None:
        self.client = client
        self.num_errors = 0
        self.num_warnings = 0
        self.num_reported = 0

    def report(self, diagnostic: Diagnostic) -> None:
        if diagnostic.level == DiagnosticLevel.IGNORED:
            return

        self.client.handle_diagnostic(diagnostic)
        self.num_reported += 1

        if not self.client.include_in_diagnostic_counts():
            return
        if diagnostic.level.is_error:
            self.num_errors += 1
        elif diagnostic.level == DiagnosticLevel.WARNING:
            self.num_warnings += 1

    def report_all(self, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.report(diagnostic)

    def has_error_occurred(self) -> bool:
        return self.num_errors > 0
