"""Data models for the fix-it rewriter."""

from fixit_rewriter.models.diagnostic_models import (
    Diagnostic,
    DiagnosticBatch,
    DiagnosticLevel,
    EditOperation,
    ExpansionRegion,
    FixItHint,
    InsertEdit,
    RemoveEdit,
    ReplaceEdit,
)
from fixit_rewriter.models.diff_models import FileDiff
from fixit_rewriter.models.location_models import (
    LocationKind,
    SourceLocation,
    SourceRange,
)
from fixit_rewriter.models.report_models import (
    DiagnosticOutcome,
    DiagnosticStatus,
    FailureKind,
    WriteResult,
    WriteStatus,
)

__all__ = [
    "Diagnostic",
    "DiagnosticBatch",
    "DiagnosticLevel",
    "DiagnosticOutcome",
    "DiagnosticStatus",
    "EditOperation",
    "ExpansionRegion",
    "FailureKind",
    "FileDiff",
    "FixItHint",
    "InsertEdit",
    "LocationKind",
    "RemoveEdit",
    "ReplaceEdit",
    "SourceLocation",
    "SourceRange",
    "WriteResult",
    "WriteStatus",
]
