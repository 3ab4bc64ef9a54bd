"""Report models for fix-it application and output."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fixit_rewriter.models.diagnostic_models import DiagnosticLevel, EditOperation


class FailureKind(str, Enum):
    INVALID_RANGE = "invalid_range"                    # Range size undefined
    UNREWRITABLE_INSERTION = "unrewritable_insertion"  # Insertion point not rewritable
    APPLY_CONFLICT = "apply_conflict"                  # Splice clashed with an earlier edit


class DiagnosticStatus(str, Enum):
    """How the rewriter handled one diagnostic."""

    APPLIED = "applied"    # Every hint applied
    FAILED = "failed"      # Valid, but at least one hint conflicted
    REJECTED = "rejected"  # At least one hint failed validation
    NO_HINTS = "no_hints"


class DiagnosticOutcome(BaseModel):
    model_config = ConfigDict(frozen=False)

    index: int                      # Position in emission order, from 0
    level: DiagnosticLevel
    message: str
    status: DiagnosticStatus
    failure: FailureKind | None = None
    hints_applied: int = 0
    failed_edits: list[EditOperation] = Field(default_factory=list)
    counted_as_failure: bool = False


class WriteStatus(str, Enum):
    WRITTEN = "written"
    UNCHANGED = "unchanged"
    SUPPRESSED = "suppressed"


class WriteResult(BaseModel):
    model_config = ConfigDict(frozen=False)

    status: WriteStatus
    destination: str | None = None  # "-" for standard output
    bytes_written: int = 0
    num_failures: int = 0

    @property
    def suppressed(self) -> bool:
        return self.status == WriteStatus.SUPPRESSED
