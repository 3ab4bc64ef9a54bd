"""Diagnostic and fix-it hint models."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from fixit_rewriter.models.location_models import SourceLocation, SourceRange


class DiagnosticLevel(str, Enum):
    """Severity of a diagnostic."""

    IGNORED = "ignored"
    NOTE = "note"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def is_error(self) -> bool:
        return self in (DiagnosticLevel.ERROR, DiagnosticLevel.FATAL)


class InsertEdit(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["insert"] = "insert"
    at: SourceLocation
    text: str


class RemoveEdit(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["remove"] = "remove"
    range: SourceRange


class ReplaceEdit(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["replace"] = "replace"
    range: SourceRange
    text: str


EditOperation = Annotated[
    Union[InsertEdit, RemoveEdit, ReplaceEdit],
    Field(discriminator="kind"),
]


class FixItHint(BaseModel):
    """A single code modification suggested by a diagnostic.

    A hint without a remove range inserts ``code_to_insert`` at
    ``insertion_loc``. A hint with a remove range and no text removes the
    range. Anything else replaces the range with the text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    remove_range: SourceRange | None = Field(
        default=None,
        validation_alias=AliasChoices("remove_range", "remove"),
    )
    insertion_loc: SourceLocation | None = Field(
        default=None,
        validation_alias=AliasChoices("insertion_loc", "insert_at"),
    )
    code_to_insert: str = Field(
        default="",
        validation_alias=AliasChoices("code_to_insert", "text"),
    )

    @classmethod
    def insertion(cls, loc: SourceLocation, code: str) -> "FixItHint":
        return cls(insertion_loc=loc, code_to_insert=code)

    @classmethod
    def removal(cls, remove_range: SourceRange) -> "FixItHint":
        return cls(remove_range=remove_range)

    @classmethod
    def replacement(cls, remove_range: SourceRange, code: str) -> "FixItHint":
        return cls(remove_range=remove_range, code_to_insert=code)

    @property
    def operation(self) -> InsertEdit | RemoveEdit | ReplaceEdit | None:
        """Classify the hint. None when there is nowhere to apply it."""
        if self.remove_range is None:
            if self.insertion_loc is None:
                return None
            return InsertEdit(at=self.insertion_loc, text=self.code_to_insert)
        if not self.code_to_insert:
            return RemoveEdit(range=self.remove_range)
        return ReplaceEdit(range=self.remove_range, text=self.code_to_insert)


class Diagnostic(BaseModel):
    """One diagnostic as emitted by a front end, with its fix-it hints."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: DiagnosticLevel
    message: str
    location: SourceLocation | None = None
    hints: list[FixItHint] = Field(
        default_factory=list,
        validation_alias=AliasChoices("hints", "fixits"),
    )

    @property
    def num_fixit_hints(self) -> int:
        return len(self.hints)


class ExpansionRegion(BaseModel):
    """A span of a file holding macro-expanded or synthetic text."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file_id: int = Field(default=1, ge=1, validation_alias=AliasChoices("file_id", "file"))
    begin: int = Field(ge=0)
    end: int = Field(ge=0)


class DiagnosticBatch(BaseModel):
    """Recorded diagnostics for one run, as read from JSON.

    File id 1 is the main file. Extra files get ids from 2 in list order.
    """

    model_config = ConfigDict(frozen=False, extra="forbid")

    files: list[str] = Field(default_factory=list)
    expansions: list[ExpansionRegion] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
