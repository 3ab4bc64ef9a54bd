"""Models for addressing positions in original source text."""

from enum import Enum
from functools import total_ordering

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LocationKind(str, Enum):
    """Where a location points."""

    FILE = "file"            # Directly addressable original text
    EXPANSION = "expansion"  # Macro-expanded or synthetic text


@total_ordering
class SourceLocation(BaseModel):
    """A position in one file's original text.

    Locations are ordered by offset. Locations from different files are
    never compared.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    file_id: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("file_id", "file"),
    )
    offset: int = Field(ge=0)
    kind: LocationKind = LocationKind.FILE

    @property
    def is_file_location(self) -> bool:
        return self.kind == LocationKind.FILE

    def with_offset(self, offset: int) -> "SourceLocation":
        """Return a location in the same file at another offset."""
        return self.model_copy(update={"offset": offset})

    def _check_comparable(self, other: "SourceLocation") -> None:
        if self.file_id != other.file_id:
            raise ValueError(
                f"Cannot compare locations from different files "
                f"({self.file_id} and {other.file_id})"
            )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SourceLocation):
            return NotImplemented
        self._check_comparable(other)
        return self.offset < other.offset


class SourceRange(BaseModel):
    """Half-open range [begin, end) within one file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    begin: SourceLocation
    end: SourceLocation

    @classmethod
    def from_offsets(cls, begin: int, end: int, file_id: int = 1) -> "SourceRange":
        return cls(
            begin=SourceLocation(file_id=file_id, offset=begin),
            end=SourceLocation(file_id=file_id, offset=end),
        )

    @property
    def in_single_file(self) -> bool:
        return self.begin.file_id == self.end.file_id
