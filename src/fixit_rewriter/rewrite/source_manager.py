"""Registry of original source texts addressed by SourceLocation."""

import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from fixit_rewriter.models.location_models import LocationKind, SourceLocation
from fixit_rewriter.rewrite.exceptions import SourceFileError, UnknownFileError

# Name that stands for standard input (and standard output on write)
STDIN_FILE_NAME = "-"

SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"  # Undecodable bytes survive a round trip


def decode_source(data: bytes) -> str:
    """Decode raw file bytes so that encode_source() restores them exactly."""
    return data.decode(SOURCE_ENCODING, SOURCE_ERRORS)


def encode_source(text: str) -> bytes:
    return text.encode(SOURCE_ENCODING, SOURCE_ERRORS)


class SourceFile(BaseModel):
    """An original text plus its synthetic regions."""

    model_config = ConfigDict(frozen=False)

    file_id: int
    name: str
    text: str
    expansions: list[tuple[int, int]] = Field(default_factory=list)  # Half-open

    def in_expansion(self, offset: int) -> bool:
        return any(begin <= offset < end for begin, end in self.expansions)

    def splits_expansion(self, offset: int) -> bool:
        """True if offset falls between two characters of one region."""
        return any(begin < offset < end for begin, end in self.expansions)

    def overlaps_expansion(self, begin: int, end: int) -> bool:
        return any(
            exp_begin < end and begin < exp_end
            for exp_begin, exp_end in self.expansions
        )


class SourceManager:
    """Owns the original text of every file a run can touch."""

    def __init__(self) -> None:
        self._files: dict[int, SourceFile] = {}
        self._main_file_id: int | None = None

    def add_file(self, name: str, text: str) -> int:
        """Register a file and return its id. Ids start at 1."""
        file_id = len(self._files) + 1
        self._files[file_id] = SourceFile(file_id=file_id, name=name, text=text)
        return file_id

    def add_file_from_path(self, path: str) -> int:
        """Read a file from disk (or standard input for "-") and register it.

        Raises:
            SourceFileError: If the file cannot be read.
        """
        try:
            if path == STDIN_FILE_NAME:
                data = sys.stdin.buffer.read()
            else:
                data = Path(path).read_bytes()
        except OSError as exc:
            raise SourceFileError(f"Cannot read source file '{path}': {exc}") from exc
        return self.add_file(path, decode_source(data))

    def create_main_file(self, name: str, text: str) -> int:
        self._main_file_id = self.add_file(name, text)
        return self._main_file_id

    def set_main_file_id(self, file_id: int) -> None:
        self._get(file_id)
        self._main_file_id = file_id

    @property
    def main_file_id(self) -> int | None:
        return self._main_file_id

    def has_file(self, file_id: int) -> bool:
        return file_id in self._files

    def _get(self, file_id: int) -> SourceFile:
        try:
            return self._files[file_id]
        except KeyError:
            raise UnknownFileError(f"No file registered with id {file_id}") from None

    def get_file(self, file_id: int) -> SourceFile:
        return self._get(file_id)

    def get_buffer_data(self, file_id: int) -> str:
        return self._get(file_id).text

    def get_file_name(self, file_id: int) -> str:
        return self._get(file_id).name

    def add_expansion_region(self, file_id: int, begin: int, end: int) -> None:
        """Mark [begin, end) of a file as macro-expanded or synthetic text."""
        source = self._get(file_id)
        if not 0 <= begin <= end <= len(source.text):
            raise ValueError(
                f"Expansion region [{begin}, {end}) is outside file '{source.name}'"
            )
        source.expansions.append((begin, end))

    def get_location(self, file_id: int, offset: int) -> SourceLocation:
        """Build a location, marking it as an expansion when it is one."""
        source = self._get(file_id)
        kind = LocationKind.EXPANSION if source.in_expansion(offset) else LocationKind.FILE
        return SourceLocation(file_id=file_id, offset=offset, kind=kind)

    def get_line_col(self, loc: SourceLocation) -> tuple[int, int]:
        """Return the 1-based line and column of a location."""
        text = self._get(loc.file_id).text
        offset = min(loc.offset, len(text))
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return line, column
