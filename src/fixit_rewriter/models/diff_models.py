"""Models for representing file diffs."""

from pydantic import BaseModel, ConfigDict


class FileDiff(BaseModel):
    """Represents the rewrite of a single file as a unified diff."""

    model_config = ConfigDict(frozen=False)

    file_path: str  # Name the file was registered under
    original_content: str  # Source content before fix-its
    modified_content: str  # Source content after fix-its
    diff_text: str  # Unified diff output (git-compatible)

    @property
    def has_changes(self) -> bool:
        return self.original_content != self.modified_content
