"""Location-level facade over per-file rewrite buffers."""

from fixit_rewriter.models.location_models import SourceLocation, SourceRange
from fixit_rewriter.rewrite.rewrite_buffer import RewriteBuffer
from fixit_rewriter.rewrite.source_manager import SourceManager


class Rewriter:
    """Applies location-addressed edits to the files of a SourceManager.

    A RewriteBuffer is created for a file the first time an edit targets
    it. Edit methods return True when the edit was applied.
    """

    def __init__(self, source_manager: SourceManager) -> None:
        self._source_manager = source_manager
        self._buffers: dict[int, RewriteBuffer] = {}

    @property
    def source_manager(self) -> SourceManager:
        return self._source_manager

    def is_rewritable(self, loc: SourceLocation | None) -> bool:
        """True if text can be inserted at this location.

        The boundaries of an expansion region are rewritable: text put there
        lands before or after the synthetic text, never inside it.
        """
        if loc is None or not loc.is_file_location:
            return False
        if not self._source_manager.has_file(loc.file_id):
            return False
        source = self._source_manager.get_file(loc.file_id)
        if loc.offset > len(source.text):
            return False
        return not source.splits_expansion(loc.offset)

    def get_range_size(self, source_range: SourceRange) -> int | None:
        """Size of a range in original-text units, or None if undefined."""
        begin, end = source_range.begin, source_range.end
        if not (self.is_rewritable(begin) and self.is_rewritable(end)):
            return None
        if not source_range.in_single_file or end < begin:
            return None
        source = self._source_manager.get_file(begin.file_id)
        if source.overlaps_expansion(begin.offset, end.offset):
            return None
        return end.offset - begin.offset

    def get_edit_buffer(self, file_id: int) -> RewriteBuffer:
        buffer = self._buffers.get(file_id)
        if buffer is None:
            buffer = RewriteBuffer(self._source_manager.get_buffer_data(file_id))
            self._buffers[file_id] = buffer
        return buffer

    def get_rewrite_buffer_for(self, file_id: int) -> RewriteBuffer | None:
        return self._buffers.get(file_id)

    def rewritten_file_ids(self) -> list[int]:
        return sorted(
            file_id for file_id, buffer in self._buffers.items() if buffer.has_edits()
        )

    def get_rewritten_text(self, file_id: int) -> str:
        buffer = self._buffers.get(file_id)
        if buffer is None:
            return self._source_manager.get_buffer_data(file_id)
        return buffer.render()

    def insert_text_before(self, loc: SourceLocation, text: str) -> bool:
        """Insert before any text already inserted at loc."""
        if not self.is_rewritable(loc):
            return False
        return self.get_edit_buffer(loc.file_id).insert_text(loc.offset, text, insert_after=False)

    def insert_text_after(self, loc: SourceLocation, text: str) -> bool:
        """Insert after any text already inserted at loc."""
        if not self.is_rewritable(loc):
            return False
        return self.get_edit_buffer(loc.file_id).insert_text(loc.offset, text, insert_after=True)

    def remove_text(self, start: SourceLocation, size: int) -> bool:
        if not self.is_rewritable(start):
            return False
        return self.get_edit_buffer(start.file_id).remove_text(start.offset, size)

    def replace_text(self, start: SourceLocation, size: int, text: str) -> bool:
        if not self.is_rewritable(start):
            return False
        return self.get_edit_buffer(start.file_id).replace_text(start.offset, size, text)
