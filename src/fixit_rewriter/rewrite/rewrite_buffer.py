"""Rewrite buffer: an original text plus an ordered log of splices.

Every operation addresses the buffer in *original* coordinates. The splice
log is replayed on each lookup to find where an original offset currently
sits in the rendered text, so positions computed before any edit existed
stay usable after many edits.

Conflicts are resolved first-applied-wins: an operation that would land
inside text already removed, or would remove text another splice inserted,
is refused and leaves the buffer untouched.
"""

from pydantic import BaseModel, ConfigDict


class Splice(BaseModel):
    """One accepted edit, recorded in original coordinates."""

    model_config = ConfigDict(frozen=True)

    offset: int       # Original offset where the splice starts
    removed: int = 0  # Original units removed from offset onwards
    text: str = ""    # Text inserted at offset

    @property
    def removed_end(self) -> int:
        return self.offset + self.removed


class RewriteBuffer:
    """Mutable rendering of one file's original text."""

    def __init__(self, original: str) -> None:
        self._original = original
        self._rendered = original
        self._splices: list[Splice] = []

    @property
    def original(self) -> str:
        return self._original

    @property
    def splices(self) -> tuple[Splice, ...]:
        return tuple(self._splices)

    def render(self) -> str:
        return self._rendered

    def has_edits(self) -> bool:
        return bool(self._splices)

    def in_bounds(self, offset: int) -> bool:
        return 0 <= offset <= len(self._original)

    def get_mapped_offset(self, offset: int, after_inserts: bool = False) -> int | None:
        """Translate an original offset into the rendered text.

        Args:
            offset: Offset into the original text.
            after_inserts: Resolve to the position after text already inserted
                at this offset instead of before it.

        Returns:
            Offset into render(), or None if the original offset is out of
            bounds or falls strictly inside removed text.
        """
        if not self.in_bounds(offset):
            return None
        mapped = offset
        for splice in self._splices:
            if splice.offset < offset < splice.removed_end:
                return None
            if splice.removed and splice.removed_end <= offset:
                mapped -= splice.removed
            if splice.offset < offset or (splice.offset == offset and after_inserts):
                mapped += len(splice.text)
        return mapped

    def _removal_conflicts(self, begin: int, end: int) -> bool:
        for splice in self._splices:
            if splice.removed and splice.offset < end and begin < splice.removed_end:
                return True
            if splice.text and begin < splice.offset < end:
                return True
        return False

    def insert_text(self, offset: int, text: str, insert_after: bool = True) -> bool:
        """Insert text at an original offset.

        With insert_after the text lands after anything already inserted at
        the same offset; otherwise it lands before it.

        Returns:
            True if the text was inserted, False on conflict.
        """
        mapped = self.get_mapped_offset(offset, after_inserts=insert_after)
        if mapped is None:
            return False
        if not text:
            return True
        self._rendered = self._rendered[:mapped] + text + self._rendered[mapped:]
        self._splices.append(Splice(offset=offset, text=text))
        return True

    def remove_text(self, offset: int, size: int) -> bool:
        """Remove size original units starting at offset.

        Returns:
            True if the text was removed, False on conflict.
        """
        return self.replace_text(offset, size, "")

    def replace_text(self, offset: int, size: int, text: str) -> bool:
        """Remove size original units at offset and put text in their place.

        Text already inserted at offset is kept in front of the replacement.

        Returns:
            True if the splice was applied, False on conflict.
        """
        end = offset + size
        if size < 0 or not self.in_bounds(offset) or not self.in_bounds(end):
            return False
        if size == 0:
            return self.insert_text(offset, text, insert_after=True)
        if self._removal_conflicts(offset, end):
            return False
        mapped = self.get_mapped_offset(offset, after_inserts=True)
        if mapped is None:
            return False
        self._rendered = self._rendered[:mapped] + text + self._rendered[mapped + size:]
        self._splices.append(Splice(offset=offset, removed=size, text=text))
        return True
