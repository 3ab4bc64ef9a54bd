"""Structural checks run on fix-it hints before any of them is applied."""

from fixit_rewriter.models.diagnostic_models import FixItHint
from fixit_rewriter.models.report_models import FailureKind
from fixit_rewriter.rewrite.rewriter import Rewriter


def validate_hint(rewriter: Rewriter, hint: FixItHint) -> FailureKind | None:
    """Check that a hint could be applied to the current rewrite state.

    Passing this check does not guarantee the edit applies: an edit from an
    earlier diagnostic may still conflict with it at splice time.

    Args:
        rewriter: Rewriter holding the current buffers.
        hint: The hint to check.

    Returns:
        The reason the hint is invalid, or None if it is valid.
    """
    if hint.remove_range is not None and rewriter.get_range_size(hint.remove_range) is None:
        return FailureKind.INVALID_RANGE

    if hint.insertion_loc is not None and not rewriter.is_rewritable(hint.insertion_loc):
        return FailureKind.UNREWRITABLE_INSERTION

    if hint.remove_range is None and hint.insertion_loc is None:
        # Nowhere to put the text
        return FailureKind.UNREWRITABLE_INSERTION

    return None


def find_invalid_hint(
    rewriter: Rewriter,
    hints: list[FixItHint],
) -> tuple[int, FailureKind] | None:
    """Return the index and reason of the first invalid hint, if any."""
    for idx, hint in enumerate(hints):
        failure = validate_hint(rewriter, hint)
        if failure is not None:
            return idx, failure
    return None


def can_rewrite(rewriter: Rewriter, hints: list[FixItHint]) -> bool:
    """True if there is at least one hint and every hint is valid."""
    return bool(hints) and find_invalid_hint(rewriter, hints) is None
