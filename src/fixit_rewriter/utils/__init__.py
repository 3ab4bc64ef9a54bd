"""Utilities for the fix-it rewriter."""

from fixit_rewriter.utils.diff_generator import (
    count_changed_lines,
    generate_unified_diff,
)

__all__ = [
    "count_changed_lines",
    "generate_unified_diff",
]
