"""Exceptions for fix-it application and output.

Hints that fail validation or conflict at splice time are not exceptions;
they are recorded as failures on the rewriter.
"""


class FixItError(Exception):
    """Base exception for all fix-it operations."""


class DiagnosticLoadError(FixItError):
    """Raised when recorded diagnostics cannot be read or validated."""


class OutputWriteError(FixItError):
    """Raised when the rewritten file cannot be opened or written."""
