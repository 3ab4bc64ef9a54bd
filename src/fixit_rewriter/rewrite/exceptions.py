"""Exceptions for source and rewrite buffer operations."""


class RewriteError(Exception):
    """Base exception for all rewrite operations."""


class UnknownFileError(RewriteError):
    """Raised when a file id was never registered with the source manager."""


class SourceFileError(RewriteError):
    """Raised when a source file cannot be read."""
