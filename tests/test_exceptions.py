"""Tests for exception hierarchies."""

import pytest

from fixit_rewriter.fixit.exceptions import DiagnosticLoadError, FixItError, OutputWriteError
from fixit_rewriter.rewrite.exceptions import RewriteError, SourceFileError, UnknownFileError


class TestFixItExceptions:
    def test_subclasses_inherit_from_fixit_error(self):
        assert issubclass(DiagnosticLoadError, FixItError)
        assert issubclass(OutputWriteError, FixItError)

    def test_message_propagation(self):
        message = "Cannot write fixed file 'out.c'"
        assert str(OutputWriteError(message)) == message

    def test_catch_output_write_error_as_fixit_error(self):
        with pytest.raises(FixItError):
            raise OutputWriteError("disk full")


class TestRewriteExceptions:
    def test_subclasses_inherit_from_rewrite_error(self):
        assert issubclass(UnknownFileError, RewriteError)
        assert issubclass(SourceFileError, RewriteError)

    def test_families_are_separate(self):
        assert not issubclass(RewriteError, FixItError)
        assert not issubclass(FixItError, RewriteError)
