"""Tests for writing the fixed file."""

import io

import pytest

from fixit_rewriter.fixit.exceptions import OutputWriteError
from fixit_rewriter.fixit.fixit_rewriter import FixItRewriter
from fixit_rewriter.fixit.writer import (
    SUPPRESSED_MESSAGE,
    UNCHANGED_MESSAGE,
    build_file_diff,
    fixit_output_path,
    resolve_destination,
)
from fixit_rewriter.models import (
    Diagnostic,
    DiagnosticLevel,
    FixItHint,
    SourceLocation,
    SourceRange,
    WriteStatus,
)
from fixit_rewriter.rewrite.source_manager import SourceManager


def _make_fixit(tmp_path, error_stream, text="int x = 1;", name="main.c"):
    path = tmp_path / name
    path.write_text(text)
    manager = SourceManager()
    manager.set_main_file_id(manager.add_file_from_path(str(path)))
    return FixItRewriter(manager, error_stream=error_stream), path


def _const_fix():
    return Diagnostic(
        level=DiagnosticLevel.WARNING,
        message="missing const",
        hints=[FixItHint.insertion(SourceLocation(offset=0), "const ")],
    )


class TestOutputPath:
    def test_marker_goes_before_extension(self):
        assert fixit_output_path("foo.c") == "foo.fixit.c"

    def test_only_last_extension_is_used(self):
        assert fixit_output_path("src/a.tar.gz") == "src/a.tar.fixit.gz"

    def test_name_without_extension(self):
        assert fixit_output_path("Makefile") == "Makefile.fixit"

    def test_custom_marker(self):
        assert fixit_output_path("foo.cpp", marker="fixed") == "foo.fixed.cpp"

    def test_explicit_output_wins(self):
        assert resolve_destination("foo.c", "out.c") == "out.c"

    def test_stdin_goes_to_stdout(self):
        assert resolve_destination("-") == "-"

    def test_derived_destination(self):
        assert resolve_destination("foo.c") == "foo.fixit.c"


class TestWriteFixedFile:
    def test_writes_sibling_file(self, tmp_path, error_stream):
        fixit, path = _make_fixit(tmp_path, error_stream)
        fixit.handle_diagnostic(_const_fix())

        result = fixit.write_fixed_file(str(path))

        expected = tmp_path / "main.fixit.c"
        assert result.status == WriteStatus.WRITTEN
        assert result.destination == str(expected)
        assert expected.read_bytes() == b"const int x = 1;"
        assert result.bytes_written == len(b"const int x = 1;")
        assert path.read_text() == "int x = 1;"

    def test_writes_explicit_output(self, tmp_path, error_stream):
        fixit, path = _make_fixit(tmp_path, error_stream)
        fixit.handle_diagnostic(_const_fix())
        out = tmp_path / "fixed.c"

        result = fixit.write_fixed_file(str(path), str(out))

        assert result.status == WriteStatus.WRITTEN
        assert out.read_text() == "const int x = 1;"
        assert not (tmp_path / "main.fixit.c").exists()

    def test_writes_to_stdout_for_stdin_input(self, error_stream):
        manager = SourceManager()
        manager.create_main_file("-", "int x = 1;")
        fixit = FixItRewriter(manager, error_stream=error_stream)
        fixit.handle_diagnostic(_const_fix())
        stdout = io.BytesIO()

        result = fixit.write_fixed_file("-", stdout=stdout)

        assert result.status == WriteStatus.WRITTEN
        assert result.destination == "-"
        assert stdout.getvalue() == b"const int x = 1;"

    def test_preserves_bytes_outside_edits(self, tmp_path, error_stream):
        raw = b"int x = 1;\r\n// caf\xe9\r\n"
        path = tmp_path / "latin.c"
        path.write_bytes(raw)
        manager = SourceManager()
        manager.set_main_file_id(manager.add_file_from_path(str(path)))
        fixit = FixItRewriter(manager, error_stream=error_stream)
        fixit.handle_diagnostic(_const_fix())

        fixit.write_fixed_file(str(path))

        assert (tmp_path / "latin.fixit.c").read_bytes() == b"const " + raw

    def test_unchanged_main_file_writes_nothing(self, tmp_path, error_stream):
        fixit, path = _make_fixit(tmp_path, error_stream)
        fixit.handle_diagnostic(Diagnostic(level=DiagnosticLevel.WARNING, message="w"))

        result = fixit.write_fixed_file(str(path))

        assert result.status == WriteStatus.UNCHANGED
        assert not (tmp_path / "main.fixit.c").exists()
        assert error_stream.getvalue() == UNCHANGED_MESSAGE + "\n"

    def test_edits_to_other_files_leave_main_unchanged(self, tmp_path, error_stream):
        fixit, path = _make_fixit(tmp_path, error_stream)
        header = fixit.source_manager.add_file("other.h", "int y;")
        fixit.handle_diagnostic(
            Diagnostic(
                level=DiagnosticLevel.WARNING,
                message="w",
                hints=[FixItHint.insertion(SourceLocation(file_id=header, offset=0), "extern ")],
            )
        )

        result = fixit.write_fixed_file(str(path))

        assert fixit.rewriter.get_rewritten_text(header) == "extern int y;"
        assert result.status == WriteStatus.UNCHANGED

    def test_failures_suppress_output(self, tmp_path, error_stream):
        """Even successfully applied edits are not written after a failure."""
        fixit, path = _make_fixit(tmp_path, error_stream)
        out = tmp_path / "out.c"
        out.write_text("previous")
        fixit.handle_diagnostic(_const_fix())
        fixit.handle_diagnostic(
            Diagnostic(
                level=DiagnosticLevel.ERROR,
                message="bad",
                hints=[FixItHint.removal(SourceRange.from_offsets(4, 99))],
            )
        )
        error_stream.truncate(0)
        error_stream.seek(0)

        result = fixit.write_fixed_file(str(path), str(out))

        assert result.status == WriteStatus.SUPPRESSED
        assert result.suppressed is True
        assert result.num_failures == 1
        assert out.read_text() == "previous"
        assert not (tmp_path / "main.fixit.c").exists()
        assert error_stream.getvalue() == SUPPRESSED_MESSAGE.format(count=1) + "\n"

    def test_unwritable_destination_raises(self, tmp_path, error_stream):
        fixit, path = _make_fixit(tmp_path, error_stream)
        fixit.handle_diagnostic(_const_fix())
        with pytest.raises(OutputWriteError):
            fixit.write_fixed_file(str(path), str(tmp_path / "missing" / "out.c"))


class TestDiffFixedFile:
    def test_diff_of_applied_edits(self, tmp_path, error_stream):
        fixit, path = _make_fixit(tmp_path, error_stream, text="int x = 1;\n")
        fixit.handle_diagnostic(_const_fix())

        file_diff = fixit.diff_fixed_file()

        assert file_diff.has_changes is True
        assert file_diff.modified_content == "const int x = 1;\n"
        assert "-int x = 1;" in file_diff.diff_text
        assert "+const int x = 1;" in file_diff.diff_text
        assert not (tmp_path / "main.fixit.c").exists()

    def test_diff_is_suppressed_by_failures(self, tmp_path, error_stream):
        fixit, _ = _make_fixit(tmp_path, error_stream)
        fixit.handle_diagnostic(Diagnostic(level=DiagnosticLevel.ERROR, message="e"))
        assert fixit.diff_fixed_file() is None
        assert SUPPRESSED_MESSAGE.format(count=1) in error_stream.getvalue()

    def test_diff_without_edits_is_empty(self, tmp_path, error_stream):
        fixit, _ = _make_fixit(tmp_path, error_stream)
        file_diff = fixit.diff_fixed_file()
        assert file_diff.has_changes is False
        assert file_diff.diff_text == ""

    def test_build_file_diff_for_other_file(self, error_stream):
        manager = SourceManager()
        manager.create_main_file("main.c", "int x = 1;\n")
        header_id = manager.add_file("util.h", "int f(void);\n")
        fixit = FixItRewriter(manager, error_stream=error_stream)
        fixit.handle_diagnostic(
            Diagnostic(
                level=DiagnosticLevel.WARNING,
                message="missing extern",
                hints=[FixItHint.insertion(SourceLocation(file_id=header_id, offset=0), "extern ")],
            )
        )

        file_diff = build_file_diff(fixit.rewriter, header_id)

        assert file_diff.file_path == "util.h"
        assert file_diff.original_content == "int f(void);\n"
        assert file_diff.modified_content == "extern int f(void);\n"
        assert "+extern int f(void);" in file_diff.diff_text
