"""Writing the rewritten main file to its destination."""

import sys
from pathlib import Path
from typing import BinaryIO, TextIO

from fixit_rewriter.fixit.exceptions import OutputWriteError
from fixit_rewriter.models.diff_models import FileDiff
from fixit_rewriter.models.report_models import WriteResult, WriteStatus
from fixit_rewriter.rewrite.rewriter import Rewriter
from fixit_rewriter.rewrite.source_manager import STDIN_FILE_NAME, encode_source
from fixit_rewriter.utils.diff_generator import generate_unified_diff

DEFAULT_FIXIT_MARKER = "fixit"

SUPPRESSED_MESSAGE = "{count} fix-it failures detected; code will not be modified"
UNCHANGED_MESSAGE = "Main file is unchanged"


def fixit_output_path(in_file_name: str, marker: str = DEFAULT_FIXIT_MARKER) -> str:
    """Derive the sibling path fixed code is written to.

    The marker goes before the last extension: "foo.c" becomes
    "foo.fixit.c". A name without an extension gets the marker appended.
    """
    path = Path(in_file_name)
    if path.suffix:
        return str(path.with_suffix(f".{marker}{path.suffix}"))
    return str(path.with_name(f"{path.name}.{marker}"))


def resolve_destination(
    in_file_name: str,
    out_file_name: str = "",
    marker: str = DEFAULT_FIXIT_MARKER,
) -> str:
    """Pick where the fixed file goes. "-" means standard output."""
    if out_file_name:
        return out_file_name
    if in_file_name == STDIN_FILE_NAME:
        return STDIN_FILE_NAME
    return fixit_output_path(in_file_name, marker)


def _write_bytes(destination: str, data: bytes, stdout: BinaryIO | None) -> None:
    try:
        if destination == STDIN_FILE_NAME:
            out = stdout if stdout is not None else sys.stdout.buffer
            out.write(data)
            out.flush()
            return
        with open(destination, "wb") as out_file:
            out_file.write(data)
            out_file.flush()
    except OSError as exc:
        raise OutputWriteError(f"Cannot write fixed file '{destination}': {exc}") from exc


def write_fixed_file(
    rewriter: Rewriter,
    num_failures: int,
    in_file_name: str,
    out_file_name: str = "",
    marker: str = DEFAULT_FIXIT_MARKER,
    error_stream: TextIO | None = None,
    stdout: BinaryIO | None = None,
) -> WriteResult:
    """Write the main file's rewritten text, unless any fix-it failed.

    Args:
        rewriter: Rewriter holding the buffers to materialize.
        num_failures: Failures recorded while applying fix-its. Any nonzero
            value suppresses output entirely.
        in_file_name: Name of the input file, or "-" for standard input.
        out_file_name: Explicit destination. Empty derives one from the input.
        marker: Marker inserted into derived destination names.
        error_stream: Where operator messages go (defaults to stderr).
        stdout: Binary stream used when the destination is "-".

    Returns:
        WriteResult describing what happened.

    Raises:
        OutputWriteError: If the destination cannot be written.
    """
    err = error_stream if error_stream is not None else sys.stderr

    if num_failures > 0:
        print(SUPPRESSED_MESSAGE.format(count=num_failures), file=err)
        return WriteResult(status=WriteStatus.SUPPRESSED, num_failures=num_failures)

    destination = resolve_destination(in_file_name, out_file_name, marker)

    main_file_id = rewriter.source_manager.main_file_id
    buffer = rewriter.get_rewrite_buffer_for(main_file_id) if main_file_id is not None else None
    if buffer is None or not buffer.has_edits():
        print(UNCHANGED_MESSAGE, file=err)
        return WriteResult(status=WriteStatus.UNCHANGED, destination=destination)

    data = encode_source(buffer.render())
    _write_bytes(destination, data, stdout)
    return WriteResult(
        status=WriteStatus.WRITTEN,
        destination=destination,
        bytes_written=len(data),
    )


def build_file_diff(rewriter: Rewriter, file_id: int) -> FileDiff:
    """Describe a file's rewrite as a unified diff."""
    source_manager = rewriter.source_manager
    file_name = source_manager.get_file_name(file_id)
    original = source_manager.get_buffer_data(file_id)
    modified = rewriter.get_rewritten_text(file_id)
    return FileDiff(
        file_path=file_name,
        original_content=original,
        modified_content=modified,
        diff_text=generate_unified_diff(file_name, original, modified),
    )


def diff_fixed_file(
    rewriter: Rewriter,
    num_failures: int,
    error_stream: TextIO | None = None,
) -> FileDiff | None:
    """Preview the main file's rewrite instead of writing it.

    The same gate as write_fixed_file applies: with any failure recorded,
    nothing is produced and None is returned.
    """
    err = error_stream if error_stream is not None else sys.stderr
    if num_failures > 0:
        print(SUPPRESSED_MESSAGE.format(count=num_failures), file=err)
        return None
    main_file_id = rewriter.source_manager.main_file_id
    if main_file_id is None:
        print(UNCHANGED_MESSAGE, file=err)
        return None
    return build_file_diff(rewriter, main_file_id)
