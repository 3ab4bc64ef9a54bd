"""Source text bookkeeping and rewrite buffers."""

from fixit_rewriter.rewrite.exceptions import (
    RewriteError,
    SourceFileError,
    UnknownFileError,
)
from fixit_rewriter.rewrite.rewrite_buffer import RewriteBuffer, Splice
from fixit_rewriter.rewrite.rewriter import Rewriter
from fixit_rewriter.rewrite.source_manager import (
    STDIN_FILE_NAME,
    SourceFile,
    SourceManager,
    decode_source,
    encode_source,
)

__all__ = [
    "STDIN_FILE_NAME",
    "RewriteBuffer",
    "RewriteError",
    "Rewriter",
    "SourceFile",
    "SourceFileError",
    "SourceManager",
    "Splice",
    "UnknownFileError",
    "decode_source",
    "encode_source",
]
