import io

import pytest

from fixit_rewriter.fixit.consumers import StoredDiagnosticConsumer
from fixit_rewriter.fixit.fixit_rewriter import FixItRewriter
from fixit_rewriter.rewrite.source_manager import SourceManager

SAMPLE_SOURCE = "int x = 1;"


@pytest.fixture
def source_manager():
    manager = SourceManager()
    manager.create_main_file("main.c", SAMPLE_SOURCE)
    return manager


@pytest.fixture
def error_stream():
    return io.StringIO()


@pytest.fixture
def stored_client():
    return StoredDiagnosticConsumer()


@pytest.fixture
def fixit(source_manager, stored_client, error_stream):
    return FixItRewriter(source_manager, client=stored_client, error_stream=error_stream)


@pytest.fixture
def diagnostics_file(tmp_path):
    """Write a diagnostics JSON document and return its path."""

    def _write(payload: str, name: str = "diags.json") -> str:
        path = tmp_path / name
        path.write_text(payload, encoding="utf-8")
        return str(path)

    return _write
