"""Loading recorded diagnostics from JSON."""

from pathlib import Path

from pydantic import ValidationError

from fixit_rewriter.fixit.exceptions import DiagnosticLoadError
from fixit_rewriter.models.diagnostic_models import DiagnosticBatch
from fixit_rewriter.rewrite.exceptions import RewriteError
from fixit_rewriter.rewrite.source_manager import SourceManager


def parse_diagnostics(payload: str) -> DiagnosticBatch:
    """Validate a JSON document into a DiagnosticBatch.

    A bare JSON list is accepted as the diagnostics of a batch without
    extra files.

    Raises:
        DiagnosticLoadError: If the document does not validate.
    """
    stripped = payload.lstrip()
    if stripped.startswith("["):
        payload = '{"diagnostics": ' + payload + "}"
    try:
        return DiagnosticBatch.model_validate_json(payload)
    except ValidationError as exc:
        raise DiagnosticLoadError(f"Invalid diagnostics document: {exc}") from exc


def load_diagnostics(path: str) -> DiagnosticBatch:
    """Read and validate a diagnostics JSON file.

    Raises:
        DiagnosticLoadError: If the file cannot be read or does not validate.
    """
    try:
        payload = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DiagnosticLoadError(f"Cannot read diagnostics file '{path}': {exc}") from exc
    return parse_diagnostics(payload)


def register_batch_files(source_manager: SourceManager, batch: DiagnosticBatch) -> None:
    """Register the batch's extra files and expansion regions.

    The main file must already be registered as file 1.

    Raises:
        DiagnosticLoadError: If an extra file or region is unusable.
    """
    try:
        for path in batch.files:
            source_manager.add_file_from_path(path)
        for region in batch.expansions:
            source_manager.add_expansion_region(region.file_id, region.begin, region.end)
    except (RewriteError, ValueError) as exc:
        raise DiagnosticLoadError(str(exc)) from exc
