"""Keep a document's latest-commit region in sync with a GitHub user's activity."""

from .config import Settings
from .document import END_MARKER, START_MARKER, PatchResult, patch_document
from .events import CommitRecord, extract_latest_commit
from .format import format_line, format_preview
from .pipeline import RunResult, run_pipeline

__all__ = [
    "CommitRecord",
    "END_MARKER",
    "PatchResult",
    "RunResult",
    "START_MARKER",
    "Settings",
    "extract_latest_commit",
    "format_line",
    "format_preview",
    "patch_document",
    "run_pipeline",
]
