"""Failures that end a run.

Each stage raises (or the pipeline converts its result into) one of these so
the CLI can report every terminal failure the same way.
"""

from __future__ import annotations

from pathlib import Path


class LatestCommitError(RuntimeError):
    pass


class ConfigurationError(LatestCommitError):
    pass


class SourceUnavailableError(LatestCommitError):
    def __init__(self, username: str, reason: str, detail: str | None = None) -> None:
        self.username = username
        self.reason = reason
        self.detail = detail
        if reason == "user_not_found":
            message = f"GitHub user {username!r} not found"
        else:
            message = f"Could not fetch events for {username!r}: {detail}"
        super().__init__(message)


class NoPushEventError(LatestCommitError):
    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"No recent push event with commits for {username!r}")


class DocumentNotFound(LatestCommitError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Document not found: {self.path}")


class DocumentUnreadable(LatestCommitError):
    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"Cannot access document {self.path}: {detail}")


class MalformedDocument(LatestCommitError):
    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        self.missing = missing
        super().__init__(message)


class PreviewUnavailable(LatestCommitError):
    pass


class PublishError(LatestCommitError):
    def __init__(self, command: list[str], returncode: int, output: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        detail = f": {output.strip()}" if output.strip() else ""
        super().__init__(f"`{' '.join(command)}` failed with exit code {returncode}{detail}")
