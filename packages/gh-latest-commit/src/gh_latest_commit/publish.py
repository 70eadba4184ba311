from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Protocol

from .errors import PublishError
from .events.models import CommitRecord

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


class Publisher(Protocol):
    def publish(self, document: str | Path, record: CommitRecord) -> None:
        ...


def commit_message(record: CommitRecord) -> str:
    return f"Update latest commit to {record.repo_name}@{record.sha}"


class GitPublisher:
    """Stage, commit and push the patched document with the git binary."""

    def __init__(
        self,
        *,
        push: bool = True,
        git_name: str | None = None,
        git_email: str | None = None,
        cwd: str | Path | None = None,
        runner: Runner = subprocess.run,
    ) -> None:
        self.push = push
        self.git_name = git_name
        self.git_email = git_email
        self.cwd = cwd
        self._runner = runner

    def _git(self, *args: str) -> None:
        command = ["git"]
        if self.git_name:
            command += ["-c", f"user.name={self.git_name}"]
        if self.git_email:
            command += ["-c", f"user.email={self.git_email}"]
        command += list(args)
        logger.debug("Running %s", " ".join(command))
        try:
            result = self._runner(
                command,
                cwd=self.cwd,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise PublishError(command, 127, "git executable not found") from exc
        if result.returncode != 0:
            output = (result.stderr or "") or (result.stdout or "")
            raise PublishError(command, result.returncode, output)

    def publish(self, document: str | Path, record: CommitRecord) -> None:
        self._git("add", str(document))
        self._git("commit", "-m", commit_message(record))
        if self.push:
            self._git("push")
            logger.info("Pushed %s", document)
        else:
            logger.info("Committed %s without pushing", document)
