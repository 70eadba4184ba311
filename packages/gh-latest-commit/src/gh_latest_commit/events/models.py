"""Typed view of the GitHub public events feed.

Events arrive as loosely shaped JSON. ``parse_event`` narrows each item by its
``type`` discriminator: push events get a typed payload, everything else keeps
its payload opaque.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

logger = logging.getLogger(__name__)

PUSH_EVENT = "PushEvent"


@dataclass(frozen=True)
class PushCommit:
    sha: str
    message: str


@dataclass(frozen=True)
class PushPayload:
    commits: tuple[PushCommit, ...] = ()
    ref: str | None = None


@dataclass(frozen=True)
class PushEvent:
    repo_name: str
    payload: PushPayload
    kind: str = PUSH_EVENT


@dataclass(frozen=True)
class OtherEvent:
    kind: str
    repo_name: str
    payload: dict[str, Any] = field(default_factory=dict)


ActivityEvent = Union[PushEvent, OtherEvent]


@dataclass(frozen=True)
class CommitRecord:
    message: str
    repo_name: str
    sha: str

    def url(self, host: str = "github.com") -> str:
        return f"https://{host}/{self.repo_name}/commit/{self.sha}"


def _parse_push_payload(payload: Any) -> PushPayload:
    if not isinstance(payload, dict):
        return PushPayload()
    raw_commits = payload.get("commits")
    if not isinstance(raw_commits, list):
        return PushPayload(ref=payload.get("ref"))
    commits: list[PushCommit] = []
    for item in raw_commits:
        sha = item.get("sha") if isinstance(item, dict) else None
        if not isinstance(sha, str) or not sha:
            # A commit without a sha cannot be linked; drop the whole list.
            logger.debug("Ignoring push payload with malformed commit entry: %r", item)
            return PushPayload(ref=payload.get("ref"))
        commits.append(PushCommit(sha=sha, message=str(item.get("message") or "")))
    return PushPayload(commits=tuple(commits), ref=payload.get("ref"))


def parse_event(raw: dict[str, Any]) -> ActivityEvent:
    kind = str(raw.get("type") or "")
    repo = raw.get("repo")
    repo_name = str(repo.get("name") or "") if isinstance(repo, dict) else ""
    if kind == PUSH_EVENT:
        return PushEvent(
            repo_name=repo_name,
            payload=_parse_push_payload(raw.get("payload")),
        )
    payload = raw.get("payload")
    return OtherEvent(
        kind=kind,
        repo_name=repo_name,
        payload=payload if isinstance(payload, dict) else {},
    )


def parse_events(items: Iterable[Any]) -> list[ActivityEvent]:
    return [parse_event(item) for item in items if isinstance(item, dict)]
