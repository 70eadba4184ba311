from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal, Protocol, Union

from ..providers.github.client import GitHubAPIError
from .models import ActivityEvent, CommitRecord, PushEvent, parse_events

logger = logging.getLogger(__name__)

EVENTS_PAGE_SIZE = 100


class EventSource(Protocol):
    async def list_public_events(self, username: str, per_page: int = 100) -> list[dict]:
        ...


@dataclass(frozen=True)
class Success:
    record: CommitRecord


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class SourceUnavailable:
    reason: Literal["user_not_found", "error"]
    detail: str | None = None


ExtractionOutcome = Union[Success, NotFound, SourceUnavailable]


def select_push_commit(events: Iterable[ActivityEvent]) -> CommitRecord | None:
    """Return the first commit of the first push event that carries commits.

    Events are scanned in the order given, which the feed guarantees is newest
    first. Within that push, the first listed commit is the oldest one pushed.
    """
    for event in events:
        if not isinstance(event, PushEvent):
            continue
        if not event.payload.commits or not event.repo_name:
            continue
        commit = event.payload.commits[0]
        return CommitRecord(message=commit.message, repo_name=event.repo_name, sha=commit.sha)
    return None


async def extract_latest_commit(
    username: str,
    source: EventSource,
    *,
    per_page: int = EVENTS_PAGE_SIZE,
) -> ExtractionOutcome:
    if not username:
        raise ValueError("username must be non-empty")

    logger.info("Fetching public events for %s", username)
    try:
        items = await source.list_public_events(username, per_page=per_page)
    except GitHubAPIError as exc:
        if exc.not_found:
            return SourceUnavailable(reason="user_not_found")
        return SourceUnavailable(reason="error", detail=str(exc))
    except Exception as exc:
        return SourceUnavailable(reason="error", detail=f"{type(exc).__name__}: {exc}")

    events = parse_events(items)
    logger.debug("Received %d events for %s", len(events), username)
    record = select_push_commit(events)
    if record is None:
        return NotFound()
    return Success(record=record)
