from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import Literal

from .config import Settings
from .document import update_document
from .errors import NoPushEventError, PreviewUnavailable, SourceUnavailableError
from .events.extract import EventSource, NotFound, SourceUnavailable, extract_latest_commit
from .events.models import CommitRecord
from .format import format_line, format_preview
from .providers.github.client import GitHubRestClient
from .providers.preview import PreviewClient, PreviewFetcher
from .publish import GitPublisher, Publisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    status: Literal["updated", "unchanged", "dry_run"]
    record: CommitRecord
    fragment: str
    published: bool = False


async def fetch_latest_commit(settings: Settings, source: EventSource) -> CommitRecord:
    username = settings.require_username()
    outcome = await extract_latest_commit(username, source, per_page=settings.per_page)
    if isinstance(outcome, SourceUnavailable):
        raise SourceUnavailableError(username, outcome.reason, outcome.detail)
    if isinstance(outcome, NotFound):
        raise NoPushEventError(username)
    logger.info(
        "Latest commit: %s@%s", outcome.record.repo_name, outcome.record.sha
    )
    return outcome.record


async def render_fragment(
    record: CommitRecord,
    settings: Settings,
    preview: PreviewFetcher | None,
) -> str:
    if not settings.preview or preview is None:
        return format_line(record)
    try:
        image = await preview.fetch_image(record.url(settings.host))
    except PreviewUnavailable as exc:
        if not settings.preview_fallback:
            raise
        logger.warning("%s; falling back to a plain line", exc)
        return format_line(record)
    return format_preview(record, image, settings.host)


async def run_pipeline(
    settings: Settings,
    *,
    source: EventSource | None = None,
    preview: PreviewFetcher | None = None,
    publisher: Publisher | None = None,
    dry_run: bool = False,
) -> RunResult:
    settings.require_username()

    async with AsyncExitStack() as stack:
        if source is None:
            source = await stack.enter_async_context(
                GitHubRestClient(base_url=settings.api_url, timeout=settings.timeout)
            )
        if preview is None and settings.preview:
            preview = await stack.enter_async_context(
                PreviewClient(service_url=settings.preview_url, timeout=settings.timeout)
            )
        record = await fetch_latest_commit(settings, source)
        fragment = await render_fragment(record, settings, preview)

    result = update_document(settings.document, fragment, dry_run=dry_run)
    if not result.changed:
        return RunResult(status="unchanged", record=record, fragment=fragment)
    if dry_run:
        return RunResult(status="dry_run", record=record, fragment=fragment)

    if publisher is None:
        publisher = GitPublisher(
            push=settings.push,
            git_name=settings.git_name,
            git_email=settings.git_email,
        )
    publisher.publish(settings.document, record)
    return RunResult(status="updated", record=record, fragment=fragment, published=True)
