from __future__ import annotations

from .events.models import CommitRecord

MAX_MESSAGE_LENGTH = 50
TRUNCATED_LENGTH = 45
ELLIPSIS = "..."
LINK_LABEL = "latest-commit"


def truncate_message(message: str) -> str:
    if len(message) > MAX_MESSAGE_LENGTH:
        return message[:TRUNCATED_LENGTH] + ELLIPSIS
    return message


def commit_url(record: CommitRecord, host: str = "github.com") -> str:
    return record.url(host)


def format_line(record: CommitRecord) -> str:
    return f"{truncate_message(record.message)} {record.repo_name}@{record.sha}"


def format_preview(record: CommitRecord, image_url: str, host: str = "github.com") -> str:
    """Render an image linked to the commit, plus its reference definition."""
    alt = f"{record.repo_name}@{record.sha[:7]}"
    return "\n".join(
        [
            f"[![{alt}]({image_url})][{LINK_LABEL}]",
            "",
            f"[{LINK_LABEL}]: {commit_url(record, host)}",
        ]
    )
