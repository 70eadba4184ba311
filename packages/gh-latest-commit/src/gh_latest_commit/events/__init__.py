from .extract import (
    EventSource,
    ExtractionOutcome,
    NotFound,
    SourceUnavailable,
    Success,
    extract_latest_commit,
    select_push_commit,
)
from .models import ActivityEvent, CommitRecord, OtherEvent, PushEvent, parse_event, parse_events

__all__ = [
    "ActivityEvent",
    "CommitRecord",
    "EventSource",
    "ExtractionOutcome",
    "NotFound",
    "OtherEvent",
    "PushEvent",
    "SourceUnavailable",
    "Success",
    "extract_latest_commit",
    "parse_event",
    "parse_events",
    "select_push_commit",
]
