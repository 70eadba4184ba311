"""Marker-bounded updates of a text document.

The region strictly between the START and END sentinel lines belongs to this
tool and is replaced wholesale; every other line, line ending included, is
kept byte for byte.

A fragment is written as lines terminated by the START line's own ending, so
``"new"`` and ``"new\\n"`` differ: the latter leaves an empty last line in the
region. ``region_content`` reverses this, reporting the region with ``\\n``
line breaks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .errors import DocumentNotFound, DocumentUnreadable, MalformedDocument

logger = logging.getLogger(__name__)

START_MARKER = "<!-- LATESTCOMMIT:START -->"
END_MARKER = "<!-- LATESTCOMMIT:END -->"

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class PatchResult:
    text: str
    changed: bool


def _line_ending(line: str) -> str:
    return line[len(line.rstrip("\r\n")):]


def _find_marker(lines: list[str], marker: str) -> int | None:
    for index, line in enumerate(lines):
        if line.strip() == marker:
            return index
    return None


def _locate_region(
    lines: list[str], start: str, end: str
) -> tuple[int, int]:
    start_index = _find_marker(lines, start)
    end_index = _find_marker(lines, end)
    missing = tuple(
        marker
        for marker, index in ((start, start_index), (end, end_index))
        if index is None
    )
    if missing:
        raise MalformedDocument(
            "Document is missing sentinel " + " and ".join(missing), missing=missing
        )
    if end_index < start_index:
        raise MalformedDocument(f"Sentinel {end} appears before {start}")
    return start_index, end_index


def patch_document(
    text: str,
    fragment: str,
    *,
    start: str = START_MARKER,
    end: str = END_MARKER,
) -> PatchResult:
    lines = text.splitlines(keepends=True)
    start_index, end_index = _locate_region(lines, start, end)
    inserted = ""
    if fragment:
        sep = _line_ending(lines[start_index]) or "\n"
        inserted = sep.join(_LINE_BREAK.split(fragment)) + sep
    new_text = (
        "".join(lines[: start_index + 1]) + inserted + "".join(lines[end_index:])
    )
    return PatchResult(text=new_text, changed=new_text != text)


def region_content(
    text: str,
    *,
    start: str = START_MARKER,
    end: str = END_MARKER,
) -> str:
    lines = text.splitlines(keepends=True)
    start_index, end_index = _locate_region(lines, start, end)
    region = "".join(lines[start_index + 1 : end_index])
    if region.endswith("\r\n"):
        region = region[:-2]
    elif region.endswith("\n"):
        region = region[:-1]
    return _LINE_BREAK.sub("\n", region)


def read_document(path: str | Path) -> str:
    path = Path(path)
    try:
        # newline="" keeps every line ending intact for byte-identical comparisons.
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise DocumentNotFound(path) from exc
    except UnicodeDecodeError as exc:
        raise DocumentUnreadable(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise DocumentUnreadable(path, exc.strerror or str(exc)) from exc


def write_document(path: str | Path, text: str) -> None:
    try:
        with Path(path).open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise DocumentUnreadable(path, exc.strerror or str(exc)) from exc


def update_document(path: str | Path, fragment: str, *, dry_run: bool = False) -> PatchResult:
    text = read_document(path)
    result = patch_document(text, fragment)
    if not result.changed:
        logger.info("%s already up to date", path)
        return result
    if dry_run:
        logger.info("Dry run: not writing %s", path)
        return result
    write_document(path, result.text)
    logger.info("Updated %s", path)
    return result
