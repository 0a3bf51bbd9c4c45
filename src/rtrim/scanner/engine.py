"""Staged-whitespace scanner — maps staged files to lines ending in spaces or tabs."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Sequence

from rtrim.git.adapter import Repository
from rtrim.git.diff_parser import DiffParser
from rtrim.git.models import DiffLine

TrailingLineMap = Dict[str, Deque[int]]

_TRAILING = (" ", "\t")


def has_trailing_whitespace(content: bytes) -> bool:
    """Return True if *content* is UTF-8 text ending in a space or tab.

    A single trailing CR (CRLF working-tree content) counts as the line
    terminator and is ignored. Content that is not valid UTF-8 is never
    flagged.
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return False
    text = text.rstrip("\n")
    if text.endswith("\r"):
        text = text[:-1]
    return text.endswith(_TRAILING)


def find_trailing(diff: bytes) -> TrailingLineMap:
    """Collect new-side line numbers with trailing whitespace from patch bytes."""
    result: TrailingLineMap = {}
    for item in DiffParser(diff).parse():
        if not isinstance(item, DiffLine):
            continue
        if has_trailing_whitespace(item.content):
            result.setdefault(item.file, deque()).append(item.line_no)
    return result


def scan(
    repo: Repository,
    path_filters: Sequence[str] = (),
    *,
    context_lines: int = 3,
) -> TrailingLineMap:
    """Diff HEAD against the index and return the flagged lines per file."""
    diff = repo.staged_diff(path_filters, context_lines=context_lines)
    if not diff.strip():
        return {}
    return find_trailing(diff)
