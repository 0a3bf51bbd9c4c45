"""Data models for diff parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LineType(str, Enum):
    ADDED = "added"
    CONTEXT = "context"


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A diff line that exists in the new (staged) version of a file.

    *content* is the raw bytes after the +/space marker, without the LF that
    separated it from the next diff line.
    """

    file: str
    line_no: int
    content: bytes
    line_type: LineType


@dataclass(frozen=True)
class FileSkipped:
    """Record of a file whose content is never classified."""

    path: str
    reason: str  # 'binary', 'symlink'
