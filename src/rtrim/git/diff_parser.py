"""Patch parser for ``git diff --cached`` output.

Works on raw bytes so that non-UTF-8 content survives until the scanner
decides what to do with it. Yields a DiffLine for every line that has a
new-side line number (additions and context) and a FileSkipped for binary
files and symlinks. Hunk bodies are consumed by their header counts, so an
added line that happens to look like a ``+++``/``---`` header is still content.
"""

from __future__ import annotations

import os
import re
from typing import Generator, Optional

from rtrim.git.models import DiffLine, FileSkipped, LineType

# --- Regex patterns for diff parsing ---

_DIFF_HEADER_RE = re.compile(rb"^diff --git (.*)$")
_HUNK_HEADER_RE = re.compile(rb"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_BINARY_RE = re.compile(rb"^Binary files .* differ$")
_RENAME_TO_RE = re.compile(rb"^rename to (.+)$")
_NEW_PATH_RE = re.compile(rb"^\+\+\+ (.+)$")
_MODE_RE = re.compile(rb"^(?:new file mode|new mode|index [0-9a-f]+\.\.[0-9a-f]+) (\d+)$")

_SYMLINK_MODE = b"120000"
_DEV_NULL = b"/dev/null"

_ESCAPES = {
    b"a": 0x07,
    b"b": 0x08,
    b"t": 0x09,
    b"n": 0x0A,
    b"v": 0x0B,
    b"f": 0x0C,
    b"r": 0x0D,
    b'"': 0x22,
    b"\\": 0x5C,
}


def unquote_path(raw: bytes) -> bytes:
    """Undo git's C-style quoting of a path (``"a/tab\\there"``)."""
    if len(raw) < 2 or not (raw.startswith(b'"') and raw.endswith(b'"')):
        return raw
    body = raw[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        c = body[i]
        if c != 0x5C:
            out.append(c)
            i += 1
            continue
        nxt = body[i + 1:i + 2]
        octal = body[i + 1:i + 4]
        if nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            i += 2
        elif len(octal) == 3 and all(0x30 <= b <= 0x37 for b in octal):
            out.append(int(octal, 8))
            i += 4
        else:
            out.append(c)
            i += 1
    return bytes(out)


def _strip_prefix(path: bytes, prefix: bytes) -> bytes:
    return path[len(prefix):] if path.startswith(prefix) else path


def _header_new_path(rest: bytes) -> bytes:
    """Best-effort new-side path from ``diff --git a/X b/Y``.

    Only used until a ``rename to`` or ``+++`` line names the file precisely.
    """
    if rest.startswith(b'"') or rest.endswith(b'"'):
        idx = rest.rfind(b' "b/') if rest.endswith(b'"') else rest.rfind(b" b/")
        return _strip_prefix(unquote_path(rest[idx + 1:]), b"b/")
    # Unrenamed files repeat the same path on both sides
    half = len(rest) // 2
    if len(rest) % 2 == 1 and rest[half:half + 1] == b" " and rest[2:half] == rest[half + 3:]:
        return rest[half + 3:]
    return _strip_prefix(rest[rest.rfind(b" b/") + 1:], b"b/")


def _decode_path(path: bytes) -> str:
    return os.fsdecode(path)


class DiffParser:
    """Parse patch bytes and yield DiffLine / FileSkipped objects.

    Usage::

        parser = DiffParser(diff_bytes)
        for item in parser.parse():
            if isinstance(item, FileSkipped):
                ...
            elif isinstance(item, DiffLine):
                ...
    """

    def __init__(self, diff: bytes) -> None:
        lines = diff.split(b"\n")
        if lines and lines[-1] == b"":
            lines.pop()
        self._lines = lines

    def parse(self) -> Generator[DiffLine | FileSkipped, None, None]:
        """Yield DiffLine and FileSkipped items in diff order."""
        current_file: Optional[str] = None
        line_no = 0
        old_left = 0
        new_left = 0
        is_symlink = False
        skipped = False

        for raw_line in self._lines:
            # --- Hunk body ---
            if old_left > 0 or new_left > 0:
                marker = raw_line[:1]
                if marker == b"+":
                    new_left -= 1
                    if current_file is not None and not skipped:
                        yield DiffLine(current_file, line_no, raw_line[1:], LineType.ADDED)
                    line_no += 1
                    continue
                if marker == b"-":
                    old_left -= 1
                    continue
                if marker in (b" ", b""):
                    old_left -= 1
                    new_left -= 1
                    if current_file is not None and not skipped:
                        yield DiffLine(current_file, line_no, raw_line[1:], LineType.CONTEXT)
                    line_no += 1
                    continue
                if marker != b"\\":
                    # Truncated hunk; resynchronise on headers
                    old_left = new_left = 0

            # --- "\ No newline at end of file" → skip ---
            if raw_line.startswith(b"\\"):
                continue

            # --- diff --git header → new file context ---
            m = _DIFF_HEADER_RE.match(raw_line)
            if m:
                current_file = _decode_path(_header_new_path(m.group(1)))
                is_symlink = False
                skipped = False
                continue

            mm = _MODE_RE.match(raw_line)
            if mm:
                is_symlink = mm.group(1) == _SYMLINK_MODE
                continue

            rt = _RENAME_TO_RE.match(raw_line)
            if rt:
                current_file = _decode_path(unquote_path(rt.group(1)))
                continue

            if _BINARY_RE.match(raw_line):
                if current_file is not None:
                    yield FileSkipped(path=current_file, reason="binary")
                skipped = True
                continue

            np = _NEW_PATH_RE.match(raw_line)
            if np:
                target = np.group(1)
                # git appends a tab after names containing spaces
                if target.endswith(b"\t"):
                    target = target[:-1]
                if target == _DEV_NULL:
                    current_file = None
                else:
                    current_file = _decode_path(_strip_prefix(unquote_path(target), b"b/"))
                continue

            hm = _HUNK_HEADER_RE.match(raw_line)
            if hm:
                old_left = int(hm.group(2)) if hm.group(2) is not None else 1
                new_left = int(hm.group(4)) if hm.group(4) is not None else 1
                line_no = int(hm.group(3))
                if is_symlink and not skipped and current_file is not None:
                    yield FileSkipped(path=current_file, reason="symlink")
                    skipped = True
                continue

            # index, similarity, mode-change, "---" lines and anything else
