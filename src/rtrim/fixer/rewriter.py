"""Line-precise rewriter — trims flagged lines and atomically replaces each file.

Each file is streamed once into an exclusively created sibling temp file which
is renamed over the original only after it has been completely written. The
temp file is removed if anything fails before the rename, so the original is
either untouched or fully replaced.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections import deque
from pathlib import Path
from typing import Dict, Iterable, Mapping, Union

from rtrim.errors import FileIOError

_WHITESPACE = b" \t"
_NEWLINE = os.linesep.encode("ascii")


def _strip_terminator(line: bytes) -> bytes:
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


def rewrite_file(path: Path, line_numbers: Iterable[int]) -> int:
    """Trim trailing spaces/tabs on *line_numbers* (ascending, 1-based) of *path*.

    Every written line ends with the platform newline. Returns the number of
    lines that were trimmed; numbers past the end of the file are ignored.
    Raises OSError.
    """
    queue = deque(line_numbers)
    trimmed = 0

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".rtrim", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as dst, open(path, "rb") as src:
            for line_no, line in enumerate(src, start=1):
                content = _strip_terminator(line)
                if queue and queue[0] == line_no:
                    content = content.rstrip(_WHITESPACE)
                    queue.popleft()
                    trimmed += 1
                dst.write(content)
                dst.write(_NEWLINE)
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return trimmed


def rewrite(workdir: Union[str, Path], lines_map: Mapping[str, Iterable[int]]) -> Dict[str, int]:
    """Rewrite every file in *lines_map* relative to *workdir*.

    Files are processed one after another; the first failure aborts the run
    with FileIOError and leaves already rewritten files in place.
    """
    root = Path(workdir)
    trimmed: Dict[str, int] = {}
    for file_name, line_numbers in lines_map.items():
        try:
            trimmed[file_name] = rewrite_file(root / file_name, line_numbers)
        except OSError as exc:
            raise FileIOError.from_os_error(exc) from exc
    return trimmed
