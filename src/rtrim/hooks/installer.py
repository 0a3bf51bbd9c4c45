"""Pre-commit hook management for --install-hook / --uninstall-hook.

A hook that rtrim did not write is never deleted. ``--force`` moves it aside
to ``pre-commit.rtrim-backup``; the rtrim hook runs the backup first, and
uninstalling puts it back.
"""

from __future__ import annotations

import enum
import os
import stat
from pathlib import Path

from rtrim.errors import FileIOError, HookError

HOOK_NAME = "pre-commit"
BACKUP_NAME = "pre-commit.rtrim-backup"
_MARKER = "# managed by rtrim"

_SCRIPT = f"""\
#!/bin/sh
{_MARKER}
# Remove with: rtrim --uninstall-hook
previous="$(dirname "$0")/{BACKUP_NAME}"
if [ -x "$previous" ]; then
    "$previous" "$@" || exit $?
fi
exec rtrim
"""


class HookState(enum.Enum):
    MISSING = "missing"
    RTRIM = "rtrim"
    FOREIGN = "foreign"


def hook_state(hook_path: Path) -> HookState:
    if not hook_path.exists():
        return HookState.MISSING
    head = hook_path.read_bytes()[:512]
    return HookState.RTRIM if _MARKER.encode() in head else HookState.FOREIGN


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def install_hook(hooks_dir: Path, *, force: bool = False) -> str:
    """Write the rtrim pre-commit hook into *hooks_dir* and return a status line.

    Raises HookError when a foreign hook is in the way and *force* is unset,
    FileIOError when the hooks directory cannot be written.
    """
    hook_path = hooks_dir / HOOK_NAME
    try:
        state = hook_state(hook_path)
        if state is HookState.RTRIM:
            return f"rtrim hook already installed at {hook_path}"
        if state is HookState.FOREIGN:
            if not force:
                raise HookError(
                    f"{hook_path} was not written by rtrim; "
                    "pass --force to move it aside and chain it"
                )
            os.replace(hook_path, hooks_dir / BACKUP_NAME)

        hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(_SCRIPT, encoding="utf-8", newline="\n")
        _make_executable(hook_path)
    except OSError as exc:
        raise FileIOError.from_os_error(exc) from exc

    if state is HookState.FOREIGN:
        return f"Installed rtrim hook at {hook_path} (previous hook kept as {BACKUP_NAME})"
    return f"Installed rtrim hook at {hook_path}"


def uninstall_hook(hooks_dir: Path) -> str:
    """Remove the rtrim hook from *hooks_dir*, restoring a backed-up hook."""
    hook_path = hooks_dir / HOOK_NAME
    backup = hooks_dir / BACKUP_NAME
    try:
        state = hook_state(hook_path)
        if state is HookState.FOREIGN:
            raise HookError(f"{hook_path} was not written by rtrim; leaving it in place")
        if state is HookState.MISSING:
            return "No rtrim hook installed"

        if backup.exists():
            os.replace(backup, hook_path)
            return f"Removed rtrim hook; restored previous hook at {hook_path}"
        hook_path.unlink()
    except OSError as exc:
        raise FileIOError.from_os_error(exc) from exc
    return f"Removed rtrim hook from {hook_path}"
