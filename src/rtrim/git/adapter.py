"""Git subprocess wrapper — discovery, HEAD tree, staged diff, index updates."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from rtrim.errors import FileIOError, RepositoryError

_DEFAULT_TIMEOUT = 30


def _error_message(stderr: bytes) -> str:
    """Reduce git's stderr to a single diagnostic line."""
    lines = [ln.strip() for ln in stderr.decode("utf-8", "replace").splitlines() if ln.strip()]
    if not lines:
        return "git exited with an error"
    line = next((ln for ln in lines if ln.startswith("fatal:")), lines[0])
    for prefix in ("fatal: ", "error: "):
        if line.startswith(prefix):
            return line[len(prefix):]
    return line


def _run_git(
    args: Sequence[str],
    cwd: Path,
    *,
    input: Optional[bytes] = None,
    timeout: int = _DEFAULT_TIMEOUT,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run a git command and return the completed process (bytes output).

    Raises RepositoryError when git is missing, times out, or fails while
    *check* is set.
    """
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            input=input,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise RepositoryError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise RepositoryError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if check and result.returncode != 0:
        raise RepositoryError(_error_message(result.stderr))
    return result


def _first_line(out: bytes) -> str:
    return os.fsdecode(out.split(b"\n", 1)[0].rstrip(b"\r"))


class Index:
    """Staging index handle. Additions are buffered until :meth:`write`."""

    def __init__(self, repo: "Repository") -> None:
        self._repo = repo
        self._pending: List[str] = []

    @property
    def pending(self) -> List[str]:
        return list(self._pending)

    def add_path(self, path: str) -> None:
        self._pending.append(path)

    def write(self) -> None:
        """Persist every pending addition with a single index update."""
        if not self._pending:
            return
        payload = b"\0".join(os.fsencode(p) for p in self._pending)
        _run_git(
            [
                "--literal-pathspecs",
                "add",
                "--pathspec-from-file=-",
                "--pathspec-file-nul",
            ],
            cwd=self._repo.workdir,
            input=payload,
        )
        self._pending.clear()


class Repository:
    """A discovered git repository.

    Use :meth:`discover` rather than the constructor; it walks upward from the
    start directory the same way git itself does.
    """

    def __init__(
        self, git_dir: Path, workdir: Path, start_path: Path, bare: bool = False, prefix: str = "",
    ) -> None:
        self.git_dir = git_dir
        self.workdir = workdir
        self.start_path = start_path
        self.bare = bare
        # start_path relative to workdir, "" or ending in "/"
        self.prefix = prefix

    def __repr__(self) -> str:
        return f"Repository(workdir={str(self.workdir)!r})"

    @classmethod
    def discover(cls, start_path: Union[str, Path, None] = None) -> "Repository":
        if start_path is None:
            try:
                start = Path.cwd()
            except OSError as exc:
                raise FileIOError.from_os_error(exc) from exc
        else:
            start = Path(start_path)
            if not start.exists():
                raise RepositoryError(f"path not found: {start_path}")
        if start.is_file():
            start = start.parent

        out = _run_git(["rev-parse", "--absolute-git-dir", "--is-bare-repository"], cwd=start).stdout
        lines = out.decode("utf-8", "replace").splitlines()
        git_dir = Path(_first_line(out))
        bare = len(lines) > 1 and lines[1].strip() == "true"

        prefix = ""
        if bare:
            # No working tree: fall back to where discovery started
            workdir = start.resolve()
        else:
            top = _run_git(["rev-parse", "--show-toplevel", "--show-prefix"], cwd=start).stdout
            top_lines = [os.fsdecode(ln.rstrip(b"\r")) for ln in top.split(b"\n")]
            workdir = Path(top_lines[0])
            if len(top_lines) > 1:
                prefix = top_lines[1]
        return cls(git_dir=git_dir, workdir=workdir, start_path=start, bare=bare, prefix=prefix)

    def head_tree(self) -> Optional[str]:
        """Return the tree id HEAD points at, or None on an unborn branch."""
        result = _run_git(
            ["rev-parse", "--verify", "--quiet", "HEAD^{tree}"],
            cwd=self.workdir,
            check=False,
        )
        if result.returncode != 0:
            return None
        return _first_line(result.stdout) or None

    def empty_tree(self) -> str:
        """Return the id of the empty tree in this repository's object format."""
        out = _run_git(["hash-object", "-t", "tree", "--stdin"], cwd=self.workdir, input=b"").stdout
        return _first_line(out)

    def index(self) -> Index:
        return Index(self)

    def hooks_dir(self) -> Path:
        """Return the hooks directory (respects core.hooksPath)."""
        out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=self.workdir).stdout
        path = Path(_first_line(out))
        return path if path.is_absolute() else self.workdir / path

    def pathspecs_from_start(self, pathspecs: Sequence[str]) -> List[str]:
        """Rebase pathspecs typed in the start directory onto the working-tree root.

        Magic pathspecs (leading ":") are passed through unchanged.
        """
        if not self.prefix:
            return list(pathspecs)
        return [spec if spec.startswith(":") else self.prefix + spec for spec in pathspecs]

    def staged_diff(self, path_filters: Sequence[str] = (), context_lines: int = 3) -> bytes:
        """Return the raw patch of HEAD (or the empty tree) against the index."""
        base = self.head_tree() or self.empty_tree()
        args = [
            "-c", "core.quotePath=false",
            "diff", "--cached",
            "--no-color", "--no-ext-diff", "--no-textconv",
            "--find-renames", "--submodule=short",
            "--src-prefix=a/", "--dst-prefix=b/",
            f"--unified={context_lines}",
            base,
            "--",
            *path_filters,
        ]
        return _run_git(args, cwd=self.workdir).stdout
