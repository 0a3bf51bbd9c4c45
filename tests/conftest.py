"""Shared test fixtures — sample patches, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep RTRIM_* overrides and hook-time git variables out of the tests."""
    for var in ("RTRIM_PATHS", "RTRIM_CONTEXT_LINES", "RTRIM_NO_RESTAGE",
                "GIT_DIR", "GIT_INDEX_FILE", "GIT_WORK_TREE"):
        monkeypatch.delenv(var, raising=False)


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)
    return result.stdout.decode("utf-8")


def _init_repo(path: Path) -> Path:
    subprocess.run(["git", "init", str(path)], capture_output=True, check=True)
    _git(path, "config", "user.email", "test@test.com")
    _git(path, "config", "user.name", "Test")
    _git(path, "config", "core.autocrlf", "false")
    _git(path, "config", "commit.gpgsign", "false")
    return path


@pytest.fixture
def git() -> Callable[..., str]:
    """Run a git command in a repo and return its stdout."""
    return _git


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit."""
    repo = _init_repo(tmp_path / "repo")
    (repo / "README.md").write_text("# Test\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "init")
    return repo


@pytest.fixture
def tmp_unborn_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with no commits yet."""
    return _init_repo(tmp_path / "fresh")


@pytest.fixture
def sample_diff_new_file() -> bytes:
    """A new file whose first line ends in a space."""
    return (
        b"diff --git a/a.txt b/a.txt\n"
        b"new file mode 100644\n"
        b"index 0000000..1b2c3d4\n"
        b"--- /dev/null\n"
        b"+++ b/a.txt\n"
        b"@@ -0,0 +1,2 @@\n"
        b"+foo \n"
        b"+bar\n"
    )


@pytest.fixture
def sample_diff_modified() -> bytes:
    """A modification with context lines on both sides of the change."""
    return (
        b"diff --git a/src/app.py b/src/app.py\n"
        b"index 1234567..abcdef0 100644\n"
        b"--- a/src/app.py\n"
        b"+++ b/src/app.py\n"
        b"@@ -3,5 +3,5 @@ def main():\n"
        b" context three\t\n"
        b" context four\n"
        b"-old five \n"
        b"+new five \n"
        b" context six\n"
        b" context seven \n"
    )


@pytest.fixture
def sample_diff_binary() -> bytes:
    """A diff with a binary file."""
    return (
        b"diff --git a/image.png b/image.png\n"
        b"new file mode 100644\n"
        b"index 0000000..abc1234\n"
        b"Binary files /dev/null and b/image.png differ\n"
    )


@pytest.fixture
def sample_diff_rename() -> bytes:
    """A renamed file with one added line."""
    return (
        b"diff --git a/old_name.py b/new_name.py\n"
        b"similarity index 90%\n"
        b"rename from old_name.py\n"
        b"rename to new_name.py\n"
        b"index abc1234..def5678 100644\n"
        b"--- a/old_name.py\n"
        b"+++ b/new_name.py\n"
        b"@@ -1,0 +2,1 @@\n"
        b"+# added after rename \n"
    )


@pytest.fixture
def sample_diff_deleted() -> bytes:
    """A file removed entirely in the staged change."""
    return (
        b"diff --git a/gone.txt b/gone.txt\n"
        b"deleted file mode 100644\n"
        b"index abc1234..0000000\n"
        b"--- a/gone.txt\n"
        b"+++ /dev/null\n"
        b"@@ -1,2 +0,0 @@\n"
        b"-first \n"
        b"-second\t\n"
    )


@pytest.fixture
def sample_diff_no_newline() -> bytes:
    """A diff with 'No newline at end of file' marker."""
    return (
        b"diff --git a/data.txt b/data.txt\n"
        b"new file mode 100644\n"
        b"index 0000000..abc1234\n"
        b"--- /dev/null\n"
        b"+++ b/data.txt\n"
        b"@@ -0,0 +1 @@\n"
        b"+final line without newline \n"
        b"\\ No newline at end of file\n"
    )


@pytest.fixture
def sample_diff_symlink() -> bytes:
    """A new symlink whose target ends in a space."""
    return (
        b"diff --git a/link b/link\n"
        b"new file mode 120000\n"
        b"index 0000000..abc1234\n"
        b"--- /dev/null\n"
        b"+++ b/link\n"
        b"@@ -0,0 +1 @@\n"
        b"+target \n"
        b"\\ No newline at end of file\n"
    )
