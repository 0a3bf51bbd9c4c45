"""Tests for the terminal reporter."""

import io
from collections import deque

from rich.console import Console

from rtrim.output import terminal
from rtrim.pipeline import RunResult


def _make_result(**kwargs) -> RunResult:
    """Build a RunResult with sample data."""
    defaults = dict(
        flagged={"src/app.py": deque([3, 7]), "README.md": deque([1])},
        trimmed={"src/app.py": 2, "README.md": 1},
        restaged=["README.md", "src/app.py"],
        duration_ms=12.5,
    )
    defaults.update(kwargs)
    return RunResult(**defaults)


def _render(result: RunResult, **kwargs) -> str:
    buf = io.StringIO()
    console = Console(file=buf, width=120, color_system=None)
    terminal.render(result, console, **kwargs)
    return buf.getvalue()


class TestTerminal:
    def test_lists_files_and_lines(self):
        out = _render(_make_result())
        assert "Trailing whitespace removed" in out
        assert "src/app.py" in out
        assert "3, 7" in out

    def test_dry_run_title(self):
        out = _render(_make_result(trimmed={}, restaged=[], dry_run=True))
        assert "(dry run)" in out
        assert "Lines trimmed" not in out

    def test_summary(self):
        out = _render(_make_result())
        assert "Files flagged:" in out
        assert "Lines flagged:" in out
        assert "Re-staged:" in out

    def test_summary_hidden(self):
        out = _render(_make_result(), show_summary=False)
        assert "Files flagged:" not in out

    def test_nothing_flagged(self):
        out = _render(RunResult(), show_summary=False)
        assert "No staged trailing whitespace" in out

    def test_stale_file_warning(self):
        out = _render(_make_result(trimmed={"src/app.py": 1, "README.md": 1}))
        assert "src/app.py changed after it was staged" in out
