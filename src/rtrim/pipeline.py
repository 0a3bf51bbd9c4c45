"""Orchestrates the full pipeline: scan → rewrite → restage.

Every stage raises on failure and nothing is retried, so a run either
completes or stops at the first failing stage.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from rtrim.config.schema import RTrimConfig
from rtrim.fixer.restager import restage
from rtrim.fixer.rewriter import rewrite
from rtrim.git.adapter import Repository
from rtrim.scanner.engine import TrailingLineMap, scan


@dataclass
class RunResult:
    """Complete result of a run."""

    flagged: TrailingLineMap = field(default_factory=dict)
    trimmed: Dict[str, int] = field(default_factory=dict)
    restaged: List[str] = field(default_factory=list)
    dry_run: bool = False
    duration_ms: float = 0.0

    @property
    def total_flagged(self) -> int:
        return sum(len(q) for q in self.flagged.values())

    @property
    def total_trimmed(self) -> int:
        return sum(self.trimmed.values())

    @property
    def stale_files(self) -> List[str]:
        """Files whose flagged lines no longer all existed when rewritten."""
        return [f for f, q in self.flagged.items() if f in self.trimmed and self.trimmed[f] < len(q)]


def run(
    repo: Repository,
    path_filters: Sequence[str],
    config: RTrimConfig,
    *,
    dry_run: bool = False,
) -> RunResult:
    """Run the pipeline against *repo*. Returns a RunResult."""
    start = time.perf_counter()

    flagged = scan(repo, path_filters, context_lines=config.scan.context_lines)
    result = RunResult(flagged=flagged, dry_run=dry_run)

    if flagged and not dry_run:
        result.trimmed = rewrite(repo.workdir, flagged)
        if config.restage.enabled:
            restage(repo, flagged.keys())
            result.restaged = sorted(flagged)

    result.duration_ms = round((time.perf_counter() - start) * 1000, 2)
    return result
