"""Re-stager — put the trimmed files back into the index."""

from __future__ import annotations

from typing import Iterable

from rtrim.git.adapter import Repository


def restage(repo: Repository, file_paths: Iterable[str]) -> None:
    """Add *file_paths* to the index and persist it once."""
    index = repo.index()
    for path in file_paths:
        index.add_path(path)
    index.write()
