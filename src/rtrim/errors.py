"""Error taxonomy shared by every pipeline stage."""

from __future__ import annotations


class RTrimError(Exception):
    """Base class for every error that aborts a run."""


class RepositoryError(RTrimError):
    """Raised on repository discovery, diff, or index failures."""


class FileIOError(RTrimError):
    """Raised when a working-tree file cannot be read, written, or replaced."""

    @classmethod
    def from_os_error(cls, exc: OSError) -> "FileIOError":
        return cls(str(exc))


class ConfigError(RTrimError):
    """Raised when config is malformed or unreadable."""


class HookError(RTrimError):
    """Raised when the pre-commit hook cannot be installed or removed as asked."""
