"""Git interface layer — adapter, diff parsing, models."""

from rtrim.git.adapter import Index, Repository
from rtrim.git.diff_parser import DiffParser, unquote_path
from rtrim.git.models import DiffLine, FileSkipped, LineType

__all__ = [
    "DiffLine",
    "DiffParser",
    "FileSkipped",
    "Index",
    "LineType",
    "Repository",
    "unquote_path",
]
