"""Scanner — classify staged lines that end in whitespace."""

from rtrim.scanner.engine import TrailingLineMap, find_trailing, has_trailing_whitespace, scan

__all__ = [
    "TrailingLineMap",
    "find_trailing",
    "has_trailing_whitespace",
    "scan",
]
