"""rtrim — strip trailing whitespace from staged lines before they are committed."""

__version__ = "0.3.0"
