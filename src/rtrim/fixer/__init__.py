"""Fixer — rewrite flagged lines and re-stage the result."""

from rtrim.fixer.restager import restage
from rtrim.fixer.rewriter import rewrite, rewrite_file

__all__ = ["restage", "rewrite", "rewrite_file"]
