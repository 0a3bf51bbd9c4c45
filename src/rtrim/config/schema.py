"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class ScanConfig:
    paths: List[str] = field(default_factory=list)  # default pathspecs; empty = whole index
    context_lines: int = 3  # unchanged lines around each change that are cleaned too


@dataclass
class RestageConfig:
    enabled: bool = True


@dataclass
class RTrimConfig:
    scan: ScanConfig = field(default_factory=ScanConfig)
    restage: RestageConfig = field(default_factory=RestageConfig)
