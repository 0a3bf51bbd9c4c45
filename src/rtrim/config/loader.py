"""Load and merge configuration from .rtrim.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from rtrim.config.schema import RestageConfig, RTrimConfig, ScanConfig
from rtrim.errors import ConfigError

CONFIG_FILENAME = ".rtrim.toml"


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: RTrimConfig) -> None:
    """Apply RTRIM_* environment variable overrides."""
    if val := os.environ.get("RTRIM_PATHS"):
        cfg.scan.paths = [p.strip() for p in val.split(os.pathsep) if p.strip()]
    if val := os.environ.get("RTRIM_CONTEXT_LINES"):
        try:
            lines = int(val)
        except ValueError:
            lines = -1
        if lines >= 0:
            cfg.scan.context_lines = lines
    if os.environ.get("RTRIM_NO_RESTAGE") == "1":
        cfg.restage.enabled = False


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    return cls(**{k: v for k, v in raw.items() if k in valid_fields})


def _validate(cfg: RTrimConfig) -> None:
    if not isinstance(cfg.scan.paths, list) or not all(isinstance(p, str) for p in cfg.scan.paths):
        raise ConfigError("scan.paths must be a list of strings")
    if isinstance(cfg.scan.context_lines, bool) or not isinstance(cfg.scan.context_lines, int):
        raise ConfigError("scan.context_lines must be an integer")
    if cfg.scan.context_lines < 0:
        raise ConfigError("scan.context_lines must not be negative")
    if not isinstance(cfg.restage.enabled, bool):
        raise ConfigError("restage.enabled must be true or false")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> RTrimConfig:
    """Load, validate, and return an RTrimConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = RTrimConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = RTrimConfig(
            scan=_build_section(raw, ScanConfig, "scan"),
            restage=_build_section(raw, RestageConfig, "restage"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
