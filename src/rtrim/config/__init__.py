"""Configuration loading and schema."""

from rtrim.config.loader import CONFIG_FILENAME, load_config
from rtrim.config.schema import RestageConfig, RTrimConfig, ScanConfig
from rtrim.errors import ConfigError

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "RTrimConfig",
    "RestageConfig",
    "ScanConfig",
    "load_config",
]
