#!/usr/bin/env python3
"""
Configuration file for the command line tool.

Settings are read from `.localekit.yml` in the working directory (or the
path given with --config). Every key is optional:

    base_culture: en
    recursive: true
    placeholder_pattern: '\\{+\\w+\\}+'
    missing_placeholder: '@@MISSING@@ {0}'
    rules: [no-empty-values, no-duplicate-keys]
    ignore: ['*.bak']
    logging:
      level: INFO
      format: '%(asctime)s %(levelname)s %(name)s: %(message)s'
      datefmt: '%Y-%m-%d %H:%M:%S'
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from .errors import ConfigError
from .placeholders import DEFAULT_PLACEHOLDER_PATTERN
from .services.generate import DEFAULT_MISSING_PLACEHOLDER

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".localekit.yml"

DEFAULT_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    format: str = DEFAULT_LOG_FORMAT
    datefmt: str = DEFAULT_LOG_DATEFMT

    def apply(self, verbose: bool = False) -> None:
        """Configure the root logger; --verbose forces DEBUG."""
        level = logging.DEBUG if verbose else logging.getLevelName(self.level.upper())
        if not isinstance(level, int):
            raise ConfigError(f"Unknown logging level '{self.level}'.")
        logging.basicConfig(level=level, format=self.format, datefmt=self.datefmt)


@dataclass
class Config:
    """Defaults applied to CLI commands when the matching flag is not given."""
    base_culture: str = "en"
    recursive: bool = True
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN
    missing_placeholder: str = DEFAULT_MISSING_PLACEHOLDER
    rules: list[str] = field(default_factory=list)
    ignore: list[str] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Optional[str] = None) -> "Config":
        config = cls(path=path)
        log = data.get("logging") or {}
        if not isinstance(log, dict):
            raise ConfigError("'logging' must be a mapping.", path)

        for name in ("base_culture", "placeholder_pattern", "missing_placeholder"):
            if data.get(name) is not None:
                setattr(config, name, str(data[name]))
        if data.get("recursive") is not None:
            config.recursive = bool(data["recursive"])
        config.rules = _string_list(data.get("rules"), "rules", path)
        config.ignore = _string_list(data.get("ignore"), "ignore", path)
        config.logging = LoggingConfig(
            level=str(log.get("level", config.logging.level)),
            format=str(log.get("format", config.logging.format)),
            datefmt=str(log.get("datefmt", config.logging.datefmt)),
        )
        return config


def _string_list(value: Any, name: str, path: Optional[str]) -> list[str]:
    """Accept a YAML list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, list):
        return [str(item) for item in value]
    raise ConfigError(f"'{name}' must be a list or a comma-separated string.", path)


def load_config(path: Optional[str] = None) -> Config:
    """
    Load the configuration file.

    Args:
        path: Explicit config path; when None, `.localekit.yml` in the
            working directory is used if present

    Returns:
        Parsed Config, or defaults when no file exists

    Raises:
        ConfigError: The explicit file is missing, or the YAML is invalid
    """
    explicit = path is not None
    path = path or DEFAULT_CONFIG_FILE

    if not os.path.isfile(path):
        if explicit:
            raise ConfigError(f"Config file '{path}' does not exist.", path)
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file '{path}': {e}", path) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}", path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping.", path)

    logger.debug("Loaded config from %s", path)
    return Config.from_dict(data, path)
