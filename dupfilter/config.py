"""Configuration loading from an optional YAML file and environment variables.

Precedence, lowest first: dataclass defaults, YAML file, environment.
"""

import logging
import os
from dataclasses import dataclass

import yaml

from dupfilter.formatter import FORMATTERS
from dupfilter.record import normalize_level

logger = logging.getLogger(__name__)

ENV_PREFIX = "DUP_FILTER_"


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class FilterConfig:
    max_period: int = 8
    notification_level: str = "info"
    thread_safe: bool = False
    output: str = "text"

    def validate(self) -> "FilterConfig":
        """Raise ValueError on out-of-range values; return self for chaining."""
        if self.max_period < 1:
            raise ValueError(f"max_period must be >= 1, got {self.max_period}")
        normalize_level(self.notification_level)
        if self.output not in FORMATTERS:
            raise ValueError(f"unknown output format: {self.output!r}")
        return self


def load_yaml_config(path: str | None) -> dict:
    """Load filter settings from a YAML file. Returns empty dict if no path.

    Settings may sit at the top level or under a ``dup_filter:`` key.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"invalid config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must contain a mapping")
    section = data.get("dup_filter", data) or {}
    if not isinstance(section, dict):
        raise ValueError(f"dup_filter section of {path} must be a mapping")
    logger.info("Loaded YAML config from %s", path)
    return section


def load_config(yaml_data: dict | None = None) -> FilterConfig:
    """Build FilterConfig from YAML data overlaid with DUP_FILTER_* env vars."""
    yaml_data = yaml_data or {}

    max_period = yaml_data.get("max_period", FilterConfig.max_period)
    level = yaml_data.get("notification_level", FilterConfig.notification_level)
    thread_safe = yaml_data.get("thread_safe", FilterConfig.thread_safe)
    output = yaml_data.get("output", FilterConfig.output)

    return FilterConfig(
        max_period=int(os.environ.get(ENV_PREFIX + "MAX_PERIOD", max_period)),
        notification_level=normalize_level(
            str(os.environ.get(ENV_PREFIX + "NOTIFICATION_LEVEL", level))
        ),
        thread_safe=_parse_bool(os.environ.get(ENV_PREFIX + "THREAD_SAFE", thread_safe)),
        output=str(os.environ.get(ENV_PREFIX + "OUTPUT", output)).lower(),
    ).validate()
