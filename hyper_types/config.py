#!/usr/bin/env python3
"""
Configuration for hyper-types.

Settings come from environment variables, falling back to defaults:

    HYPER_TYPES_STRICT     Reject unknown keys while decoding (default: false)
    HYPER_TYPES_INDENT     Indent for CLI JSON output (default: 2)
    HYPER_TYPES_LOG_LEVEL  Log level for the CLI (default: WARNING)

Values are read once and cached; reset_config() drops the cache.
"""

import logging
import os
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

ENV_STRICT = "HYPER_TYPES_STRICT"
ENV_INDENT = "HYPER_TYPES_INDENT"
ENV_LOG_LEVEL = "HYPER_TYPES_LOG_LEVEL"

DEFAULTS: Dict[str, Any] = {
    "strict": False,
    "indent": 2,
    "log_level": "WARNING",
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")

# Cached values, keyed like DEFAULTS
_cache: Dict[str, Any] = {}


def parse_bool(value: str) -> bool:
    """Parse a boolean environment value."""
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_log_level(value: str) -> str:
    """Validate a log level name."""
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level: {value!r}")
    return name


def _get(key: str, env_var: str, converter: Callable[[str], Any]) -> Any:
    if key in _cache:
        return _cache[key]

    value = DEFAULTS[key]
    raw: Optional[str] = os.environ.get(env_var)
    if raw is not None:
        try:
            value = converter(raw)
        except (ValueError, TypeError):
            logger.warning("Invalid value for %s: %r, using default", env_var, raw)

    _cache[key] = value
    return value


def strict_decoding() -> bool:
    """Whether decoding rejects unknown keys."""
    return _get("strict", ENV_STRICT, parse_bool)


def output_indent() -> int:
    """Indent used when the CLI prints JSON."""
    return _get("indent", ENV_INDENT, int)


def log_level() -> str:
    """Log level name for the CLI."""
    return _get("log_level", ENV_LOG_LEVEL, parse_log_level)


def reset_config() -> None:
    """Drop cached values so the environment is read again."""
    _cache.clear()
