"""Configuration loading from env vars and an optional YAML file.

Precedence (lowest to highest): dataclass defaults, environment variables,
YAML keys. The CLI applies its own flags on top of the result.
"""

import os
import logging
from dataclasses import dataclass, fields

import yaml

from monolog_parser.extractor import ParseOptions
from monolog_parser.patterns import as_grammar, get_grammar

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    pattern: str = "monolog2"
    custom_pattern: str | None = None
    sort_by_datetime: bool = False
    ascending: bool = False
    json_as_text: bool = False
    skip_exceptions: bool = False
    json_fail_soft: bool = False
    max_input_chars: int = 0
    log_level: str = "WARNING"

    def to_options(self) -> ParseOptions:
        return ParseOptions(
            sort_by_datetime=self.sort_by_datetime,
            ascending=self.ascending,
            json_as_text=self.json_as_text,
            skip_exceptions=self.skip_exceptions,
            json_fail_soft=self.json_fail_soft,
            max_input_chars=self.max_input_chars,
        )

    def grammar(self):
        """Resolve the custom pattern if one is set, else the named preset."""
        if self.custom_pattern:
            return as_grammar(self.custom_pattern)
        return get_grammar(self.pattern)


# env var -> (field, converter)
_ENV_VARS = {
    "MONOLOG_PATTERN": ("pattern", str),
    "MONOLOG_CUSTOM_PATTERN": ("custom_pattern", str),
    "MONOLOG_SORT": ("sort_by_datetime", _parse_bool),
    "MONOLOG_ASCENDING": ("ascending", _parse_bool),
    "MONOLOG_JSON_AS_TEXT": ("json_as_text", _parse_bool),
    "MONOLOG_SKIP_EXCEPTIONS": ("skip_exceptions", _parse_bool),
    "MONOLOG_JSON_FAIL_SOFT": ("json_fail_soft", _parse_bool),
    "MONOLOG_MAX_INPUT_CHARS": ("max_input_chars", int),
    "MONOLOG_LOG_LEVEL": ("log_level", lambda v: v.upper()),
}

_FIELD_TYPES = {
    "pattern": str,
    "custom_pattern": str,
    "sort_by_datetime": _parse_bool,
    "ascending": _parse_bool,
    "json_as_text": _parse_bool,
    "skip_exceptions": _parse_bool,
    "json_fail_soft": _parse_bool,
    "max_input_chars": int,
    "log_level": lambda v: str(v).upper(),
}


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    return data


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from environment variables, then YAML overrides."""
    values = {}

    for env_name, (field_name, convert) in _ENV_VARS.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw != "":
            values[field_name] = convert(raw)

    known = {f.name for f in fields(Config)}
    for key, raw in (yaml_data or {}).items():
        key = str(key).replace("-", "_")
        if key not in known:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        if raw is None:
            values.pop(key, None)
            continue
        values[key] = _FIELD_TYPES[key](raw)

    level = values.get("log_level", Config.log_level)
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log_level {level!r}, expected one of {', '.join(LOG_LEVELS)}")

    return Config(**values)
