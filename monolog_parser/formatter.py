"""Output formatters: text, JSON (NDJSON), colorized (ANSI)."""

import json
from typing import Callable

from monolog_parser.models import LogRecord

# ANSI color codes, keyed by Monolog level name
COLORS = {
    "DEBUG": "\033[36m",      # cyan
    "INFO": "\033[32m",       # green
    "NOTICE": "\033[32m",     # green
    "WARNING": "\033[33m",    # yellow
    "ERROR": "\033[31m",      # red
    "CRITICAL": "\033[31m",   # red
    "ALERT": "\033[35m",      # magenta
    "EMERGENCY": "\033[35m",  # magenta
}
RESET = "\033[0m"


def _payload_text(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def format_text(record: LogRecord) -> str:
    """Tab-separated summary; empty context/extra payloads are left out."""
    parts = [record.datetime.isoformat(), record.level, record.channel, record.message]
    for payload in (record.context, record.extra):
        if payload:
            parts.append(_payload_text(payload))
    return "\t".join(parts)


def format_json(record: LogRecord) -> str:
    """Return NDJSON, one JSON object per line, compatible with jq."""
    return json.dumps(record.to_dict(), ensure_ascii=False)


def format_color(record: LogRecord) -> str:
    """Return the record with an ANSI-colored level."""
    color = COLORS.get(record.level.upper(), "")
    ts = record.datetime.strftime("%Y-%m-%d %H:%M:%S")
    return f"[{ts}] {record.channel}.{color}{record.level}{RESET}: {record.message}"


def get_formatter(output_format: str = "text", color: bool = False) -> Callable[[LogRecord], str]:
    """Factory that returns the right formatter based on args."""
    if output_format == "json":
        return format_json
    if color:
        return format_color
    return format_text
