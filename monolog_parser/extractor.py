"""Record extraction: run a grammar over a text blob and build LogRecords.

Pipeline:
  1. finditer the grammar over the whole text (document order, no overlap)
  2. per match: parse datetime, copy channel/level, strip message
  3. decode context/extra through normalize_json() under ParseOptions
  4. collect into a Log, optionally sorted by datetime
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime

from dateutil import parser as date_parser

from monolog_parser.exceptions import STRING_SOURCE, GrammarError, ParsingError, TimestampError
from monolog_parser.models import Log, LogRecord, Payload
from monolog_parser.patterns import MONOLOG2, as_grammar

logger = logging.getLogger(__name__)

EMPTY_PAYLOAD = "[]"


@dataclass(frozen=True)
class ParseOptions:
    sort_by_datetime: bool = False
    ascending: bool = False
    json_as_text: bool = False
    skip_exceptions: bool = False
    json_fail_soft: bool = False
    max_input_chars: int = 0  # 0 disables the size guard


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def parse_datetime(value: str | None) -> datetime:
    """Parse a captured timestamp with dateutil's format-flexible parser."""
    if value is None or not value.strip():
        raise TimestampError(value)
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as exc:
        raise TimestampError(value) from exc


def clean_json_text(text: str) -> str:
    """Drop carriage returns and escape raw newlines so the text is one JSON line."""
    return text.replace("\r", "").replace("\n", "\\n")


def _reject_constant(name: str):
    # NaN / Infinity are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def normalize_json(text: str, options: ParseOptions | None = None, source: str = STRING_SOURCE) -> Payload:
    """Decode a captured context/extra block under the active failure policy.

    Precedence: json_as_text > json_fail_soft > skip_exceptions > raise.
    Bare JSON scalars are wrapped in a one-element list.
    """
    options = options or ParseOptions()
    cleaned = clean_json_text(text)

    if options.json_as_text:
        return cleaned.strip()

    try:
        value = json.loads(cleaned, parse_constant=_reject_constant)
    # nesting past the interpreter's recursion limit counts as undecodable
    except (ValueError, RecursionError):
        if options.json_fail_soft:
            logger.warning("Keeping undecodable JSON as text in %s: %s", source, cleaned.strip())
            return cleaned.strip()
        if options.skip_exceptions:
            logger.warning("Skipping undecodable JSON in %s: %s", source, cleaned.strip())
            return None
        raise ParsingError(source, "Failed to decode JSON: " + cleaned) from None

    if value is not None and not isinstance(value, (dict, list)):
        value = [value]
    return value


def _group(match: re.Match, name: str) -> str | None:
    """Return a named group, or None if the grammar lacks it or it did not participate."""
    if name not in match.re.groupindex:
        return None
    return match.group(name)


def build_record(match: re.Match, options: ParseOptions, source: str = STRING_SOURCE) -> LogRecord:
    """Normalize one grammar match into a LogRecord."""
    if "datetime" not in match.re.groupindex:
        raise GrammarError("Grammar has no 'datetime' group")

    channel = _group(match, "channel")
    if channel is None:
        channel = _group(match, "logger")
    context = _group(match, "context")
    extra = _group(match, "extra")

    return LogRecord(
        datetime=parse_datetime(match.group("datetime")),
        channel=channel or "",
        level=_group(match, "level") or "",
        message=(_group(match, "message") or "").strip(),
        context=normalize_json(EMPTY_PAYLOAD if context is None else context, options, source),
        extra=normalize_json(EMPTY_PAYLOAD if extra is None else extra, options, source),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def extract(text: str, grammar=MONOLOG2, options: ParseOptions | None = None,
            source: str = STRING_SOURCE) -> Log:
    """Extract every record the grammar matches in ``text``.

    ``grammar`` may be a Grammar, a compiled pattern, or a pattern string.
    Raises GrammarError, ParsingError or TimestampError; nothing is returned
    for a partially parsed text.
    """
    options = options or ParseOptions()
    grammar = as_grammar(grammar)

    if options.max_input_chars and len(text) > options.max_input_chars:
        raise ParsingError(
            source,
            f"Input of {len(text)} characters exceeds the limit of {options.max_input_chars}",
        )

    records = [build_record(m, options, source) for m in grammar.finditer(text)]
    logger.debug("Grammar %s matched %d records in %s", grammar.name, len(records), source)

    log = Log(records)
    if options.sort_by_datetime:
        log.sort_by_datetime(ascending=options.ascending)
    return log
