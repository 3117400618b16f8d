"""Statistics: level and channel counts, entries per hour, time span."""

import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from monolog_parser.models import LogRecord, datetime_sort_key

ERROR_LEVELS = frozenset({"ERROR", "CRITICAL", "ALERT", "EMERGENCY"})


@dataclass
class LogStats:
    total_entries: int = 0
    level_counts: dict[str, int] = field(default_factory=dict)
    channel_counts: dict[str, int] = field(default_factory=dict)
    entries_per_hour: dict[str, int] = field(default_factory=dict)
    first_seen: datetime | None = None
    last_seen: datetime | None = None
    error_messages: list[str] = field(default_factory=list)


def compute_stats(records: Iterable[LogRecord]) -> LogStats:
    """Consume a record stream and produce aggregated statistics."""
    level_counter = Counter()
    channel_counter = Counter()
    hour_counter = Counter()
    error_msgs = []
    first = last = None
    total = 0

    for record in records:
        total += 1
        level_counter[record.level] += 1
        channel_counter[record.channel] += 1
        hour_counter[record.datetime.strftime("%Y-%m-%d %H:00")] += 1
        if record.level.upper() in ERROR_LEVELS:
            error_msgs.append(record.message)
        key = datetime_sort_key(record.datetime)
        if first is None or key < datetime_sort_key(first.datetime):
            first = record
        if last is None or key > datetime_sort_key(last.datetime):
            last = record

    return LogStats(
        total_entries=total,
        level_counts=dict(level_counter.most_common()),
        channel_counts=dict(channel_counter.most_common()),
        entries_per_hour=dict(sorted(hour_counter.items())),
        first_seen=first.datetime if first else None,
        last_seen=last.datetime if last else None,
        error_messages=error_msgs,
    )


def format_stats_text(stats: LogStats) -> str:
    """Human-readable stats summary."""
    lines = [f"Total entries: {stats.total_entries}"]
    if stats.first_seen is not None:
        lines.append(f"Time span: {stats.first_seen.isoformat()} .. {stats.last_seen.isoformat()}")
    lines.append("")

    lines.append("Level counts:")
    for level, count in stats.level_counts.items():
        lines.append(f"  {level:10s} {count}")
    lines.append("")

    lines.append("Channel counts:")
    for channel, count in stats.channel_counts.items():
        lines.append(f"  {channel:10s} {count}")
    lines.append("")

    lines.append("Entries per hour:")
    for hour, count in stats.entries_per_hour.items():
        lines.append(f"  {hour}  {count}")
    lines.append("")

    if stats.error_messages:
        lines.append(f"Error messages ({len(stats.error_messages)}):")
        for msg in stats.error_messages:
            lines.append(f"  - {msg}")
    else:
        lines.append("No error messages.")

    return "\n".join(lines)


def format_stats_json(stats: LogStats) -> str:
    """JSON stats output."""
    return json.dumps({
        "total_entries": stats.total_entries,
        "level_counts": stats.level_counts,
        "channel_counts": stats.channel_counts,
        "entries_per_hour": stats.entries_per_hour,
        "first_seen": stats.first_seen.isoformat() if stats.first_seen else None,
        "last_seen": stats.last_seen.isoformat() if stats.last_seen else None,
        "error_messages": stats.error_messages,
    }, indent=2)
