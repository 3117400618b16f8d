"""LogRecord frozen dataclass and the read-only Log sequence."""

from collections.abc import Sequence
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta
from typing import Any, Iterator

# A decoded context/extra payload: JSON object, JSON array (or wrapped scalar),
# raw text under the as-text / fail-soft policies, or None when skipped.
Payload = dict[str, Any] | list[Any] | str | None


@dataclass(frozen=True)
class LogRecord:
    datetime: datetime
    channel: str
    level: str
    message: str
    context: Payload = field(default_factory=list)
    extra: Payload = field(default_factory=list)

    def __getitem__(self, key: str) -> Any:
        """Read a field by name, e.g. ``record["channel"]``."""
        if key not in _FIELD_NAMES:
            raise KeyError(key)
        return getattr(self, key)

    def __contains__(self, key: object) -> bool:
        return key in _FIELD_NAMES

    def __iter__(self) -> Iterator[str]:
        """Iterate over field names, like a mapping."""
        return (f.name for f in fields(self))

    def __setitem__(self, key, value):
        raise TypeError("LogRecord does not support item assignment")

    def __delitem__(self, key):
        raise TypeError("LogRecord does not support item deletion")

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a JSON-friendly dict (datetime as ISO 8601)."""
        return {
            "datetime": self.datetime.isoformat(),
            "channel": self.channel,
            "level": self.level,
            "message": self.message,
            "context": self.context,
            "extra": self.extra,
        }


_FIELD_NAMES = frozenset(f.name for f in fields(LogRecord))


def datetime_sort_key(value: datetime) -> timedelta:
    """Distance from datetime.min, shifted to UTC for offset-aware values.

    Naive values are read as UTC. Defined for every representable datetime.
    """
    return value.replace(tzinfo=None) - datetime.min - (value.utcoffset() or timedelta(0))


class Log(Sequence):
    """Ordered, read-only collection of LogRecords.

    Supports len(), iteration, index and slice access. The only way to
    reorder it is sort_by_datetime(); the records themselves never change.
    """

    __slots__ = ("_records",)

    def __init__(self, records=()):
        self._records: list[LogRecord] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Log(self._records[index])
        try:
            return self._records[index]
        except IndexError:
            raise IndexError(f"Undefined log index {index}") from None

    def __iter__(self) -> Iterator[LogRecord]:
        return iter(self._records)

    def __setitem__(self, index, value):
        raise TypeError("Log does not support item assignment")

    def __delitem__(self, index):
        raise TypeError("Log does not support item deletion")

    def __repr__(self) -> str:
        return f"Log({len(self._records)} records)"

    def sort_by_datetime(self, ascending: bool = False) -> None:
        """Sort in place, newest first; ``ascending`` reverses the sorted order.

        The descending sort is stable, so records sharing a datetime keep
        their parse order. Ascending output is the exact reverse of that,
        which means tied records come out in reverse parse order.
        """
        if len(self._records) < 2:
            return
        ordered = sorted(self._records, key=lambda r: datetime_sort_key(r.datetime), reverse=True)
        if ascending:
            ordered.reverse()
        self._records = ordered
