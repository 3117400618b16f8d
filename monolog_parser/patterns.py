"""Grammars for Monolog-style log dialects.

Each grammar is one regular expression with the named groups
``datetime``, ``channel`` (or ``logger``), ``level``, ``message`` and the
optional ``context`` / ``extra`` groups. Every record is anchored at a line
start, so ``finditer`` walks the records of a text blob in document order.

Single-line dialects stop each field at the end of the line. Multi-line
dialects let the message and JSON payloads run across newlines and close a
record only when the next line opens with ``[`` (the next envelope) or the
input ends.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import cached_property

from monolog_parser.exceptions import GrammarError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Raw pattern sources
# ---------------------------------------------------------------------------

MONOLOG2_SOURCE = (
    r"^"
    r"\[(?P<datetime>.*)\] "
    r"(?P<channel>[\w-]+)\.(?P<level>\w+): "
    r"(?P<message>[^\[\{\n]+)"
    # context is non-greedy so a following extra block is left alone
    r"(?:(?P<context> (?:\[.*?\]|\{.*?\}))|)"
    r"(?:(?P<extra> (?:\[.*\]|\{.*\}))|)"
    r"\s{0,2}$"
)

MONOLOG2_MULTILINE_SOURCE = (
    r"^"
    r"\[(?P<datetime>[^\]]*)\] "
    r"(?P<channel>[\w-]+)\.(?P<level>\w+): "
    r"(?P<message>[^\[\{]+)"
    r"(?:(?P<context> (?:\[.*?\]|\{.*?\}))|)"
    r"(?:(?P<extra> (?:\[.*?\]|\{.*?\}))|)"
    r"\s{0,2}$"
    # the record ends where the next envelope starts, or at end of input
    r"(?=\n\[|\n?\Z)"
)

LARAVEL_SOURCE = (
    r"^"
    r"\[(?P<datetime>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\] "
    r"(?P<channel>\w+)\.(?P<level>\w+): "
    r"(?P<message>.*?)"
    r"(?: (?P<context>\{\".*?\})|)"
    # Laravel keeps the separator before the hidden, empty extra block
    r" $"
    r"(?=\n\[|\n?\Z)"
)

DEFAULT_FLAGS = re.MULTILINE


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Grammar:
    """A named, lazily compiled log-line pattern.

    Compilation is deferred until the first match so an invalid custom
    pattern is only reported when it is actually used.
    """

    name: str
    source: str
    flags: int = DEFAULT_FLAGS
    # an already compiled pattern, reused as-is instead of compiling source
    compiled: re.Pattern | None = field(default=None, repr=False, compare=False)

    @cached_property
    def regex(self) -> re.Pattern:
        """Return the compiled pattern, raising GrammarError if it does not compile."""
        if self.compiled is not None:
            return self.compiled
        try:
            regex = re.compile(self.source, self.flags)
        except re.error as exc:
            raise GrammarError(f"Invalid grammar {self.name!r}: {exc}") from exc
        logger.debug("Compiled grammar %s", self.name)
        return regex

    def finditer(self, text: str):
        """Yield every non-overlapping match in document order."""
        return self.regex.finditer(text)


MONOLOG2 = Grammar("monolog2", MONOLOG2_SOURCE, re.MULTILINE)
MONOLOG2_MULTILINE = Grammar("monolog2-multiline", MONOLOG2_MULTILINE_SOURCE, re.MULTILINE | re.DOTALL)
LARAVEL = Grammar("laravel", LARAVEL_SOURCE, re.MULTILINE | re.DOTALL)

GRAMMARS: dict[str, Grammar] = {
    MONOLOG2.name: MONOLOG2,
    MONOLOG2_MULTILINE.name: MONOLOG2_MULTILINE,
    LARAVEL.name: LARAVEL,
}


def get_grammar(name: str) -> Grammar:
    """Look up a preset grammar by name (case-insensitive, '_' and '-' interchangeable)."""
    key = name.strip().lower().replace("_", "-")
    try:
        return GRAMMARS[key]
    except KeyError:
        known = ", ".join(sorted(GRAMMARS))
        raise GrammarError(f"Unknown grammar {name!r} (known: {known})") from None


def as_grammar(pattern) -> Grammar:
    """Coerce a Grammar, compiled pattern, or pattern string into a Grammar.

    Strings are not compiled here; errors surface on first match.
    """
    if isinstance(pattern, Grammar):
        return pattern
    if isinstance(pattern, re.Pattern):
        return Grammar("custom", pattern.pattern, pattern.flags, compiled=pattern)
    if isinstance(pattern, str):
        return Grammar("custom", pattern, DEFAULT_FLAGS)
    raise TypeError(f"Expected Grammar, re.Pattern or str, got {type(pattern).__name__}")
