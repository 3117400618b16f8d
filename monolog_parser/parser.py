"""Parser: one log source, one grammar, one set of options, one cached Log."""

import logging
import os

from monolog_parser.exceptions import STRING_SOURCE, LogFileNotFoundError, ParserNotReadyError
from monolog_parser.extractor import ParseOptions, extract
from monolog_parser.models import Log
from monolog_parser.patterns import MONOLOG2
from monolog_parser.reader import read_text

logger = logging.getLogger(__name__)


class Parser:
    """Stateful front end over extract().

    Holds an optional log file, the active grammar and ParseOptions, and
    caches the Log of the last parse until clear() or the next parse().
    Setters return the Parser so calls can be chained::

        log = Parser("app.log").set_pattern(LARAVEL).get()
    """

    def __init__(self, filename: str | None = None):
        self._filename: str | None = None
        self._pattern = MONOLOG2
        self._options = ParseOptions()
        self._records: Log | None = None
        if filename:
            self.set_file(filename)

    @classmethod
    def new(cls, filename: str | None = None) -> "Parser":
        return cls(filename)

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def pattern(self):
        return self._pattern

    @property
    def options(self) -> ParseOptions:
        return self._options

    def set_file(self, filename: str) -> "Parser":
        """Point the parser at an existing log file."""
        if not os.path.isfile(filename):
            self._filename = None
            raise LogFileNotFoundError(filename)
        self._filename = filename
        logger.debug("Parser file set to %s", filename)
        return self

    def is_ready(self) -> bool:
        """True when a readable file is set."""
        return self._filename is not None and os.access(self._filename, os.R_OK)

    def set_pattern(self, pattern) -> "Parser":
        """Use a Grammar, compiled pattern, or pattern string for the next parse.

        The pattern is not validated here; a broken one fails on the next parse.
        """
        self._pattern = pattern
        return self

    def set_options(self, options: ParseOptions) -> "Parser":
        """Replace all parsing options."""
        self._options = options
        return self

    def clear(self) -> "Parser":
        """Drop the cached Log from the previous parse."""
        self._records = None
        return self

    def parse(self, text: str = "") -> "Parser":
        """Parse ``text``, or the configured file when ``text`` is empty.

        Raises ParserNotReadyError if there is no text and no readable file.
        """
        if text == "":
            if not self.is_ready():
                raise ParserNotReadyError()
            source = os.path.basename(self._filename)
            text = read_text(self._filename)
        else:
            source = STRING_SOURCE

        self._records = extract(text, self._pattern, self._options, source=source)
        logger.info("Parsed %d records from %s", len(self._records), source)
        return self

    def get(self, from_cache: bool = True) -> Log:
        """Return the parsed Log, parsing first if nothing is cached.

        Pass ``from_cache=False`` to force a re-parse.
        """
        if not from_cache:
            self.clear()
        if self._records is None:
            self.parse()
        return self._records
