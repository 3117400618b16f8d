"""Exception hierarchy for grammar, content, timestamp, and source failures."""

STRING_SOURCE = "[STRING]"


class MonologParserError(Exception):
    """Base class for every error raised by monolog_parser."""


class GrammarError(MonologParserError):
    """Raised when the active grammar cannot be compiled or lacks a datetime group."""


class ParsingError(MonologParserError):
    """Raised when captured content cannot be decoded under the active options."""

    def __init__(self, source: str, detail: str | None = None):
        self.source = source
        self.detail = detail
        message = f"Failed to parse {source}"
        if detail:
            message += "\n" + detail
        super().__init__(message)


class TimestampError(MonologParserError, ValueError):
    """Raised when a captured datetime string cannot be interpreted."""

    def __init__(self, value: str | None):
        self.value = value
        super().__init__(f"Unable to parse datetime: {value!r}")


class ParserNotReadyError(MonologParserError):
    """Raised when a Parser is asked to parse without text or a readable file."""

    def __init__(self):
        super().__init__("Parser is not ready!")


class LogFileNotFoundError(MonologParserError, FileNotFoundError):
    """Raised when the log file handed to a Parser does not exist."""

    def __init__(self, filename: str):
        super().__init__(f"File not found: {filename}")
        self.filename = filename

    def __str__(self) -> str:
        return f"File not found: {self.filename}"
