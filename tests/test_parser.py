"""Tests for monolog_parser/parser.py"""

import os

import pytest

from monolog_parser.exceptions import LogFileNotFoundError, ParserNotReadyError, ParsingError
from monolog_parser.extractor import ParseOptions
from monolog_parser.models import Log, LogRecord
from monolog_parser.parser import Parser
from monolog_parser.patterns import LARAVEL, MONOLOG2, MONOLOG2_MULTILINE

MISSING_FILE = os.path.join(os.path.dirname(__file__), "file.log")


class TestConstruct:
    def test_without_file(self):
        parser = Parser()
        assert parser.filename is None
        assert parser.is_ready() is False

    def test_with_file(self, test_log):
        assert Parser(test_log).is_ready() is True

    def test_missing_file(self):
        with pytest.raises(LogFileNotFoundError, match="File not found"):
            Parser(MISSING_FILE)

    def test_missing_file_is_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            Parser(MISSING_FILE)

    def test_new_is_not_singleton(self, test_log):
        assert Parser.new() is not Parser.new()
        assert Parser.new(test_log).is_ready()

    def test_defaults(self):
        parser = Parser()
        assert parser.pattern is MONOLOG2
        assert parser.options == ParseOptions()


class TestSetFile:
    def test_returns_self(self, test_log):
        parser = Parser()
        assert parser.set_file(test_log) is parser
        assert parser.is_ready()

    def test_failed_set_file_leaves_parser_not_ready(self, test_log):
        parser = Parser(test_log)
        with pytest.raises(LogFileNotFoundError):
            parser.set_file(MISSING_FILE)
        assert parser.is_ready() is False


class TestParse:
    def test_parse_file(self, test_log):
        parser = Parser(test_log)
        records = parser.parse().get()
        assert parser.is_ready()
        assert isinstance(records, Log)
        assert isinstance(records[0], LogRecord)
        assert len(records) == 3

    def test_reparse_builds_new_records(self, test_log):
        parser = Parser(test_log)
        records = parser.parse().get()
        again = parser.parse().get()
        for a, b in zip(records, again):
            assert a is not b
            assert a == b

    def test_parse_returns_self(self, test_log):
        parser = Parser(test_log)
        assert parser.parse() is parser

    def test_not_ready(self):
        with pytest.raises(ParserNotReadyError, match="Parser is not ready!"):
            Parser.new().parse()

    def test_parse_string(self):
        parser = Parser()
        records = parser.parse("[2020-01-01] test.DEBUG: message").get()
        assert len(records) == 1
        assert records[0].channel == "test"
        assert records[0].level == "DEBUG"
        assert records[0].message == "message"
        assert parser.is_ready() is False
        assert isinstance(parser.get(), Log)

    def test_parse_string_returns_self(self):
        parser = Parser()
        assert parser.parse("test") is parser
        assert len(parser.get()) == 0

    def test_empty_string_needs_file(self):
        with pytest.raises(ParserNotReadyError):
            Parser().parse("")

    def test_error_names_file(self, brackets_fail_log):
        with pytest.raises(ParsingError, match="Failed to parse brackets-fail.log"):
            Parser(brackets_fail_log).get()

    def test_error_names_string_source(self):
        with pytest.raises(ParsingError, match=r"Failed to parse \[STRING\]"):
            Parser().parse('[2020-01-01] test.DEBUG: message {"test":"}')


class TestCache:
    def test_get_returns_cached_records(self, test_log):
        parser = Parser(test_log)
        records = parser.get()
        again = parser.get()
        for a, b in zip(records, again):
            assert a is b

    def test_clear_forces_reparse(self, test_log):
        parser = Parser(test_log)
        records = parser.get()
        again = parser.clear().get()
        for a, b in zip(records, again):
            assert a is not b

    def test_clear_returns_self(self):
        parser = Parser()
        assert parser.clear() is parser

    def test_get_without_cache(self, test_log):
        parser = Parser(test_log)
        records = parser.get()
        again = parser.get(from_cache=False)
        assert records[0] is not again[0]


class TestSetPattern:
    def test_returns_self(self):
        parser = Parser()
        assert parser.set_pattern("") is parser

    def test_switching_patterns(self):
        parser = Parser()
        line = "[2020-01-01] test.DEBUG: message  \n"
        assert len(parser.parse(line).get()) == 1

        parser.set_pattern(MONOLOG2_MULTILINE)
        assert len(parser.parse(line).get()) == 1

        parser.set_pattern(r"^__\w+$")
        assert len(parser.parse(line).get()) == 0

    def test_custom_pattern(self):
        parser = Parser()
        parser.set_pattern(r"^\[(?P<datetime>.*?)\] (?P<message>.*?) \| (?P<channel>\w+)\.(?P<level>\w+)$")
        assert len(parser.parse("[2020-01-01] test.DEBUG: message  \n").get()) == 0
        records = parser.parse("[2020-01-01] msg | abc.efg").get()
        assert len(records) == 1
        assert records[0].datetime.strftime("%Y-%m-%d") == "2020-01-01"
        assert records[0].message == "msg"
        assert records[0].channel == "abc"
        assert records[0].level == "efg"

        parser.set_pattern(MONOLOG2)
        assert len(parser.parse("[2020-01-01] msg | abc.efg").get()) == 0
        assert len(parser.parse("[2020-01-01] test.DEBUG: message").get()) == 1

    def test_laravel_file(self, laravel_log):
        records = Parser(laravel_log).set_pattern(LARAVEL).get()
        assert [r.level for r in records] == ["ERROR", "INFO", "WARNING"]


class TestSetOptions:
    def test_returns_self(self):
        parser = Parser()
        assert parser.set_options(ParseOptions(sort_by_datetime=True)) is parser

    def test_options_replaced(self):
        parser = Parser()
        parser.set_options(ParseOptions(json_as_text=True))
        parser.set_options(ParseOptions(skip_exceptions=True))
        assert parser.options.json_as_text is False
        assert parser.options.skip_exceptions is True

    def test_skip_then_fail_soft(self, brackets_fail_log):
        parser = Parser(brackets_fail_log)
        with pytest.raises(ParsingError):
            parser.get()
        records = parser.set_options(ParseOptions(skip_exceptions=True)).get(False)
        assert [r.context for r in records] == [None, None, None]
        records = parser.set_options(ParseOptions(json_fail_soft=True, skip_exceptions=True)).get(False)
        assert all(r.context is not None and r.extra is not None for r in records)

    def test_sorted_file(self, sort_log):
        records = Parser(sort_log).set_options(ParseOptions(sort_by_datetime=True)).get()
        assert [r.message for r in records] == ["second", "fourth", "third", "first"]
