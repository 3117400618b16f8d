"""monolog-parse: extract, filter, and summarize Monolog log files."""

import logging
import sys
from argparse import ArgumentParser
from dataclasses import replace
from itertools import islice

from monolog_parser.config import load_config, load_yaml_config
from monolog_parser.exceptions import GrammarError, MonologParserError
from monolog_parser.formatter import get_formatter
from monolog_parser.models import Log
from monolog_parser.parser import Parser
from monolog_parser.patterns import GRAMMARS
from monolog_parser.reader import expand_paths
from monolog_parser.stats import compute_stats, format_stats_json, format_stats_text

logger = logging.getLogger("monolog_parser")

EXIT_FILE_ERROR = 1
EXIT_PARSE_ERROR = 3


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="monolog-parse",
        description="Extract structured records from Monolog-formatted log files.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Log file path(s) or glob pattern(s)",
    )
    grammar = parser.add_mutually_exclusive_group()
    grammar.add_argument(
        "--pattern",
        choices=sorted(GRAMMARS),
        help="Preset grammar to use (default: monolog2)",
    )
    grammar.add_argument(
        "--regex",
        help="Custom grammar with named groups datetime, channel, level, message[, context, extra]",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort records by datetime, newest first",
    )
    parser.add_argument(
        "--ascending",
        action="store_true",
        help="With --sort, reverse the order to oldest first",
    )
    parser.add_argument(
        "--json-as-text",
        action="store_true",
        help="Keep context/extra as raw text, never decode",
    )
    parser.add_argument(
        "--skip-exceptions",
        action="store_true",
        help="Set undecodable context/extra to null instead of failing",
    )
    parser.add_argument(
        "--json-fail-soft",
        action="store_true",
        help="Keep undecodable context/extra as raw text instead of failing",
    )
    parser.add_argument(
        "--level",
        help="Only show records with this level (case-insensitive)",
    )
    parser.add_argument(
        "--channel",
        help="Only show records from this channel",
    )
    parser.add_argument(
        "--lines",
        type=int,
        help="Limit output to N records",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Colorize output by log level (ANSI)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show statistics instead of records",
    )
    parser.add_argument(
        "--config",
        help="YAML file with parser settings",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser


def apply_cli_overrides(config, args):
    """Layer explicit CLI flags over the loaded Config."""
    overrides = {}
    if args.pattern:
        overrides["pattern"] = args.pattern
        overrides["custom_pattern"] = None
    if args.regex:
        overrides["custom_pattern"] = args.regex
    for flag, field_name in (
        ("sort", "sort_by_datetime"),
        ("ascending", "ascending"),
        ("json_as_text", "json_as_text"),
        ("skip_exceptions", "skip_exceptions"),
        ("json_fail_soft", "json_fail_soft"),
    ):
        if getattr(args, flag):
            overrides[field_name] = True
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return replace(config, **overrides)


def collect_records(paths: list[str], config) -> Log:
    """Parse every file and merge the records, sorting across files if asked."""
    options = config.to_options()
    per_file = replace(options, sort_by_datetime=False)
    grammar = config.grammar()

    records = []
    for path in paths:
        parser = Parser(path).set_pattern(grammar).set_options(per_file)
        records.extend(parser.get())

    log = Log(records)
    if options.sort_by_datetime:
        log.sort_by_datetime(ascending=options.ascending)
    return log


def run_pipeline(args) -> int:
    """Assemble and execute the parse/filter/output pipeline. Returns an exit code."""
    config = apply_cli_overrides(load_config(load_yaml_config(args.config)), args)
    logging.getLogger().setLevel(config.log_level)
    logger.debug("Effective config: %s", config)

    try:
        paths = expand_paths(args.files)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        log = collect_records(paths, config)
    except GrammarError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except MonologParserError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    records = iter(log)
    if args.level:
        level = args.level.upper()
        records = (r for r in records if r.level.upper() == level)
    if args.channel:
        records = (r for r in records if r.channel == args.channel)

    if args.stats:
        stats = compute_stats(records)
        if args.output == "json":
            print(format_stats_json(stats))
        else:
            print(format_stats_text(stats))
        return 0

    if args.lines:
        records = islice(records, args.lines)

    formatter = get_formatter(output_format=args.output, color=args.color)
    for record in records:
        print(formatter(record))
    return 0


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [PARSER] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    args = build_parser().parse_args(argv)
    try:
        return run_pipeline(args)
    except ValueError as exc:
        # invalid config values
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except (KeyboardInterrupt, BrokenPipeError):
        return 0


if __name__ == "__main__":
    sys.exit(main())
