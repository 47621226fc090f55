import argparse
import sys
import time
from typing import List, Optional, Sequence

from searcher import __version__
from searcher.config import SearchConfig
from searcher.errors import ConfigError, InvalidPatternError
from searcher.formatter import TerminalPrinter, display_name, wants_style
from searcher.instrumentation.console import error, plain
from searcher.instrumentation.logging import init_logger, get_logger
from searcher.matcher import PatternMatcher
from searcher.paths import MissingPath, resolve_targets, split_pattern_and_paths
from searcher.scanner import FileScanner
from searcher.state import RunState

EXIT_OK = 0
EXIT_USAGE = 1

VERSION_TEXT = f"""searcher {__version__}
Copyright (C) 2025-2026 Mehrshad Kavousi
License GPLv3+: GNU GPL version 3 or later <https://gnu.org/licenses/gpl.html>.
This is free software: you are free to change and redistribute it.
There is NO WARRANTY, to the extent permitted by law."""


class UsageError(Exception):
    pass


class SearcherArgumentParser(argparse.ArgumentParser):
    """argparse exits with status 2 on bad input; this tool uses 1."""

    def error(self, message):
        raise UsageError(message)


class _ContextAction(argparse.Action):
    """-C N sets both sides; later -A/-B on the command line still win."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.after_context = values
        namespace.before_context = values


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> SearcherArgumentParser:
    parser = SearcherArgumentParser(
        prog="searcher",
        usage="searcher [OPTIONS] PATTERN [PATH ...]",
        description="Search files line by line for a regular expression.",
        add_help=False,  # -h is --hidden
    )

    parser.add_argument(
        "terms",
        nargs="*",
        metavar="PATTERN [PATH ...]",
        help="regular expression, then files or directories to search (default: .)"
    )

    # Context
    parser.add_argument(
        "-A", "--after-context",
        type=_non_negative_int,
        metavar="NUM",
        help="prints the given number of following lines for each match"
    )
    parser.add_argument(
        "-B", "--before-context",
        type=_non_negative_int,
        metavar="NUM",
        help="prints the given number of preceding lines for each match"
    )
    parser.add_argument(
        "-C", "--context",
        type=_non_negative_int,
        action=_ContextAction,
        metavar="NUM",
        help="prints the number of preceding and following lines for each match. "
             "this is equivalent to setting --before-context and --after-context"
    )

    # Presentation
    parser.add_argument(
        "-c", "--color",
        action="store_true",
        default=None,
        help="print with colors, highlighting the matched phrase in the output"
    )
    parser.add_argument(
        "--no-heading",
        action="store_true",
        default=None,
        help="prints a single line including the filename for each match, instead of grouping matches by file"
    )

    # Matching + traversal
    parser.add_argument(
        "-h", "--hidden",
        action="store_true",
        default=None,
        help="search hidden files and folders"
    )
    parser.add_argument(
        "-i", "--ignore-case",
        action="store_true",
        default=None,
        help="search case insensitive"
    )

    # Misc
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="YAML file with default options (default: ~/.config/searcher/config.yaml if present)"
    )
    parser.add_argument(
        "--log-dir",
        metavar="DIR",
        help="write a JSONL session log to this directory"
    )
    parser.add_argument("--help", action="store_true", help="Show help")
    parser.add_argument("-v", "--version", action="store_true", help="Show version")

    return parser


def _usage_failure(parser: argparse.ArgumentParser, message: str) -> int:
    error(f"ERROR: {message}")
    plain(parser.format_help().rstrip())
    return EXIT_USAGE


def run_search(pattern: str, paths: List[str], cfg: SearchConfig, stream=None) -> int:
    """Compile the pattern and scan every path in order."""
    logger = get_logger()

    try:
        matcher = PatternMatcher.compile(pattern, ignore_case=cfg.ignore_case)
    except InvalidPatternError as e:
        error(f"Error: {e}")
        logger.log_error(e, context="compile")
        return EXIT_USAGE

    out = stream if stream is not None else sys.stdout
    printer = TerminalPrinter(out, color=wants_style(cfg, out))
    scanner = FileScanner(cfg, matcher, printer)
    run_state = RunState()

    logger.log_run_start(pattern, paths)
    start = time.time()

    for target in resolve_targets(paths, hidden=cfg.hidden):
        if isinstance(target, MissingPath):
            error(f"Error: Path not found - {display_name(target.path)}")
            logger.log_path_not_found(target.path)
            continue

        result = scanner.scan_file(target, run_state)
        run_state = result.run_state
        logger.log_file_result(result)

    logger.log_run_complete(
        {"has_printed_any_match": run_state.has_printed_any_match, "lines_written": printer.lines_written},
        total_time_seconds=time.time() - start,
    )
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the script."""
    parser = build_parser()

    try:
        # options may sit between the pattern and the paths
        args = parser.parse_intermixed_args(argv)
    except UsageError as e:
        return _usage_failure(parser, str(e))

    if args.help:
        print(parser.format_help().rstrip())
        return EXIT_OK
    if args.version:
        print(VERSION_TEXT)
        return EXIT_OK

    try:
        pattern, paths = split_pattern_and_paths(args.terms)
    except ValueError as e:
        return _usage_failure(parser, str(e))

    # Config loading: CLI > config file > defaults
    try:
        cfg = SearchConfig.from_args(args, base=SearchConfig.load(args.config))
    except (ConfigError, AssertionError, OSError) as e:
        error(f"Error: {e}")
        return EXIT_USAGE

    init_logger(cfg, enable_logging=cfg.log_dir is not None)

    return run_search(pattern, paths, cfg)


if __name__ == "__main__":
    sys.exit(main())
