"""Command line interface for querying a trie built from word lists.

Examples::

    retrieval --words apple,apply,ape,ample pattern "a{1}{1}**"
    retrieval --words-file dictionary.txt prefix ap
    retrieval --config words.yaml --with-counter count ap
    retrieval parse "{1[^ok]}x[tnm]{1}"

Exit status is ``0`` on success, ``1`` when a query finds nothing (missing
word, no matches) and ``2`` for usage, configuration and pattern errors.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .api import contains, flat, pattern, prefix, prefix_count
from .config import LOG_LEVELS, ConfigError, RetrievalConfig, build_trie, load_config
from .pattern_parser import PatternError, PatternSyntaxError, parse_pattern
from .tokens import render_tokens
from .trie import TrieVariantError

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retrieval",
        description="Query a trie with exact, prefix and pattern lookups.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON or YAML file providing words, word_files, with_counter and log_level.",
    )
    parser.add_argument(
        "--words",
        type=str,
        default=None,
        help="Comma separated list of words to insert.",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        action="append",
        default=[],
        help="Word list with one word per line. May be repeated.",
    )
    parser.add_argument(
        "--with-counter",
        action="store_true",
        default=None,
        help="Build a count trie (required by the count command).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit results as JSON instead of one item per line.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=list(LOG_LEVELS),
        help="Logging verbosity for diagnostic output.",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    contains_parser = commands.add_parser("contains", help="Check whether a word is stored.")
    contains_parser.add_argument("word")
    prefix_parser = commands.add_parser("prefix", help="List words starting with a prefix.")
    prefix_parser.add_argument("prefix")
    count_parser = commands.add_parser("count", help="Count words starting with a prefix.")
    count_parser.add_argument("prefix", nargs="?", default="")
    pattern_parser = commands.add_parser("pattern", help="List words matching a pattern.")
    pattern_parser.add_argument("pattern")
    commands.add_parser("flat", help="List every stored word.")
    parse_parser = commands.add_parser("parse", help="Show the tokens of a pattern.")
    parse_parser.add_argument("pattern")
    return parser


def _resolve_config(args: argparse.Namespace) -> RetrievalConfig:
    config = load_config(args.config) if args.config is not None else RetrievalConfig()
    words = [word for word in (args.words or "").split(",") if word]
    return config.merge(
        words=words,
        word_files=args.words_file,
        with_counter=args.with_counter,
        log_level=args.log_level,
    )


def _emit(results: object, as_json: bool, stream: TextIO) -> None:
    if as_json:
        stream.write(json.dumps(results, ensure_ascii=False) + "\n")
    elif isinstance(results, list):
        for item in results:
            stream.write(f"{item}\n")
    else:
        stream.write(f"{results}\n")


def _report_pattern_error(error: PatternError, as_json: bool) -> int:
    logger.error("Invalid pattern: %s", error)
    if as_json:
        payload = {
            "error": error.kind.value,
            "group": error.group,
            "column": error.column,
            "position": error.position,
            "unexpected": error.unexpected,
            "expected": error.expected,
            "message": error.message,
        }
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
    else:
        sys.stderr.write(f"{error}\n")
    return EXIT_ERROR


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _resolve_config(args)
    except ConfigError as exc:
        logging.basicConfig(level=logging.WARNING)
        logger.error("Invalid configuration: %s", exc)
        return EXIT_ERROR
    logging.basicConfig(level=getattr(logging, config.log_level))

    out = sys.stdout
    if args.command == "parse":
        try:
            tokens = parse_pattern(args.pattern)
        except PatternSyntaxError as exc:
            return _report_pattern_error(exc.error, args.json)
        if args.json:
            _emit([repr(token) for token in tokens], True, out)
        else:
            for token in tokens:
                out.write(f"{token!r}\n")
            logger.info("Canonical form: %s", render_tokens(tokens))
        return EXIT_OK

    try:
        trie = build_trie(config)
    except ConfigError as exc:
        logger.error("Failed to build trie: %s", exc)
        return EXIT_ERROR
    logger.info("Built %s trie with %d words", trie.kind.value, len(trie))

    results: List[str]
    if args.command == "contains":
        found = bool(contains(trie, args.word))
        _emit(found if args.json else str(found).lower(), args.json, out)
        return EXIT_OK if found else EXIT_EMPTY
    if args.command == "count":
        try:
            total = prefix_count(trie, args.prefix)
        except TrieVariantError as exc:
            logger.error("%s", exc)
            return EXIT_ERROR
        _emit(total, args.json, out)
        return EXIT_OK
    if args.command == "prefix":
        results = prefix(trie, args.prefix)
    elif args.command == "flat":
        results = flat(trie)
    else:
        outcome = pattern(trie, args.pattern)
        if isinstance(outcome, PatternError):
            return _report_pattern_error(outcome, args.json)
        results = outcome

    _emit(results, args.json, out)
    return EXIT_OK if results else EXIT_EMPTY


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
