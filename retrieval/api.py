"""Functional facade over the trie, parser and matcher.

Every function takes a :class:`~retrieval.trie.Trie` value and, for updates,
returns a new one::

    >>> trie = construct(["apple", "apply", "ape", "ample"])
    >>> prefix(trie, "ap")
    ['ape', 'apple', 'apply']
    >>> pattern(trie, "a{1}{1}**")
    ['apple', 'apply']
    >>> str(pattern(trie, "[hz]***[^ea"))
    'Dangling group (exclusion) starting at column 8, expecting ]'

``pattern`` returns parse failures as :class:`PatternError` values instead of
raising, so callers branch on the result type.  ``iter_pattern`` is the
lazy variant and raises :class:`PatternSyntaxError` up front.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Iterator, List, Sequence, Union

from .matcher import iter_matches, match_tokens
from .pattern_parser import PatternError, PatternSyntaxError, parse_pattern
from .trie import NOT_FOUND, Trie, TrieKind, TrieVariantError

__all__ = [
    "benchmark",
    "construct",
    "contains",
    "flat",
    "insert",
    "iter_pattern",
    "pattern",
    "prefix",
    "prefix_count",
]

logger = logging.getLogger(__name__)

Words = Union[str, Iterable[str]]


def construct(
    words: Words = (),
    *,
    with_counter: bool = False,
    with_id: bool = False,
    ident: object = NOT_FOUND,
) -> Trie:
    """Create a trie, optionally populated with *words*.

    ``with_counter`` selects the count variant (enables :func:`prefix_count`),
    ``with_id`` the id variant (every word is stored with *ident*).  A single
    string is treated as one word.
    """

    if with_counter and with_id:
        raise TrieVariantError("with_counter and with_id are mutually exclusive")
    if with_counter:
        kind = TrieKind.COUNT
    elif with_id:
        kind = TrieKind.ID
    else:
        kind = TrieKind.PLAIN
    return insert(Trie.empty(kind), words, ident)


def insert(trie: Trie, words: Words, ident: object = NOT_FOUND) -> Trie:
    """Return *trie* with *words* (a string or an iterable of strings) added."""

    if isinstance(words, str):
        return trie.insert(words, ident)
    return trie.insert_many(words, ident)


def contains(trie: Trie, word: str) -> object:
    """``bool`` membership, or the stored id (``NOT_FOUND``) for id tries."""

    return trie.contains(word)


def prefix(trie: Trie, fragment: str) -> List[str]:
    """Collect every stored word that begins with *fragment*."""

    return trie.prefix_words(fragment)


def prefix_count(trie: Trie, fragment: str) -> int:
    """Number of stored words beginning with *fragment* (count tries only)."""

    return trie.prefix_count(fragment)


def flat(trie: Trie) -> List[str]:
    """Return every stored word."""

    return trie.words()


def pattern(trie: Trie, query: str) -> Union[List[str], PatternError]:
    """Collect every stored word matching *query*, or the parse error."""

    try:
        tokens = parse_pattern(query)
    except PatternSyntaxError as exc:
        logger.debug("Rejected pattern %r: %s", query, exc)
        return exc.error
    return match_tokens(trie.root, tokens)


def iter_pattern(trie: Trie, query: str) -> Iterator[str]:
    """Lazily yield words matching *query*.

    The pattern is parsed before the iterator is returned, so a
    :class:`PatternSyntaxError` surfaces at call time rather than on the
    first ``next``.
    """

    tokens = parse_pattern(query)
    return iter_matches(trie.root, tokens)


def benchmark(trie: Trie, queries: Iterable[str]) -> float:
    """Return the average :func:`pattern` latency for *queries* in seconds.

    The iterable is consumed exactly once and ``0.0`` is returned when no
    queries are supplied.  Time measurement uses :func:`time.perf_counter`.
    """

    query_list: Sequence[str] = list(queries)
    if not query_list:
        return 0.0

    start = time.perf_counter()
    for query in query_list:
        pattern(trie, query)
    elapsed = time.perf_counter() - start
    return elapsed / len(query_list)
