"""Persistent tries with prefix queries and a capture-aware pattern language."""

from .api import (
    benchmark,
    construct,
    contains,
    flat,
    insert,
    iter_pattern,
    pattern,
    prefix,
    prefix_count,
)
from .matcher import iter_matches, match_tokens
from .pattern_parser import (
    PatternError,
    PatternErrorKind,
    PatternSyntaxError,
    parse_pattern,
)
from .tokens import (
    Capture,
    CapturedExclusion,
    CapturedInclusion,
    Exclusion,
    Inclusion,
    Literal,
    PatternToken,
    Wildcard,
    render_tokens,
)
from .trie import NOT_FOUND, Trie, TrieKind, TrieNode, TrieVariantError, iter_words

__all__ = [
    "Capture",
    "CapturedExclusion",
    "CapturedInclusion",
    "Exclusion",
    "Inclusion",
    "Literal",
    "NOT_FOUND",
    "PatternError",
    "PatternErrorKind",
    "PatternSyntaxError",
    "PatternToken",
    "Trie",
    "TrieKind",
    "TrieNode",
    "TrieVariantError",
    "Wildcard",
    "benchmark",
    "construct",
    "contains",
    "flat",
    "insert",
    "iter_matches",
    "iter_pattern",
    "iter_words",
    "match_tokens",
    "parse_pattern",
    "pattern",
    "prefix",
    "prefix_count",
    "render_tokens",
]
