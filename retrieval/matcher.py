"""Capture-aware backtracking matcher for parsed patterns.

The search walks the trie one token at a time.  Each branch owns its own
capture bindings: binding a name copies the mapping for that branch only, so
sibling branches never observe each other's choices and nothing needs to be
restored on backtrack.  Children are visited in code-point order, which
makes the results come out sorted.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Sequence, Tuple

from .tokens import Literal, PatternToken, is_capture
from .trie import TrieNode

__all__ = ["iter_matches", "match_tokens"]

logger = logging.getLogger(__name__)

Captures = Dict[str, str]


def iter_matches(root: TrieNode, tokens: Sequence[PatternToken]) -> Iterator[str]:
    """Lazily yield every stored word under *root* matched by *tokens*.

    The generator can be abandoned at any point; no state outlives it.
    """

    yield from _search(root, tuple(tokens))


def match_tokens(root: TrieNode, tokens: Sequence[PatternToken]) -> List[str]:
    """Return every stored word under *root* matched by *tokens*."""

    matches = list(iter_matches(root, tokens))
    logger.debug("Matched %d words against %d tokens", len(matches), len(tokens))
    return matches


def _search(root: TrieNode, tokens: Tuple[PatternToken, ...]) -> Iterator[str]:
    # Each stack entry is one live branch: (node, token index, captures, path).
    # Candidates are pushed in reverse so they pop in code-point order.
    stack: List[Tuple[TrieNode, int, Captures, str]] = [(root, 0, {}, "")]
    while stack:
        node, index, captures, path = stack.pop()
        if index == len(tokens):
            if node.is_terminal:
                yield path
            continue

        token = tokens[index]
        capturing = is_capture(token)

        if isinstance(token, Literal):
            fixed = token.char
        elif capturing and token.name in captures:
            # Later occurrences ignore any charset attached to the name.
            fixed = captures[token.name]
        else:
            fixed = None

        if fixed is not None:
            child = node.children.get(fixed)
            if child is not None:
                stack.append((child, index + 1, captures, path + fixed))
            continue

        for char in sorted(node.children, reverse=True):
            if not token.admits(char):
                continue
            branch = {**captures, token.name: char} if capturing else captures
            stack.append((node.children[char], index + 1, branch, path + char))
