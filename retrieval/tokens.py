"""Typed tokens produced by :mod:`retrieval.pattern_parser`.

A parsed pattern is a flat sequence of match instructions, one per code
point of the words it can match.  Every token answers ``admits(char)`` so the
matcher can filter candidate children without knowing which concrete token
it holds; capture tokens additionally carry the ``name`` they bind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Union

__all__ = [
    "Capture",
    "CapturedExclusion",
    "CapturedInclusion",
    "Exclusion",
    "Inclusion",
    "Literal",
    "PatternToken",
    "Wildcard",
    "is_capture",
    "render_tokens",
]

WILDCARD = "*"


@dataclass(frozen=True)
class Literal:
    """Matches exactly one code point."""

    char: str

    def admits(self, char: str) -> bool:
        return char == self.char

    def render(self) -> str:
        return self.char


@dataclass(frozen=True)
class Wildcard:
    """Matches any single code point."""

    def admits(self, char: str) -> bool:
        return True

    def render(self) -> str:
        return WILDCARD


@dataclass(frozen=True)
class Inclusion:
    """Matches any code point in ``chars``."""

    chars: FrozenSet[str]

    def admits(self, char: str) -> bool:
        return char in self.chars

    def render(self) -> str:
        return f"[{''.join(sorted(self.chars))}]"


@dataclass(frozen=True)
class Exclusion:
    """Matches any code point not in ``chars``."""

    chars: FrozenSet[str]

    def admits(self, char: str) -> bool:
        return char not in self.chars

    def render(self) -> str:
        return f"[^{''.join(sorted(self.chars))}]"


@dataclass(frozen=True)
class _CaptureToken:
    name: str


@dataclass(frozen=True)
class Capture(_CaptureToken):
    """Binds ``name`` to any code point on first use, then matches it literally."""

    def admits(self, char: str) -> bool:
        return True

    def render(self) -> str:
        return f"{{{self.name}}}"


@dataclass(frozen=True)
class CapturedInclusion(_CaptureToken):
    """Capture whose first binding must come from ``chars``."""

    chars: FrozenSet[str]

    def admits(self, char: str) -> bool:
        return char in self.chars

    def render(self) -> str:
        return f"{{{self.name}[{''.join(sorted(self.chars))}]}}"


@dataclass(frozen=True)
class CapturedExclusion(_CaptureToken):
    """Capture whose first binding must avoid ``chars``."""

    chars: FrozenSet[str]

    def admits(self, char: str) -> bool:
        return char not in self.chars

    def render(self) -> str:
        return f"{{{self.name}[^{''.join(sorted(self.chars))}]}}"


PatternToken = Union[
    Literal,
    Wildcard,
    Inclusion,
    Exclusion,
    Capture,
    CapturedInclusion,
    CapturedExclusion,
]


def is_capture(token: PatternToken) -> bool:
    """Return ``True`` for the three capture token types."""

    return isinstance(token, _CaptureToken)


def render_tokens(tokens: Iterable[PatternToken]) -> str:
    """Render *tokens* back into pattern syntax.

    Charsets are emitted in code-point order, so the output is a canonical
    form of the pattern the tokens were parsed from rather than a byte for
    byte copy.
    """

    return "".join(token.render() for token in tokens)
