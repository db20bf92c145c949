"""Parser for the trie pattern mini-language.

Syntax
------

``*``
    Wildcard, matches any character.
``[...]``
    Inclusion group, matches any character between the brackets.
``[^...]``
    Exclusion group, matches any character not between the brackets.
``{name}``, ``{name[...]}``, ``{name[^...]}``
    Capture group.  The first occurrence of ``name`` binds whichever
    character it matched (optionally restricted by the nested group); every
    later occurrence of the same name only matches that bound character.

Any other character is a literal.  There is no escape syntax, so ``*``,
``[``, ``{`` and ``}`` cannot be matched literally.

Errors are reported through :class:`PatternSyntaxError`, which carries a
structured :class:`PatternError`.  Columns are 1-indexed and count code
points, never encoded bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import FrozenSet, List, Optional, Tuple

from .tokens import (
    WILDCARD,
    Capture,
    CapturedExclusion,
    CapturedInclusion,
    Exclusion,
    Inclusion,
    Literal,
    PatternToken,
    Wildcard,
)

__all__ = [
    "PatternError",
    "PatternErrorKind",
    "PatternSyntaxError",
    "parse_pattern",
]

logger = logging.getLogger(__name__)

GROUP_OPEN = "["
GROUP_CLOSE = "]"
GROUP_NEGATE = "^"
CAPTURE_OPEN = "{"
CAPTURE_CLOSE = "}"

INCLUSION = "inclusion"
EXCLUSION = "exclusion"
CAPTURE = "capture"

_FORBIDDEN_IN_CHARSET = frozenset({WILDCARD, GROUP_OPEN, CAPTURE_OPEN, CAPTURE_CLOSE})


class PatternErrorKind(str, Enum):
    """Category of a pattern syntax error."""

    DANGLING_GROUP = "dangling_group"
    MALFORMED_CAPTURE = "malformed_capture"
    MALFORMED_GROUP = "malformed_group"


@dataclass(frozen=True)
class PatternError:
    """Structured description of why a pattern failed to parse.

    ``column`` always points at the opening delimiter of the offending group.
    ``position`` points at the offending character when there is one.
    """

    kind: PatternErrorKind
    group: str
    column: int
    expected: Optional[str] = None
    position: Optional[int] = None
    unexpected: Optional[str] = None

    @property
    def message(self) -> str:
        if self.kind is PatternErrorKind.DANGLING_GROUP:
            return (
                f"Dangling group ({self.group}) starting at column {self.column}, "
                f"expecting {self.expected}"
            )
        if self.kind is PatternErrorKind.MALFORMED_CAPTURE:
            if self.position is None:
                return f"Malformed capture starting at column {self.column}, expecting a name"
            return (
                f"Malformed capture starting at column {self.column}, "
                f"expecting {self.expected} at column {self.position}"
            )
        if self.unexpected is None:
            return (
                f"Malformed group ({self.group}) starting at column {self.column}, "
                "expecting at least one character"
            )
        return (
            f"Malformed group ({self.group}) starting at column {self.column}, "
            f"unexpected {self.unexpected} at column {self.position}"
        )

    def __str__(self) -> str:
        return self.message


class PatternSyntaxError(ValueError):
    """Raised by :func:`parse_pattern` for malformed patterns."""

    def __init__(self, error: PatternError) -> None:
        super().__init__(error.message)
        self.error = error


class _Scanner:
    """Cursor over the code points of a pattern."""

    __slots__ = ("_text", "_index")

    def __init__(self, text: str) -> None:
        self._text = text
        self._index = 0

    @property
    def column(self) -> int:
        return self._index + 1

    def at_end(self) -> bool:
        return self._index >= len(self._text)

    def peek(self) -> str:
        return self._text[self._index]

    def advance(self) -> str:
        char = self._text[self._index]
        self._index += 1
        return char


def parse_pattern(pattern: str) -> List[PatternToken]:
    """Parse *pattern* into a list of tokens.

    Raises
    ------
    PatternSyntaxError
        When a group is left open, a charset is empty or contains a
        forbidden character, or a capture is unnamed or has trailing
        content after its nested group.
    TypeError
        When *pattern* is not a string.
    """

    if not isinstance(pattern, str):
        raise TypeError("pattern must be a string")

    scanner = _Scanner(pattern)
    tokens: List[PatternToken] = []
    while not scanner.at_end():
        char = scanner.peek()
        if char == WILDCARD:
            scanner.advance()
            tokens.append(Wildcard())
        elif char == GROUP_OPEN:
            negated, chars = _parse_group(scanner)
            tokens.append(Exclusion(chars) if negated else Inclusion(chars))
        elif char == CAPTURE_OPEN:
            tokens.append(_parse_capture(scanner))
        else:
            tokens.append(Literal(scanner.advance()))

    logger.debug("Parsed pattern %r into %d tokens", pattern, len(tokens))
    return tokens


def _parse_group(scanner: _Scanner) -> Tuple[bool, FrozenSet[str]]:
    start = scanner.column
    scanner.advance()
    negated = not scanner.at_end() and scanner.peek() == GROUP_NEGATE
    if negated:
        scanner.advance()
    group = EXCLUSION if negated else INCLUSION

    chars = set()
    while not scanner.at_end():
        position = scanner.column
        char = scanner.advance()
        if char == GROUP_CLOSE:
            if not chars:
                raise PatternSyntaxError(
                    PatternError(PatternErrorKind.MALFORMED_GROUP, group, start)
                )
            return negated, frozenset(chars)
        if char in _FORBIDDEN_IN_CHARSET:
            raise PatternSyntaxError(
                PatternError(
                    PatternErrorKind.MALFORMED_GROUP,
                    group,
                    start,
                    position=position,
                    unexpected=char,
                )
            )
        chars.add(char)

    raise PatternSyntaxError(
        PatternError(PatternErrorKind.DANGLING_GROUP, group, start, expected=GROUP_CLOSE)
    )


def _parse_capture(scanner: _Scanner) -> PatternToken:
    start = scanner.column
    scanner.advance()

    name_chars: List[str] = []
    while not scanner.at_end():
        char = scanner.peek()
        if char == CAPTURE_CLOSE:
            scanner.advance()
            return Capture(_capture_name(name_chars, start))
        if char == GROUP_OPEN:
            name = _capture_name(name_chars, start)
            negated, chars = _parse_group(scanner)
            if scanner.at_end():
                break
            position = scanner.column
            if scanner.advance() != CAPTURE_CLOSE:
                raise PatternSyntaxError(
                    PatternError(
                        PatternErrorKind.MALFORMED_CAPTURE,
                        CAPTURE,
                        start,
                        expected=CAPTURE_CLOSE,
                        position=position,
                    )
                )
            if negated:
                return CapturedExclusion(name, chars)
            return CapturedInclusion(name, chars)
        if char == CAPTURE_OPEN:
            raise PatternSyntaxError(
                PatternError(
                    PatternErrorKind.MALFORMED_CAPTURE,
                    CAPTURE,
                    start,
                    expected=CAPTURE_CLOSE,
                    position=scanner.column,
                )
            )
        name_chars.append(scanner.advance())

    raise PatternSyntaxError(
        PatternError(PatternErrorKind.DANGLING_GROUP, CAPTURE, start, expected=CAPTURE_CLOSE)
    )


def _capture_name(name_chars: List[str], start: int) -> str:
    if not name_chars:
        raise PatternSyntaxError(
            PatternError(PatternErrorKind.MALFORMED_CAPTURE, CAPTURE, start)
        )
    return "".join(name_chars)
