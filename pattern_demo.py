"""Command line demonstration of the trie pattern language.

Running the module builds a trie from a small sample vocabulary and prints
the result of each documented pattern example: wildcards, inclusion and
exclusion groups, named captures, and a malformed pattern that reports its
error column.

The script only orchestrates pre-defined demo inputs; parsing and matching
live in :mod:`retrieval`.  Each case carries its expected outcome and a
mismatch raises ``RuntimeError`` so the demo doubles as a smoke test.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Union

from retrieval import PatternError, Trie, construct, pattern

SAMPLE_WORDS = ("apple", "apply", "ape", "ample", "zebra", "house")


@dataclass(frozen=True)
class DemoCase:
    """A pattern together with the outcome it is documented to produce."""

    query: str
    expected: Union[Sequence[str], str]

    def run(self, trie: Trie) -> Union[List[str], PatternError]:
        return pattern(trie, self.query)


def _iter_demo_cases() -> Iterator[DemoCase]:
    """Yield the built-in demonstration cases."""

    yield DemoCase(query="a{1}{1}**", expected=["apple", "apply"])
    yield DemoCase(query="*{1[^p]}{1}**", expected=[])
    yield DemoCase(query="[hz]****", expected=["house", "zebra"])
    yield DemoCase(query="[hz]***[^ea]", expected=[])
    yield DemoCase(
        query="[hz]***[^ea",
        expected="Dangling group (exclusion) starting at column 8, expecting ]",
    )


def _format_report(case: DemoCase, outcome: Union[List[str], PatternError]) -> str:
    """Return the output line for *case*, checking it against expectations."""

    if isinstance(outcome, PatternError):
        actual: Union[List[str], str] = str(outcome)
    else:
        actual = outcome

    expected = case.expected if isinstance(case.expected, str) else list(case.expected)
    if actual != expected:
        raise RuntimeError(
            "Demo case expectation mismatch:"
            f" {case.query} expected {expected!r}"
            f" but received {actual!r}"
        )

    if isinstance(actual, str):
        return f"{case.query} -> error: {actual}"
    return f"{case.query} -> {', '.join(actual) if actual else '<no matches>'}"


def main() -> None:
    """Execute the demonstration flow for all configured cases."""

    trie = construct(SAMPLE_WORDS)
    print(f"Vocabulary: {' '.join(SAMPLE_WORDS)}")
    for case in _iter_demo_cases():
        print(_format_report(case, case.run(trie)))


if __name__ == "__main__":
    main()
