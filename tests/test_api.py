"""Tests for the public facade in :mod:`retrieval.api`."""

from __future__ import annotations

import pytest

import retrieval
from retrieval import (
    NOT_FOUND,
    PatternError,
    PatternErrorKind,
    PatternSyntaxError,
    Trie,
    TrieKind,
    TrieVariantError,
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

WORDS = ["apple", "apply", "ape", "ample"]


def test_construct_empty_trie() -> None:
    trie = construct()
    assert trie == Trie.empty()
    assert trie.kind is TrieKind.PLAIN
    assert flat(trie) == []


def test_construct_accepts_single_word() -> None:
    trie = construct("apple")
    assert contains(trie, "apple") is True
    assert flat(trie) == ["apple"]


def test_insert_word_or_words() -> None:
    trie = construct(WORDS)
    extended = insert(trie, ["zebra", "corgi"])
    extended = insert(extended, "house")

    assert sorted(flat(extended)) == sorted(WORDS + ["zebra", "corgi", "house"])
    assert sorted(flat(trie)) == sorted(WORDS)


def test_contains() -> None:
    trie = construct(WORDS)
    assert contains(trie, "apple") is True
    assert contains(trie, "zebra") is False


def test_flat_returns_exactly_inserted_words() -> None:
    result = flat(construct(WORDS))
    assert sorted(result) == sorted(WORDS)
    assert len(result) == len(WORDS)


def test_prefix() -> None:
    trie = construct(WORDS)
    assert prefix(trie, "ap") == ["ape", "apple", "apply"]
    assert prefix(trie, "z") == []
    assert sorted(prefix(trie, "")) == sorted(WORDS)


def test_prefix_count_with_counter() -> None:
    trie = construct(WORDS, with_counter=True)
    assert prefix_count(trie, "ap") == 3
    assert prefix_count(trie, "am") == 1
    assert prefix_count(trie, "") == 4
    assert prefix_count(trie, "xxx") == 0
    assert sorted(prefix(trie, "a")) == sorted(WORDS)


def test_prefix_count_requires_counter() -> None:
    with pytest.raises(TrieVariantError):
        prefix_count(construct(WORDS), "a")


def test_construct_with_id() -> None:
    trie = construct(WORDS, with_id=True, ident=42)
    trie = insert(trie, "zebra", "z-1")

    assert contains(trie, "apple") == 42
    assert contains(trie, "zebra") == "z-1"
    assert contains(trie, "app") is NOT_FOUND
    assert contains(insert(construct(with_id=True), "nil", None), "nil") is None


def test_construct_with_id_requires_ident_for_words() -> None:
    with pytest.raises(TrieVariantError):
        construct(WORDS, with_id=True)
    assert flat(construct(with_id=True)) == []


def test_construct_rejects_conflicting_variants() -> None:
    with pytest.raises(TrieVariantError):
        construct(WORDS, with_counter=True, with_id=True)


def test_pattern_documented_examples() -> None:
    trie = construct(["apple", "apply", "zebra", "house"])
    assert pattern(construct(WORDS), "a{1}{1}**") == ["apple", "apply"]
    assert pattern(construct(WORDS), "*{1[^p]}{1}**") == []
    assert pattern(trie, "[hz]****") == ["house", "zebra"]
    assert pattern(trie, "[hz]***[^ea]") == []


def test_pattern_returns_error_value_instead_of_raising() -> None:
    result = pattern(construct(["apple", "zebra"]), "[hz]***[^ea")

    assert isinstance(result, PatternError)
    assert result.kind is PatternErrorKind.DANGLING_GROUP
    assert result.column == 8
    assert str(result) == "Dangling group (exclusion) starting at column 8, expecting ]"


def test_literal_pattern_behaves_like_membership() -> None:
    trie = construct(WORDS)
    for word in WORDS:
        assert pattern(trie, word) == [word]
    assert pattern(trie, "zebra") == []


def test_pattern_on_count_and_id_tries() -> None:
    assert pattern(construct(WORDS, with_counter=True), "*{1}{1}**") == ["apple", "apply"]
    assert pattern(construct(WORDS, with_id=True, ident=1), "am*le") == ["ample"]


def test_iter_pattern_raises_on_invalid_pattern() -> None:
    trie = construct(WORDS)
    with pytest.raises(PatternSyntaxError):
        iter_pattern(trie, "{}")
    assert list(iter_pattern(trie, "ap*")) == ["ape"]


def test_benchmark_handles_empty_iterable() -> None:
    assert benchmark(construct(["network"]), []) == 0.0


def test_benchmark_measures_average_latency(monkeypatch: pytest.MonkeyPatch) -> None:
    trie = construct(["alpha", "beta", "gamma"])

    timings: list[float] = [10.0, 11.0]

    def fake_perf_counter() -> float:
        return timings.pop(0)

    monkeypatch.setattr("retrieval.api.time.perf_counter", fake_perf_counter)

    duration = benchmark(trie, ["a****", "[bg]*"])
    assert duration == pytest.approx(0.5)


def test_package_exports_public_api() -> None:
    for name in retrieval.__all__:
        assert hasattr(retrieval, name)
