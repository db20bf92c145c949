"""Tests for the persistent trie store."""

from __future__ import annotations

import pytest

from retrieval.trie import NOT_FOUND, Trie, TrieKind, TrieNode, TrieVariantError, iter_words

WORDS = ["apple", "apply", "ape", "ample"]


def _assert_counts_consistent(node: TrieNode) -> None:
    expected = sum(child.count for child in node.children.values())
    expected += 1 if node.is_terminal else 0
    assert node.count == expected
    for child in node.children.values():
        _assert_counts_consistent(child)


def test_insert_and_contains_round_trip() -> None:
    trie = Trie.empty().insert_many(WORDS)

    for word in WORDS:
        assert trie.contains(word) is True
        assert word in trie

    assert trie.contains("app") is False
    assert trie.contains("apples") is False
    assert trie.contains("zebra") is False
    assert len(trie) == len(WORDS)


def test_insert_returns_new_version_and_shares_untouched_subtrees() -> None:
    original = Trie.empty().insert_many(["apple", "zebra"])
    updated = original.insert("apply")

    assert updated is not original
    assert "apply" in updated
    assert "apply" not in original
    assert original.words() == ["apple", "zebra"]
    # Only the "a" branch is on the insertion path.
    assert updated.root.children["z"] is original.root.children["z"]
    assert updated.root.children["a"] is not original.root.children["a"]


def test_child_mappings_are_read_only() -> None:
    trie = Trie.empty().insert("ab")
    with pytest.raises(TypeError):
        trie.root.children["x"] = TrieNode()  # type: ignore[index]


def test_empty_word_marks_root() -> None:
    trie = Trie.empty().insert("")
    assert trie.contains("") is True
    assert trie.words() == [""]


def test_words_are_enumerated_in_code_point_order() -> None:
    trie = Trie.empty().insert_many(["b", "abc", "ab", "a"])
    assert trie.words() == ["a", "ab", "abc", "b"]
    assert list(iter_words(trie)) == trie.words()


def test_iter_words_produces_independent_sequences() -> None:
    trie = Trie.empty().insert_many(WORDS)
    first = iter_words(trie)
    next(first)
    assert sorted(iter_words(trie)) == sorted(WORDS)


def test_prefix_words() -> None:
    trie = Trie.empty().insert_many(WORDS)
    assert trie.prefix_words("ap") == ["ape", "apple", "apply"]
    assert trie.prefix_words("apple") == ["apple"]
    assert trie.prefix_words("z") == []
    assert sorted(trie.prefix_words("")) == sorted(WORDS)


def test_count_trie_tracks_subtree_counts() -> None:
    trie = Trie.empty(TrieKind.COUNT).insert_many(WORDS)

    assert trie.prefix_count("ap") == 3
    assert trie.prefix_count("am") == 1
    assert trie.prefix_count("") == 4
    assert trie.prefix_count("xxx") == 0
    _assert_counts_consistent(trie.root)


def test_count_trie_ignores_duplicate_inserts() -> None:
    trie = Trie.empty(TrieKind.COUNT).insert_many(["app", "apple", "app"])

    assert trie.prefix_count("") == 2
    assert trie.prefix_count("app") == 2
    assert len(trie) == 2
    _assert_counts_consistent(trie.root)


def test_count_trie_prefix_count_matches_prefix_words() -> None:
    trie = Trie.empty(TrieKind.COUNT).insert_many(WORDS + ["a", "amp"])
    for fragment in ["", "a", "ap", "app", "am", "amp", "ample", "b"]:
        assert trie.prefix_count(fragment) == len(trie.prefix_words(fragment))


def test_prefix_count_requires_count_trie() -> None:
    with pytest.raises(TrieVariantError):
        Trie.empty().insert("apple").prefix_count("a")


def test_id_trie_returns_ids_and_not_found() -> None:
    trie = Trie.empty(TrieKind.ID).insert("apple", 0).insert("ape", "x")

    assert trie.contains("apple") == 0
    assert trie.contains("ape") == "x"
    assert trie.contains("app") is NOT_FOUND
    assert trie.contains("zebra") is NOT_FOUND
    assert "apple" in trie
    assert "app" not in trie


def test_id_trie_last_insert_wins() -> None:
    trie = Trie.empty(TrieKind.ID).insert("apple", 1).insert("apple", 2)
    assert trie.contains("apple") == 2
    assert trie.words() == ["apple"]


def test_id_trie_requires_id() -> None:
    with pytest.raises(TrieVariantError):
        Trie.empty(TrieKind.ID).insert("apple")


def test_plain_trie_rejects_id() -> None:
    with pytest.raises(TrieVariantError):
        Trie.empty().insert("apple", 7)


def test_insert_rejects_non_string_inputs() -> None:
    trie = Trie.empty()
    with pytest.raises(TypeError):
        trie.insert(123)  # type: ignore[arg-type]
    assert 123 not in trie


def test_long_words_do_not_exhaust_the_stack() -> None:
    long_word = "a" * 5000
    trie = Trie.empty(TrieKind.COUNT).insert_many([long_word, long_word[:-1] + "b", "ab"])

    assert trie.contains(long_word) is True
    assert trie.contains(long_word[:-1]) is False
    assert trie.words() == [long_word, long_word[:-1] + "b", "ab"]
    assert trie.prefix_words("a" * 4000) == [long_word, long_word[:-1] + "b"]
    assert trie.prefix_count("a" * 4999) == 2
    assert trie.prefix_count("a") == 3
