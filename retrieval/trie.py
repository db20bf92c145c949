"""Persistent prefix trie over Unicode code points.

The trie is the storage layer underneath :mod:`retrieval.api`.  A single node
type covers the three historical variants of the library; the variant is
chosen once when the trie is created and recorded on the :class:`Trie`:

* ``TrieKind.PLAIN`` – end markers are a presence flag.
* ``TrieKind.COUNT`` – every node additionally tracks how many stored words
  pass through it, which makes :meth:`Trie.prefix_count` an ``O(len(prefix))``
  lookup.
* ``TrieKind.ID`` – end markers carry a caller supplied identifier.

Updates never mutate existing nodes.  ``Trie.insert`` copies the nodes on
the insertion path and shares every other subtree with the previous version,
so old and new tries can be read side by side without coordination.  Child
mappings are exposed through :class:`types.MappingProxyType` to keep that
guarantee honest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional

__all__ = [
    "NOT_FOUND",
    "Absent",
    "Trie",
    "TrieKind",
    "TrieNode",
    "TrieVariantError",
    "iter_words",
]

logger = logging.getLogger(__name__)


class Absent(Enum):
    """Sentinel type for "no end marker" and "id not found"."""

    NOT_FOUND = "NOT_FOUND"

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return self.value


NOT_FOUND = Absent.NOT_FOUND


class TrieKind(str, Enum):
    """End-marker payload selected when a trie is created."""

    PLAIN = "plain"
    COUNT = "count"
    ID = "id"


class TrieVariantError(TypeError):
    """Raised when an operation does not apply to the trie's variant."""


_EMPTY_CHILDREN: Mapping[str, "TrieNode"] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class TrieNode:
    """A node inside the trie data structure."""

    children: Mapping[str, "TrieNode"] = field(default_factory=lambda: _EMPTY_CHILDREN)
    mark: object = NOT_FOUND
    count: int = 0

    @property
    def is_terminal(self) -> bool:
        """``True`` when a stored word ends at this node."""

        return self.mark is not NOT_FOUND

    def descend(self, fragment: str) -> Optional["TrieNode"]:
        """Follow *fragment* from this node, ``None`` when the path is missing."""

        node: Optional[TrieNode] = self
        for char in fragment:
            node = node.children.get(char)
            if node is None:
                return None
        return node


_EMPTY_NODE = TrieNode()


@dataclass(frozen=True)
class Trie:
    """Immutable trie value; every insert returns a new ``Trie``."""

    root: TrieNode = _EMPTY_NODE
    kind: TrieKind = TrieKind.PLAIN

    @classmethod
    def empty(cls, kind: TrieKind = TrieKind.PLAIN) -> "Trie":
        return cls(root=_EMPTY_NODE, kind=TrieKind(kind))

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------
    def insert(self, word: str, ident: object = NOT_FOUND) -> "Trie":
        """Return a new trie that also stores *word*.

        Id tries require *ident* and overwrite any id already bound to
        *word*.  Re-inserting a word into a count trie returns ``self`` so
        that subtree counts keep matching the number of distinct words.
        """

        word = _normalize_word(word)
        if self.kind is TrieKind.ID:
            if ident is NOT_FOUND:
                raise TrieVariantError("id tries require an id for every insert")
            mark = ident
        else:
            if ident is not NOT_FOUND:
                raise TrieVariantError(
                    f"{self.kind.value} tries do not accept ids; create the trie with with_id=True"
                )
            mark = True

        counted = self.kind is TrieKind.COUNT
        if counted:
            existing = self.root.descend(word)
            if existing is not None and existing.is_terminal:
                logger.debug("Ignoring duplicate insert of %r into count trie", word)
                return self

        root = _insert(self.root, word, mark, counted)
        return Trie(root=root, kind=self.kind)

    def insert_many(self, words: Iterable[str], ident: object = NOT_FOUND) -> "Trie":
        """Insert every word in *words*, applying the same *ident* to each."""

        trie = self
        for word in words:
            trie = trie.insert(word, ident)
        return trie

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains(self, word: str) -> object:
        """Membership test.

        Plain and count tries answer with a ``bool``.  Id tries answer with
        the stored id, or :data:`NOT_FOUND` when *word* is absent.
        """

        node = self.root.descend(_normalize_word(word))
        if self.kind is TrieKind.ID:
            return NOT_FOUND if node is None else node.mark
        return node is not None and node.is_terminal

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self.root.descend(word)
        return node is not None and node.is_terminal

    def prefix_count(self, prefix: str) -> int:
        """Number of stored words starting with *prefix* (count tries only)."""

        if self.kind is not TrieKind.COUNT:
            raise TrieVariantError("prefix_count requires a trie created with with_counter=True")
        node = self.root.descend(_normalize_word(prefix))
        return 0 if node is None else node.count

    def prefix_words(self, prefix: str) -> List[str]:
        """Return every stored word beginning with *prefix*."""

        prefix = _normalize_word(prefix)
        node = self.root.descend(prefix)
        if node is None:
            return []
        return list(_walk(node, prefix))

    def words(self) -> List[str]:
        """Return every stored word in code-point order."""

        return list(iter_words(self))

    def __len__(self) -> int:
        if self.kind is TrieKind.COUNT:
            return self.root.count
        return sum(1 for _ in iter_words(self))


def iter_words(trie: Trie) -> Iterator[str]:
    """Yield all words stored in *trie* in lexicographical order."""

    yield from _walk(trie.root, "")


def _walk(node: TrieNode, prefix: str) -> Iterator[str]:
    # Explicit stack; children are pushed in reverse so they pop in order.
    stack = [(node, prefix)]
    while stack:
        current, path = stack.pop()
        if current.is_terminal:
            yield path
        for char in sorted(current.children, reverse=True):
            stack.append((current.children[char], path + char))


def _insert(root: TrieNode, word: str, mark: object, counted: bool) -> TrieNode:
    """Copy the path from *root* to the end of *word*; siblings are shared."""

    path: List[TrieNode] = []
    node = root
    for char in word:
        path.append(node)
        node = node.children.get(char, _EMPTY_NODE)

    increment = 1 if counted else 0
    rebuilt = TrieNode(children=node.children, mark=mark, count=node.count + increment)
    for parent, char in zip(reversed(path), reversed(word)):
        updated = dict(parent.children)
        updated[char] = rebuilt
        rebuilt = TrieNode(
            children=MappingProxyType(updated),
            mark=parent.mark,
            count=parent.count + increment,
        )
    return rebuilt


def _normalize_word(word: str) -> str:
    if not isinstance(word, str):
        raise TypeError("word must be a string")
    return word
