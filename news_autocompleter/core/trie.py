# trie.py
# Dictionary index: an in-memory prefix tree over a static word list.
# Built once at startup, read-only afterwards, so concurrent readers need no locks.
# To change the vocabulary build a new index and swap the reference.

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from news_autocompleter.utils.logger_utils import log


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    is_word: bool marker to know if this path forms a real word
    """

    __slots__ = ("children", "is_word")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.is_word = False


class DictionaryIndex:
    """
    Case-insensitive prefix index over a fixed vocabulary.
    Use DictionaryIndex.build(words) or DictionaryIndex.from_file(path);
    there are no public mutators.
    """

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    # construction -----------------------------------------------------
    @classmethod
    def build(cls, words: Iterable[str]) -> "DictionaryIndex":
        """
        Build an index from an iterable of words (e.g. lines of a file).
        Each word is trimmed and lowercased; blank entries are skipped.
        Duplicates are harmless.
        """
        index = cls()
        for word in words:
            index._insert(word)
        return index

    @classmethod
    def from_file(cls, path: str) -> "DictionaryIndex":
        """
        Load a one-word-per-line text file.
        A missing or unreadable file is logged and yields an empty index,
        so suggestions can still come from the title store.
        """
        try:
            with log.time_block("dictionary build"):
                with open(path, "r", encoding="utf-8") as f:
                    index = cls.build(f)
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"[DictionaryIndex] could not load word list {path}: {e}")
            return cls()
        log.info(f"[DictionaryIndex] loaded {len(index)} words from {path}")
        return index

    def _insert(self, word: str) -> None:
        word = word.strip().lower()
        if not word:
            return

        node = self._root
        for ch in word:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = TrieNode()
            node = nxt
        if not node.is_word:
            node.is_word = True
            self._size += 1

    # search/traversal ---------------------------------------------------------
    def query(self, prefix: str, limit: int = 10) -> List[str]:
        """
        Return up to `limit` words starting with `prefix` (case-insensitive).
        Depth-first, a word is listed before its longer completions;
        sibling order follows insertion order and is not a ranking.
        """
        if not prefix or limit <= 0:
            return []

        prefix = prefix.lower()
        node = self._root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return []

        out: List[str] = []
        stack: List[Tuple[TrieNode, str]] = [(node, prefix)]
        while stack:
            node, path = stack.pop()
            if node.is_word:
                out.append(path)
                if len(out) >= limit:
                    break
            # reversed so the first child is popped first
            for ch, child in reversed(node.children.items()):
                stack.append((child, path + ch))
        return out

    # convenience -----------------------------------------------------
    def __len__(self) -> int:
        """Number of distinct words."""
        return self._size

    def __contains__(self, word: str) -> bool:
        """Exact (case-insensitive) membership check."""
        node = self._root
        for ch in word.strip().lower():
            node = node.children.get(ch)
            if node is None:
                return False
        return node.is_word
