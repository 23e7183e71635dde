# tests/test_trie.py
# unit tests for the DictionaryIndex prefix tree

import pytest

from news_autocompleter.core.trie import DictionaryIndex

WORDS = ["apple", "application", "apply"]


@pytest.fixture
def index():
    return DictionaryIndex.build(WORDS)


def test_query_returns_all_completions(index):
    assert set(index.query("app", 10)) == set(WORDS)
    assert len(index.query("app", 10)) == 3


def test_query_respects_limit(index):
    out = index.query("appl", 2)
    assert len(out) == 2
    assert set(out) <= set(WORDS)


@pytest.mark.parametrize("n", [0, 1, 2, 3, 50])
def test_query_never_exceeds_limit(index, n):
    assert len(index.query("a", n)) <= n


def test_negative_limit_is_empty(index):
    assert index.query("app", -1) == []


def test_every_inserted_word_is_found(index):
    for w in WORDS:
        assert w in index.query(w, 1)


def test_absent_prefix_is_empty(index):
    assert index.query("xyz", 10) == []
    assert index.query("applz", 10) == []


def test_empty_prefix_is_empty(index):
    assert index.query("", 10) == []


def test_case_insensitive():
    idx = DictionaryIndex.build(["Apple", "BANANA"])
    assert idx.query("APP", 5) == ["apple"]
    assert idx.query("bAn", 5) == ["banana"]
    assert "Banana" in idx


def test_shorter_word_listed_before_its_extensions():
    idx = DictionaryIndex.build(["apples", "app", "apple"])
    out = idx.query("app", 10)
    assert out.index("app") < out.index("apple") < out.index("apples")


def test_blank_and_padded_lines():
    idx = DictionaryIndex.build(["  cat \n", "", "\n", "   "])
    assert len(idx) == 1
    assert idx.query("ca", 5) == ["cat"]


def test_duplicate_insert_is_idempotent():
    idx = DictionaryIndex.build(["news", "news", "NEWS"])
    assert len(idx) == 1
    assert idx.query("new", 10) == ["news"]


def test_rebuild_gives_same_results():
    a = DictionaryIndex.build(WORDS + ["cat", "catalog"])
    b = DictionaryIndex.build(WORDS + ["cat", "catalog"])
    for p in ["a", "app", "appl", "c", "cat", "catalog", "z"]:
        assert set(a.query(p, 10)) == set(b.query(p, 10))


def test_results_are_fresh_lists(index):
    first = index.query("app", 10)
    first.append("junk")
    assert "junk" not in index.query("app", 10)


def test_very_long_word():
    word = "a" * 5000
    idx = DictionaryIndex.build([word])
    assert idx.query("aaa", 1) == [word]
    assert word in idx


def test_membership_needs_full_word(index):
    assert "apple" in index
    assert "app" not in index
    assert "" not in index


def test_from_file(words_file):
    idx = DictionaryIndex.from_file(str(words_file))
    assert len(idx) == 4
    assert set(idx.query("app", 10)) == set(WORDS)


def test_from_missing_file_gives_empty_index(tmp_path):
    idx = DictionaryIndex.from_file(str(tmp_path / "nope.txt"))
    assert len(idx) == 0
    assert idx.query("a", 10) == []


def test_packaged_word_list_loads():
    from news_autocompleter.utils.config_manager import DEFAULT_WORD_LIST

    idx = DictionaryIndex.from_file(DEFAULT_WORD_LIST)
    assert len(idx) > 100
    assert "election" in idx
