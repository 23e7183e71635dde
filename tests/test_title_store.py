# tests/test_title_store.py
import re
from unittest.mock import MagicMock

import pytest
from bson.errors import InvalidBSON
from pymongo.errors import ServerSelectionTimeoutError

from news_autocompleter.core.title_store import (
    InMemoryTitleStore,
    MongoTitleStore,
    TitleStoreError,
)


def mock_collection(docs):
    """pymongo-like collection whose find().limit().max_time_ms() yields `docs`."""
    coll = MagicMock()
    coll.find.return_value.limit.return_value.max_time_ms.return_value = iter(docs)
    return coll


# in-memory ------------------------------------------------------------------

def test_memory_store_prefix_is_case_insensitive():
    store = InMemoryTitleStore(["Catalog News", "cats at home", "Dog days"])
    assert store.find_prefix("CAT", 5) == ["Catalog News", "cats at home"]


def test_memory_store_limit_and_distinct():
    store = InMemoryTitleStore(["News A", "News A", "News B", "News C"])
    assert store.find_prefix("news", 2) == ["News A", "News B"]


def test_memory_store_empty_prefix():
    assert InMemoryTitleStore(["x"]).find_prefix("", 5) == []


def test_memory_store_from_file(titles_file):
    store = InMemoryTitleStore.from_file(str(titles_file))
    assert store.find_prefix("cat", 5) == ["Catalog News"]


# mongo ------------------------------------------------------------------

def test_mongo_query_shape():
    coll = mock_collection([{"title": "Catalog News"}])
    store = MongoTitleStore(coll, max_time_ms=750)

    assert store.find_prefix("cat", 5) == ["Catalog News"]

    coll.find.assert_called_once_with(
        {"title": {"$regex": "^cat", "$options": "i"}},
        {"title": 1, "_id": 0},
    )
    coll.find.return_value.limit.assert_called_once_with(5)
    coll.find.return_value.limit.return_value.max_time_ms.assert_called_once_with(750)


def test_mongo_prefix_is_escaped():
    store = MongoTitleStore(MagicMock())
    pattern = store.query_filter("c++ (beta")["title"]["$regex"]
    assert re.match(pattern, "C++ (beta) released", re.I)
    assert not re.match(pattern, "ccc (beta")


def test_mongo_duplicates_removed():
    coll = mock_collection([{"title": "World Cup"}, {"title": "World Cup"}, {"title": "World news"}])
    assert MongoTitleStore(coll).find_prefix("wor", 5) == ["World Cup", "World news"]


def test_mongo_error_becomes_title_store_error():
    coll = MagicMock()
    coll.find.side_effect = ServerSelectionTimeoutError("no servers")
    with pytest.raises(TitleStoreError):
        MongoTitleStore(coll).find_prefix("cat", 5)


def test_mongo_malformed_document():
    coll = mock_collection([{"headline": "no title here"}])
    with pytest.raises(TitleStoreError):
        MongoTitleStore(coll).find_prefix("no", 5)


def test_mongo_empty_prefix_skips_query():
    coll = MagicMock()
    assert MongoTitleStore(coll).find_prefix("", 5) == []
    coll.find.assert_not_called()


def test_mongo_close_closes_client():
    client = MagicMock()
    store = MongoTitleStore(MagicMock(), client=client)
    store.close()
    store.close()
    client.close.assert_called_once()


def test_mongo_from_uri_uses_default_database():
    store = MongoTitleStore.from_uri("mongodb://localhost:27017/testnews", collection="news", timeout_s=0.2)
    try:
        assert store.collection.name == "news"
        assert store.collection.database.name == "testnews"
        assert store.max_time_ms == 200
    finally:
        store.close()


def test_mongo_bson_decode_error_becomes_title_store_error():
    coll = MagicMock()
    coll.find.return_value.limit.return_value.max_time_ms.side_effect = InvalidBSON("bad")
    with pytest.raises(TitleStoreError):
        MongoTitleStore(coll).find_prefix("cat", 5)


def test_merger_survives_corrupt_mongo_document():
    from news_autocompleter.core.merger import SuggestionMerger
    from news_autocompleter.core.trie import DictionaryIndex

    coll = MagicMock()
    coll.find.return_value.limit.return_value.max_time_ms.side_effect = InvalidBSON("bad")
    m = SuggestionMerger(DictionaryIndex.build(["cat"]), MongoTitleStore(coll))
    try:
        assert m.suggest("cat") == ["cat"]
    finally:
        m.close()
