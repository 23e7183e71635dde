"""
news_autocompleter.core

The suggestion engine behind the news search box.
Contains:
 - the static dictionary prefix index (DictionaryIndex)
 - article title sources (MongoTitleStore, InMemoryTitleStore)
 - merging of both into the final list (SuggestionMerger)
"""

from .trie import DictionaryIndex
from .title_store import InMemoryTitleStore, MongoTitleStore, TitleStoreError
from .merger import SuggestionMerger, merge_unique

__all__ = [
    "DictionaryIndex",
    "InMemoryTitleStore",
    "MongoTitleStore",
    "TitleStoreError",
    "SuggestionMerger",
    "merge_unique",
]
