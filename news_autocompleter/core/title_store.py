# title_store.py
# Title sources for the suggestion merger:
#  - MongoTitleStore: article titles in a MongoDB collection (the news app's `news` collection)
#  - InMemoryTitleStore: list-backed, for development and tests

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional

from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from news_autocompleter.utils.logger_utils import log


class TitleStoreError(Exception):
    """A title lookup failed (timeout, connection problem, bad document)."""


def _dedupe(titles: Iterable[str], limit: int) -> List[str]:
    seen = set()
    out: List[str] = []
    for t in titles:
        if t in seen:
            continue
        seen.add(t)
        out.append(t)
        if len(out) >= limit:
            break
    return out


class MongoTitleStore:
    """
    Prefix lookup over a pymongo collection.
    Matches with an anchored, case-insensitive regex on the escaped prefix and
    projects only the title field. `max_time_ms` bounds the query server-side.
    """

    def __init__(
        self,
        collection: Any,
        field: str = "title",
        max_time_ms: int = 1000,
        client: Optional[MongoClient] = None,
    ) -> None:
        self.collection = collection
        self.field = field
        self.max_time_ms = int(max_time_ms)
        self._client = client

    @classmethod
    def from_uri(
        cls,
        uri: str,
        collection: str = "news",
        field: str = "title",
        timeout_s: float = 1.0,
        default_db: str = "newsapp",
    ) -> "MongoTitleStore":
        """
        Open a client for `uri`. pymongo connects lazily, so an unreachable
        server surfaces later as TitleStoreError from find_prefix.
        """
        ms = max(1, int(timeout_s * 1000))
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=ms,
            connectTimeoutMS=ms,
            socketTimeoutMS=ms,
        )
        db = client.get_default_database(default=default_db)
        log.info(f"[MongoTitleStore] using {db.name}.{collection}")
        return cls(db[collection], field=field, max_time_ms=ms, client=client)

    def query_filter(self, prefix: str) -> Dict[str, Any]:
        return {self.field: {"$regex": "^" + re.escape(prefix), "$options": "i"}}

    def find_prefix(self, prefix: str, limit: int) -> List[str]:
        if not prefix or limit <= 0:
            return []
        try:
            cursor = (
                self.collection.find(self.query_filter(prefix), {self.field: 1, "_id": 0})
                .limit(limit)
                .max_time_ms(self.max_time_ms)
            )
            docs = list(cursor)
        except (PyMongoError, BSONError) as e:
            raise TitleStoreError(f"title lookup failed: {e}") from e

        titles = []
        for doc in docs:
            title = doc.get(self.field) if isinstance(doc, dict) else None
            if not isinstance(title, str):
                raise TitleStoreError(f"malformed title document: {doc!r}")
            titles.append(title)
        return _dedupe(titles, limit)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


class InMemoryTitleStore:
    """Titles held in a list; order of insertion is the store order."""

    def __init__(self, titles: Iterable[str] = ()) -> None:
        self.titles: List[str] = [t.strip() for t in titles if t and t.strip()]

    @classmethod
    def from_file(cls, path: str) -> "InMemoryTitleStore":
        """One title per line. Unlike the word list, a missing file is an error."""
        with open(path, "r", encoding="utf-8") as f:
            return cls(f)

    def find_prefix(self, prefix: str, limit: int) -> List[str]:
        if not prefix or limit <= 0:
            return []
        p = prefix.casefold()
        return _dedupe((t for t in self.titles if t.casefold().startswith(p)), limit)

    def close(self) -> None:
        pass
