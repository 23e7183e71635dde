# news_autocompleter/core/merger.py
"""
SuggestionMerger - builds the search-box autocomplete list.

For a typed query it:
 - trims the input (empty -> [] without touching either source)
 - asks the DictionaryIndex for up to `dict_limit` completions
 - asks the title store for up to `title_limit` article titles with the same prefix
 - merges dictionary hits first, then titles, dropping exact duplicates
 - caps the list at `max_suggestions`

The title lookup runs on a thread pool while the dictionary is walked in the
calling thread, and is bounded by `title_timeout`. A failing or slow store
only costs the title part of the answer.

Dictionary hits are lowercase and titles keep their stored casing, so "cat"
and "Cat" are two different suggestions.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Iterable, List, Optional, Tuple

from news_autocompleter.core.protocols import (
    PrefixIndexProtocol,
    Source,
    TitleStoreProtocol,
)
from news_autocompleter.utils.logger_utils import log
from news_autocompleter.utils.threaded_runner import make_pool, wait_result

Suggestion = Tuple[str, Source]


def merge_unique(*sources: Iterable[Suggestion], limit: int) -> List[Suggestion]:
    """
    Concatenate sources in order, keep the first occurrence of each string,
    stop at `limit` entries.
    """
    seen = set()
    out: List[Suggestion] = []
    if limit <= 0:
        return out
    for src in sources:
        for text, origin in src:
            if text in seen:
                continue
            seen.add(text)
            out.append((text, origin))
            if len(out) >= limit:
                return out
    return out


class SuggestionMerger:
    """
    Stateless between calls; safe to share across request threads.

    Public API:
      - suggest(raw_query) -> List[str]
      - suggest_with_sources(raw_query) -> List[(str, source)]
      - asuggest(raw_query) -> List[str]  (coroutine)
      - close()
    """

    def __init__(
        self,
        index: Optional[PrefixIndexProtocol],
        store: Optional[TitleStoreProtocol] = None,
        dict_limit: int = 10,
        title_limit: int = 5,
        max_suggestions: int = 10,
        title_timeout: float = 1.0,
        pool: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self.index = index
        self.store = store
        self.dict_limit = int(dict_limit)
        self.title_limit = int(title_limit)
        self.max_suggestions = int(max_suggestions)
        self.title_timeout = float(title_timeout)
        self._own_pool = pool is None
        self._pool = pool or make_pool(name="title-store")

    @classmethod
    def from_config(cls, cfg, index, store) -> "SuggestionMerger":
        return cls(
            index,
            store,
            dict_limit=cfg["dict_limit"],
            title_limit=cfg["title_limit"],
            max_suggestions=cfg["max_suggestions"],
            title_timeout=cfg["title_timeout_s"],
        )

    # sources -----------------------------------------------------------
    def _dictionary(self, query: str) -> List[Suggestion]:
        if self.index is None:
            return []
        return [(w, "dictionary") for w in self.index.query(query, self.dict_limit)]

    def _titles(self, query: str) -> List[str]:
        # runs on the pool
        return self.store.find_prefix(query, self.title_limit)

    def _title_failed(self, query: str, err: BaseException) -> List[Suggestion]:
        if isinstance(err, (FutureTimeout, asyncio.TimeoutError)):
            log.warning(
                f"[SuggestionMerger] title lookup for {query!r} timed out after "
                f"{self.title_timeout}s; dictionary results only"
            )
        else:
            log.warning(
                f"[SuggestionMerger] title lookup for {query!r} failed: {err}; "
                "dictionary results only"
            )
        return []

    # public ---------------------------------------------------------
    def suggest_with_sources(self, raw_query: str) -> List[Suggestion]:
        query = (raw_query or "").strip()
        if not query:
            return []

        fut = self._pool.submit(self._titles, query) if self.store is not None else None
        dict_hits = self._dictionary(query)

        title_hits: List[Suggestion] = []
        if fut is not None:
            try:
                titles = wait_result(fut, self.title_timeout)
                title_hits = [(t, "title") for t in titles]
            except Exception as e:
                title_hits = self._title_failed(query, e)

        return merge_unique(dict_hits, title_hits, limit=self.max_suggestions)

    def suggest(self, raw_query: str) -> List[str]:
        return [text for text, _ in self.suggest_with_sources(raw_query)]

    async def asuggest(self, raw_query: str) -> List[str]:
        """
        Coroutine version used by the web endpoint. If the calling task is
        cancelled the pending title lookup is cancelled with it.
        """
        query = (raw_query or "").strip()
        if not query:
            return []

        pending = None
        if self.store is not None:
            loop = asyncio.get_running_loop()
            pending = loop.run_in_executor(self._pool, self._titles, query)
        dict_hits = self._dictionary(query)

        title_hits: List[Suggestion] = []
        if pending is not None:
            try:
                titles = await asyncio.wait_for(pending, self.title_timeout)
                title_hits = [(t, "title") for t in titles]
            except Exception as e:
                title_hits = self._title_failed(query, e)

        merged = merge_unique(dict_hits, title_hits, limit=self.max_suggestions)
        return [text for text, _ in merged]

    def close(self) -> None:
        if self._own_pool:
            self._pool.shutdown(wait=False)
        close = getattr(self.store, "close", None)
        if callable(close):
            close()
