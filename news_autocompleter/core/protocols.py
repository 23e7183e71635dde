# news_autocompleter/core/protocols.py
"""
Protocol interfaces for the collaborators of the SuggestionMerger.

The merger depends on these rather than on concrete classes so tests can pass
simple fakes and the service can swap MongoDB for an in-memory store.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from typing_extensions import Literal

Source = Literal["dictionary", "title"]


@runtime_checkable
class PrefixIndexProtocol(Protocol):
    """Read-only prefix index (DictionaryIndex)."""

    def query(self, prefix: str, limit: int = 10) -> List[str]:
        """Return up to `limit` completions of `prefix`."""
        ...


@runtime_checkable
class TitleStoreProtocol(Protocol):
    """Persistent collection of article titles."""

    def find_prefix(self, prefix: str, limit: int) -> List[str]:
        """
        Return up to `limit` distinct titles that start with `prefix`,
        compared case-insensitively. Titles keep their stored casing.
        Raise TitleStoreError when the lookup fails.
        """
        ...
