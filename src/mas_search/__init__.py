from mas_search.base import SearchResult, StoreSearch
from mas_search.errors import StoreSearchError
from mas_search.itunes import ITunesStoreSearch
from mas_search.store_search import SyncStoreSearch, lookup, search

__all__ = [
    "ITunesStoreSearch",
    "SearchResult",
    "StoreSearch",
    "StoreSearchError",
    "SyncStoreSearch",
    "lookup",
    "search",
]
