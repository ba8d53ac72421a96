"""Store search provider backed by the public iTunes Search API."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from types import TracebackType
from typing import Any, TypeVar

import httpx

from mas_search import urls
from mas_search.base import LookupCompletion, SearchCompletion, SearchResult
from mas_search.config import Settings
from mas_search.errors import (
    DecodeError,
    InvalidQueryError,
    SearchTransportError,
    StoreSearchError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ITunesStoreSearch:
    """Runs catalog requests on worker threads and reports through completions."""

    def __init__(
        self,
        *,
        http_client: httpx.Client | None = None,
        settings: Settings | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            headers={"User-Agent": self._settings.user_agent},
            timeout=self._settings.http_timeout_seconds,
            follow_redirects=True,
            http2=self._settings.http2,
        )
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self._settings.max_workers,
            thread_name_prefix="mas-search",
        )
        self._lock = threading.Lock()
        self._pending: set[Future[None]] = set()
        self._closed = False

    def lookup_async(self, app_id: int, completion: LookupCompletion) -> None:
        url = urls.lookup_url(app_id)
        if url is None:
            completion(
                None, InvalidQueryError(f"Cannot build lookup URL for {app_id!r}.")
            )
            return
        self._submit(url, _first_result, completion)

    def search_async(self, app_name: str, completion: SearchCompletion) -> None:
        url = urls.search_url(app_name)
        if url is None:
            completion(
                None, InvalidQueryError(f"Cannot build search URL for {app_name!r}.")
            )
            return
        self._submit(url, _all_results, completion)

    def close(self, *, wait: bool = False) -> None:
        """Release the worker pool and the owned HTTP client.

        Requests still in flight are left to finish on their own unless
        ``wait`` is set; an owned client is closed after the last of them.
        """
        with self._lock:
            self._closed = True
            idle = not self._pending
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
        if idle or wait:
            self._close_http_client()

    def __enter__(self) -> ITunesStoreSearch:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_val: BaseException | None = None,
        exc_tb: TracebackType | None = None,
    ) -> None:
        self.close()

    def _submit(
        self,
        url: httpx.URL,
        extract: Callable[[list[SearchResult]], T],
        completion: Callable[[T | None, Exception | None], None],
    ) -> None:
        future = self._executor.submit(self._run, url, extract, completion)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: Future[None]) -> None:
        with self._lock:
            self._pending.discard(future)
            close_client = self._closed and not self._pending
        if close_client:
            self._close_http_client()

    def _close_http_client(self) -> None:
        if self._owns_http_client and not self._http_client.is_closed:
            self._http_client.close()

    def _run(
        self,
        url: httpx.URL,
        extract: Callable[[list[SearchResult]], T],
        completion: Callable[[T | None, Exception | None], None],
    ) -> None:
        value: T | None = None
        error: Exception | None = None
        try:
            value = self._load(url, extract)
        except StoreSearchError as exc:
            logger.warning("Catalog request %s failed: %s", url, exc)
            error = exc

        try:
            completion(value, error)
        except Exception:
            logger.exception("Completion for %s raised", url)

    def _load(
        self, url: httpx.URL, extract: Callable[[list[SearchResult]], T]
    ) -> T:
        try:
            return extract(self._fetch(url))
        except StoreSearchError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error while fetching %s", url)
            raise StoreSearchError(f"Store search failed: {exc}") from exc

    def _fetch(self, url: httpx.URL) -> list[SearchResult]:
        logger.debug("GET %s", url)
        try:
            response = self._http_client.get(url)
        except httpx.TimeoutException as exc:
            raise SearchTransportError("Store search timed out. Try again.") from exc
        except httpx.HTTPError as exc:
            raise SearchTransportError(f"Store search request failed: {exc}") from exc

        if response.status_code >= 400:
            raise SearchTransportError(
                f"Store search returned HTTP {response.status_code}.",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError("Store search returned invalid JSON.") from exc

        return _parse_results(data)


def _parse_results(data: Any) -> list[SearchResult]:
    # {"resultCount": n, "results": [...]}
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise DecodeError("Store search response has no results list.")
    return [SearchResult.from_payload(item) for item in data["results"]]


def _first_result(results: list[SearchResult]) -> SearchResult | None:
    return results[0] if results else None


def _all_results(results: list[SearchResult]) -> list[SearchResult]:
    return results
