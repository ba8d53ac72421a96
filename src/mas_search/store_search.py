"""Blocking calls on top of callback-based store search providers."""

from __future__ import annotations

import logging
import threading
from typing import Generic, TypeVar

import httpx

from mas_search import urls
from mas_search.base import SearchResult, StoreSearch
from mas_search.errors import CompletionProtocolError, SearchTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Completion(Generic[T]):
    """One-shot completion handed to a provider for a single call."""

    def __init__(self, operation: str) -> None:
        self._operation = operation
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._abandoned = False
        self.value: T | None = None
        self.error: Exception | None = None

    def __call__(self, value: T | None, error: Exception | None) -> None:
        with self._lock:
            if self._abandoned:
                logger.warning(
                    "%s completed after the caller stopped waiting; dropping outcome",
                    self._operation,
                )
                return
            if self._event.is_set():
                logger.warning(
                    "%s completed more than once; keeping the first outcome",
                    self._operation,
                )
                return
            if value is not None and error is not None:
                logger.warning(
                    "%s completed with both a value and an error", self._operation
                )
            self.value = value
            self.error = error
            self._event.set()

    def wait(self, timeout: float | None) -> tuple[T | None, Exception | None]:
        if not self._event.wait(timeout):
            with self._lock:
                # completion may have landed between the wait expiring and the lock
                if not self._event.is_set():
                    self._abandoned = True
                    raise SearchTimeoutError(
                        f"{self._operation} timed out after {timeout} seconds."
                    )
        return self.value, self.error


def lookup(
    provider: StoreSearch, app_id: int, *, timeout: float | None = None
) -> SearchResult | None:
    """Look up an app by its store id and block until the provider answers.

    Returns None when nothing matches. Errors delivered by the provider are
    raised as-is.
    """
    completion: _Completion[SearchResult] = _Completion(f"lookup({app_id})")
    provider.lookup_async(app_id, completion)
    result, error = completion.wait(timeout)
    if error is not None:
        raise error
    return result


def search(
    provider: StoreSearch, app_name: str, *, timeout: float | None = None
) -> list[SearchResult]:
    """Search apps by name and block until the provider answers.

    Returns an empty list when nothing matches. Errors delivered by the
    provider are raised as-is.
    """
    completion: _Completion[list[SearchResult]] = _Completion(
        f"search({app_name!r})"
    )
    provider.search_async(app_name, completion)
    results, error = completion.wait(timeout)
    if error is not None:
        raise error
    if results is None:
        raise CompletionProtocolError(
            f"Provider completed search({app_name!r}) without results or an error."
        )
    return results


class SyncStoreSearch:
    """Wraps any StoreSearch provider with blocking calls and URL builders."""

    def __init__(self, provider: StoreSearch, *, timeout: float | None = None) -> None:
        self._provider = provider
        self._timeout = timeout

    @property
    def provider(self) -> StoreSearch:
        return self._provider

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def lookup(self, app_id: int) -> SearchResult | None:
        return lookup(self._provider, app_id, timeout=self._timeout)

    def search(self, app_name: str) -> list[SearchResult]:
        return search(self._provider, app_name, timeout=self._timeout)

    def search_url(self, app_name: str) -> httpx.URL | None:
        return urls.search_url(app_name)

    def lookup_url(self, app_id: int) -> httpx.URL | None:
        return urls.lookup_url(app_id)
