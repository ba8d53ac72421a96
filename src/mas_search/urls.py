"""Request URLs for the iTunes Search API."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

SEARCH_URL_PREFIX = (
    "https://itunes.apple.com/search?media=software&entity=macSoftware&term="
)
LOOKUP_URL_PREFIX = "https://itunes.apple.com/lookup?id="


def search_url_string(app_name: str) -> str | None:
    """Search URL for ``app_name`` as a string, or None if it can't be encoded."""
    if not isinstance(app_name, str):
        return None
    try:
        # safe="" so "/" is escaped along with the query delimiters
        encoded_name = quote(app_name, safe="")
    except UnicodeEncodeError:
        logger.debug("Could not percent-encode app name %r", app_name)
        return None
    return f"{SEARCH_URL_PREFIX}{encoded_name}"


def search_url(app_name: str) -> httpx.URL | None:
    return _parse(search_url_string(app_name))


def lookup_url_string(app_id: int) -> str | None:
    """Lookup URL for ``app_id`` as a string, or None for a non-integer id."""
    if not isinstance(app_id, int) or isinstance(app_id, bool):
        return None
    return f"{LOOKUP_URL_PREFIX}{app_id:d}"


def lookup_url(app_id: int) -> httpx.URL | None:
    return _parse(lookup_url_string(app_id))


def _parse(url_string: str | None) -> httpx.URL | None:
    if url_string is None:
        return None
    try:
        return httpx.URL(url_string)
    except httpx.InvalidURL:
        logger.debug("Rejected malformed URL %r", url_string)
        return None
