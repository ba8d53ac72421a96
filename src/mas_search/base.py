from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from mas_search.errors import DecodeError


@dataclass(frozen=True)
class SearchResult:
    track_id: int
    track_name: str
    version: str = ""
    price: float | None = None
    formatted_price: str | None = None
    seller_name: str | None = None
    track_view_url: str | None = None
    bundle_id: str | None = None
    release_date: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> SearchResult:
        if not isinstance(payload, dict):
            raise DecodeError("Catalog entry is not an object.")

        track_id = payload.get("trackId")
        track_name = payload.get("trackName")
        # bool is an int subclass; reject it explicitly
        if not isinstance(track_id, int) or isinstance(track_id, bool):
            raise DecodeError("Catalog entry is missing a numeric trackId.")
        if not isinstance(track_name, str):
            raise DecodeError("Catalog entry is missing trackName.")

        price = payload.get("price")
        return cls(
            track_id=track_id,
            track_name=track_name,
            version=_as_str(payload.get("version")) or "",
            price=float(price) if isinstance(price, int | float) else None,
            formatted_price=_as_str(payload.get("formattedPrice")),
            seller_name=_as_str(payload.get("sellerName")),
            track_view_url=_as_str(payload.get("trackViewUrl")),
            bundle_id=_as_str(payload.get("bundleId")),
            release_date=_as_str(payload.get("currentVersionReleaseDate")),
        )


LookupCompletion = Callable[[SearchResult | None, Exception | None], None]
SearchCompletion = Callable[[list[SearchResult] | None, Exception | None], None]


@runtime_checkable
class StoreSearch(Protocol):
    """Catalog search provider.

    Both operations return immediately and report their outcome by calling
    ``completion`` exactly once, with either a value or an error.
    """

    def lookup_async(self, app_id: int, completion: LookupCompletion) -> None: ...

    def search_async(self, app_name: str, completion: SearchCompletion) -> None: ...


def _as_str(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None
