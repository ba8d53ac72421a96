from __future__ import annotations


class StoreSearchError(Exception):
    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


class SearchTransportError(StoreSearchError):
    def __init__(self, user_message: str, *, status_code: int | None = None) -> None:
        super().__init__(user_message)
        self.status_code = status_code


class DecodeError(StoreSearchError):
    pass


class InvalidQueryError(StoreSearchError):
    pass


class CompletionProtocolError(StoreSearchError):
    """Provider completed without delivering a value or an error."""


class SearchTimeoutError(StoreSearchError):
    """Bounded wait expired; the provider call may still be running."""
