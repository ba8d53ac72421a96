from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = "mas-search/0.1.0"


@dataclass(frozen=True)
class Settings:
    http_timeout_seconds: float = 10.0
    wait_timeout_seconds: float | None = None
    http2: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    max_workers: int = 4
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            http_timeout_seconds=_parse_positive_float(
                "MAS_SEARCH_HTTP_TIMEOUT_SECONDS",
                os.getenv("MAS_SEARCH_HTTP_TIMEOUT_SECONDS"),
                default=10.0,
            ),
            wait_timeout_seconds=_parse_optional_positive_float(
                "MAS_SEARCH_WAIT_TIMEOUT_SECONDS",
                os.getenv("MAS_SEARCH_WAIT_TIMEOUT_SECONDS"),
            ),
            http2=_parse_bool(os.getenv("MAS_SEARCH_HTTP2"))
            if os.getenv("MAS_SEARCH_HTTP2") is not None
            else True,
            user_agent=(os.getenv("MAS_SEARCH_USER_AGENT") or "").strip()
            or DEFAULT_USER_AGENT,
            max_workers=_parse_max_workers(os.getenv("MAS_SEARCH_MAX_WORKERS")),
            log_level=_parse_log_level(os.getenv("MAS_SEARCH_LOG_LEVEL")),
        )


def _parse_bool(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_positive_float(name: str, value: str | None, *, default: float) -> float:
    parsed = _parse_optional_positive_float(name, value)
    return default if parsed is None else parsed


def _parse_optional_positive_float(name: str, value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise RuntimeError(f"Invalid {name}: expected a number.") from exc
    if parsed <= 0:
        raise RuntimeError(f"Invalid {name}: must be greater than zero.")
    return parsed


def _parse_max_workers(value: str | None) -> int:
    if value is None or not value.strip():
        return 4
    try:
        parsed = int(value)
    except ValueError as exc:
        raise RuntimeError(
            "Invalid MAS_SEARCH_MAX_WORKERS: expected an integer."
        ) from exc
    if parsed < 1:
        raise RuntimeError("Invalid MAS_SEARCH_MAX_WORKERS: must be at least 1.")
    return parsed


def _parse_log_level(value: str | None) -> str:
    if value is None or not value.strip():
        return "WARNING"

    normalized = value.strip().upper()
    if normalized not in logging.getLevelNamesMapping():
        raise RuntimeError(
            "Invalid MAS_SEARCH_LOG_LEVEL. Expected DEBUG, INFO, WARNING, or ERROR."
        )
    return normalized
